"""Listing status state machine.

    pending  -> approved | rejected     (moderator or above)
    approved -> sold                    (seller only)
    rejected -> pending                 (seller resubmits)
    any      -> pending                 (moderator or above)
    sold is terminal for everyone else.
"""

from enum import Enum

from marketplace.core.exceptions import InvalidTransitionError, PermissionDeniedError
from marketplace.domain.roles import AdminRoleLevel, has_permission


class ListingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SOLD = "sold"


INITIAL_STATUS = ListingStatus.PENDING

ALLOWED_TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.PENDING: frozenset({ListingStatus.APPROVED, ListingStatus.REJECTED}),
    ListingStatus.APPROVED: frozenset({ListingStatus.SOLD}),
    ListingStatus.REJECTED: frozenset({ListingStatus.PENDING}),
    ListingStatus.SOLD: frozenset(),
}


def check_status_change(
    current: ListingStatus,
    target: ListingStatus,
    *,
    is_seller: bool,
    caller_level: AdminRoleLevel,
) -> None:
    """Raise unless the caller may move a listing from `current` to `target`.

    Ownership and role are checked before the transition table, so a caller
    who could never trigger `target` gets PermissionDeniedError rather than
    InvalidTransitionError.
    """
    is_moderator = has_permission(caller_level, AdminRoleLevel.MODERATOR)

    if target is ListingStatus.SOLD:
        if not is_seller:
            raise PermissionDeniedError("Only the seller can mark their listing as sold")
    elif target in (ListingStatus.APPROVED, ListingStatus.REJECTED):
        if not is_moderator:
            raise PermissionDeniedError("Only admins can approve or reject listings")
    elif target is ListingStatus.PENDING:
        if not (is_seller or is_moderator):
            raise PermissionDeniedError("Only the seller or an admin can move a listing back to pending")
        if is_moderator and current is not ListingStatus.PENDING:
            return

    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(
            f"Cannot change listing status from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )
