"""Role hierarchy — tests for AdminRoleLevel and has_permission.

Tests cover:
    - stored role strings map to levels, unknown strings fail closed
    - super_admin includes moderator, moderator does not include super_admin
    - callers without a role never have permission
"""

import pytest

from marketplace.domain.roles import AdminRoleLevel, has_permission


def test_levels_are_ordered_by_rank():
    assert AdminRoleLevel.NONE < AdminRoleLevel.MODERATOR < AdminRoleLevel.SUPER_ADMIN


@pytest.mark.parametrize(
    "stored, expected",
    [
        ("moderator", AdminRoleLevel.MODERATOR),
        ("super_admin", AdminRoleLevel.SUPER_ADMIN),
        (None, AdminRoleLevel.NONE),
        ("", AdminRoleLevel.NONE),
        ("owner", AdminRoleLevel.NONE),
    ],
)
def test_from_role_name(stored, expected):
    assert AdminRoleLevel.from_role_name(stored) is expected


def test_role_name_round_trips_stored_strings():
    assert AdminRoleLevel.MODERATOR.role_name == "moderator"
    assert AdminRoleLevel.SUPER_ADMIN.role_name == "super_admin"
    assert AdminRoleLevel.NONE.role_name is None


def test_super_admin_has_every_permission():
    assert has_permission(AdminRoleLevel.SUPER_ADMIN, AdminRoleLevel.MODERATOR)
    assert has_permission(AdminRoleLevel.SUPER_ADMIN, AdminRoleLevel.SUPER_ADMIN)


def test_moderator_only_has_moderator_permission():
    assert has_permission(AdminRoleLevel.MODERATOR, AdminRoleLevel.MODERATOR)
    assert not has_permission(AdminRoleLevel.MODERATOR, AdminRoleLevel.SUPER_ADMIN)


@pytest.mark.parametrize("required", list(AdminRoleLevel))
def test_no_role_has_no_permission(required):
    assert not has_permission(AdminRoleLevel.NONE, required)
