"""FastAPI dependency — JWT bearer authentication."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from marketplace.application.services.auth_service import decode_access_token
from marketplace.domain.models.user import User
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.interfaces.deps import get_user_repository

security = HTTPBearer(auto_error=False)


def _user_from_token(token: str, repo: UserRepository) -> Optional[User]:
    payload = decode_access_token(token)
    if payload is None:
        return None

    email = payload.get("sub")
    if not email:
        return None

    user = repo.get_by_email(email)
    if user is None or not user.is_active:
        return None
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Extract and validate the current user from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _user_from_token(credentials.credentials, repo)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> Optional[User]:
    """Current user when a valid token is sent, otherwise None."""
    if credentials is None:
        return None
    return _user_from_token(credentials.credentials, repo)


def user_id_of(user: Optional[User]) -> Optional[int]:
    return user.id if user else None
