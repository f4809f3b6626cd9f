"""Auth service — JWT token management, password hashing and registration."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext

from marketplace.config import get_settings
from marketplace.core.exceptions import BusinessRuleViolationError
from marketplace.domain.models.user import User
from marketplace.domain.repositories.user_repository import UserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def authenticate_user(repo: UserRepository, email: str, password: str) -> Optional[User]:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        return None
    return user


def register_user(repo: UserRepository, name: str, email: str, password: str) -> User:
    if repo.get_by_email(email):
        raise BusinessRuleViolationError("Email already registered", details={"email": email})

    user = repo.create(
        {
            "name": name.strip(),
            "email": email.strip().lower(),
            "password_hash": hash_password(password),
        }
    )
    logger.info("User registered", user_id=user.id)
    return user
