"""Auth API routes — login, register, me."""

from fastapi import APIRouter, Depends, HTTPException, status

from marketplace.application.services.auth_service import (
    authenticate_user,
    create_access_token,
    register_user,
)
from marketplace.domain.models.user import User
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.domain.schemas.auth import LoginRequest, TokenResponse, UserCreate, UserRead
from marketplace.interfaces.api.deps import get_current_user
from marketplace.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(repo, body.email, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    access_token = create_access_token(data={"sub": user.email})

    return TokenResponse(
        access_token=access_token,
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, repo: UserRepository = Depends(get_user_repository)):
    user = register_user(repo, name=body.name, email=body.email, password=body.password)
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)
