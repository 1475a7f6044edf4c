"""
Todo API - Authentication Router

Endpoints for user registration and login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from todo_api.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    UserResponse,
    AuthResponse,
)
from todo_api.auth.models import User
from todo_api.auth.service import AuthService
from todo_api.auth.dependencies import get_auth_service


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        user=UserResponse(id=user.id, name=user.name, email=user.email),
        token=token,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Register a new user and return the user summary with an access token.
    """
    user = await auth_service.register_user(
        name=request.name,
        email=request.email,
        password=request.password,
    )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    return _auth_response(user, auth_service.issue_token(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and get access token",
)
async def login(
    request: UserLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate user and return an access token.

    Use the returned token in the Authorization header:
    `Authorization: Bearer <token>`
    """
    user = await auth_service.authenticate_user(
        email=request.email,
        password=request.password,
    )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    return _auth_response(user, auth_service.issue_token(user))
