"""
Todo API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from pydantic import BaseModel


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    name: str
    email: str
    password: str


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: str
    password: str


class UserResponse(BaseModel):
    """Public user information. The password hash is never included."""

    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    """Response schema for successful registration or login."""

    user: UserResponse
    token: str
