from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_session
from todo_api.auth.models import User
from todo_api.auth.service import AuthService
from todo_api.auth.repository import SqlUserRepository, UserRepositoryInterface
from todo_api.auth.tokens import TokenService


# HTTP Bearer token scheme - auto_error=False to handle missing tokens ourselves
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Dependency returning the application's token service."""
    return request.app.state.token_service


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)]
) -> UserRepositoryInterface:
    """Dependency to get user repository instance."""
    return SqlUserRepository(session)


def get_auth_service(
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(repository, tokens)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    user_id = auth_service.decode_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = await auth_service.get_user_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
