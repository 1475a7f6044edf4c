import logging
from typing import Optional

import bcrypt

from todo_api.auth.models import User
from todo_api.auth.repository import DuplicateEmailError, UserRepositoryInterface
from todo_api.auth.tokens import TokenService

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class AuthService:
    """Authentication service with password hashing and token issuance."""

    def __init__(self, repository: UserRepositoryInterface, tokens: TokenService):
        self.repository = repository
        self.tokens = tokens

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        hashed_bytes = hashed_password.encode("utf-8")
        try:
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except ValueError:
            return False

    async def register_user(self, name: str, email: str, password: str) -> Optional[User]:
        """Register a new user. Returns None if the email is taken."""
        if await self.repository.exists_by_email(email):
            logger.warning(f"[AuthService] Duplicate registration attempt for email={email}")
            return None

        password_hash = self.hash_password(password)
        user = User.create(name=name, email=email, password_hash=password_hash)
        try:
            created = await self.repository.create(user)
        except DuplicateEmailError:
            # Lost a race with a concurrent registration for the same email.
            return None
        logger.info(f"[AuthService] Registered user id={created.id} email={created.email}")
        return created

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user by email and password."""
        user = await self.repository.get_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("[AuthService] Failed login attempt")
            return None
        return user

    def issue_token(self, user: User) -> str:
        return self.tokens.issue_token(user)

    def decode_token(self, token: str) -> Optional[str]:
        return self.tokens.validate_token(token)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return await self.repository.get_by_id(user_id)
