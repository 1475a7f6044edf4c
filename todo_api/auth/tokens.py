"""
Todo API - Token Service

Issues and validates HS256-signed bearer tokens carrying the user's id
(``sub``) and email. Tokens are stateless; there is no revocation list.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import jwt, JWTError

from todo_api.auth.models import User
from todo_api.config import Settings


class TokenService:
    """Signs and verifies access tokens with a symmetric key."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            secret_key: Symmetric signing key
            algorithm: JWS algorithm name
            expire_minutes: Validity window of issued tokens
            clock: Optional clock function for testing (returns current datetime)
        """
        if not secret_key:
            raise ValueError("A signing key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = timedelta(minutes=expire_minutes)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "TokenService":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
            clock=clock,
        )

    def _now(self) -> datetime:
        return self._clock()

    def create_access_token(
        self,
        user_id: str,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Create a JWT access token."""
        if expires_delta is None:
            expires_delta = self.expire_delta

        now = self._now()
        to_encode = {
            "sub": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def issue_token(self, user: User) -> str:
        """Issue a token for a user with the configured validity window."""
        return self.create_access_token(user_id=user.id, email=user.email)

    def decode_token(self, token: str) -> Optional[str]:
        """Decode and validate a JWT token. Returns user_id if valid."""
        try:
            # Expiry is checked against our own clock below.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return None

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            return None
        if self._now().timestamp() >= exp:
            return None

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            return None
        return user_id

    validate_token = decode_token
