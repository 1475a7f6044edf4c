
from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid

from todo_api.database import UserRecord


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass
class User:
    """User entity for authentication."""

    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, name: str, email: str, password_hash: str) -> "User":
        """Create a new user with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=_utcnow(),
        )

    def to_record(self) -> UserRecord:
        """Convert user to a row for the users table."""
        return UserRecord(
            id=self.id,
            name=self.name,
            email=self.email,
            password_hash=self.password_hash,
            created_at=self.created_at,
        )

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        """Create user from a users table row."""
        return cls(
            id=record.id,
            name=record.name,
            email=record.email,
            password_hash=record.password_hash,
            created_at=record.created_at,
        )
