"""User aggregate — a marketplace account acting either as buyer or seller."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String
from shared.principal import Principal, Role

from identity.domain import identity
from identity.user.events import UserRegistered


class UserRole(Enum):
    """The role is fixed at registration and never changes."""

    BUYER = "buyer"
    SELLER = "seller"


@identity.aggregate
class User:
    email: String(required=True, max_length=254, unique=True, sanitize=False)
    password_hash: String(required=True, max_length=255)
    role: String(required=True, choices=UserRole)
    full_name: String(required=True, max_length=255, sanitize=False)
    created_at: DateTime()

    @classmethod
    def register(cls, email, password_hash, role, full_name):
        now = datetime.now(UTC)
        user = cls(
            email=email,
            password_hash=password_hash,
            role=role,
            full_name=full_name,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=email,
                role=role,
                full_name=full_name,
                registered_at=now,
            )
        )
        return user

    def to_principal(self) -> Principal:
        return Principal(
            user_id=str(self.id),
            role=Role(self.role),
            email=self.email,
            full_name=self.full_name,
        )

    def public_view(self):
        """Public representation. Never includes the password hash."""
        return {
            "id": str(self.id),
            "email": self.email,
            "user_type": self.role,
            "full_name": self.full_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        users = self._dao.query.filter(email=email).all().items
        return users[0] if users else None
