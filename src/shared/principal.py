"""The resolved identity of a request, passed into ledger operations.

The Identity context produces a Principal from a verified session token.
The Ordering context trusts it as-is and never parses credentials itself.
"""

from dataclasses import dataclass
from enum import Enum

from shared.errors import Forbidden


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"


@dataclass(frozen=True)
class Principal:
    """Capability object: who is calling and in which role."""

    user_id: str
    role: Role
    email: str | None = None
    full_name: str | None = None

    @property
    def is_buyer(self) -> bool:
        return self.role == Role.BUYER

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER

    def require(self, role: Role, action: str = "perform this action") -> None:
        """Raise Forbidden unless the principal holds ``role``."""
        if self.role != role:
            raise Forbidden(f"Only {role.value}s can {action}", required_role=role.value)
