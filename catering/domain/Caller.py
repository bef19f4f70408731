"""Authenticated caller identity passed explicitly into every service call."""
from dataclasses import dataclass

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class CallerContext:
    account_id: str
    role: str = ROLE_USER
    full_name: str = ""
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def can_manage(self, owner_id: str) -> bool:
        """Owners manage their own records; admins manage every record."""
        return self.is_admin or self.account_id == owner_id
