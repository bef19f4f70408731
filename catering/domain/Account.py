"""Account domain entity: login identity, role and salted password hash."""
from datetime import datetime
from typing import Optional

from catering.domain.Caller import CallerContext, ROLE_USER


class Account:
    def __init__(self, id: str, email: str, full_name: str, password_hash: str,
                 role: str = ROLE_USER, created_at: Optional[datetime] = None):
        self.id = id
        self.email = email
        self.full_name = full_name
        self.password_hash = password_hash
        self.role = role
        self.created_at = created_at

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}> ({self.role})"

    __repr__ = __str__

    def to_caller(self) -> CallerContext:
        return CallerContext(account_id=self.id, role=self.role, full_name=self.full_name, email=self.email)

    @staticmethod
    def from_dict(data):
        d = dict(data)
        if d.get("created_at") and not isinstance(d["created_at"], datetime):
            d["created_at"] = datetime.fromisoformat(d["created_at"])
        allowed = {"id", "email", "full_name", "password_hash", "role", "created_at"}
        return Account(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "password_hash": self.password_hash,
            "role": self.role,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def public_dict(self):
        d = self.to_dict()
        d.pop("password_hash")
        return d
