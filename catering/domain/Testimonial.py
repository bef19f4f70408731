"""Testimonial domain entity: customer review shown on the landing page once approved."""
from datetime import datetime
from typing import Optional


class Testimonial:
    def __init__(self, owner_id: str, name: str, message: str, rating: int,
                 location: Optional[str] = None, approved: bool = False,
                 created_at: Optional[datetime] = None, id: Optional[int] = None):
        self.id = id
        self.owner_id = owner_id
        self.name = name
        self.message = message
        self.rating = rating
        self.location = location
        self.approved = approved
        self.created_at = created_at

    def __str__(self) -> str:
        return f"{self.name} ({self.rating}/5){' [approved]' if self.approved else ''}: {self.message}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        if d.get("created_at") and not isinstance(d["created_at"], datetime):
            d["created_at"] = datetime.fromisoformat(d["created_at"])
        allowed = {"id", "owner_id", "name", "message", "rating", "location", "approved", "created_at"}
        return Testimonial(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "message": self.message,
            "rating": self.rating,
            "location": self.location,
            "approved": self.approved,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
