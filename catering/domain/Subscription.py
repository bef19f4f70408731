"""Subscription domain entity: a customer's plan selection, snapshot price and lifecycle status.

Status transitions (anything else raises InvalidTransitionError and leaves the entity untouched):

    active    --pause(start, end)--> paused
    paused    --resume()-----------> active
    active    --cancel()-----------> cancelled
    paused    --cancel()-----------> cancelled
    cancelled --reactivate()-------> active

The price is a snapshot taken at creation and no transition recomputes it.
Pauses never end on their own; a paused subscription stays paused until resumed.
"""
from datetime import date, datetime
from typing import List, Optional

from catering.domain.errors import InvalidTransitionError, ValidationError
from catering.utilities.constants import STATUS_ACTIVE, STATUS_PAUSED, STATUS_CANCELLED


def _parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class Subscription:
    def __init__(self, owner_id: str, name: str, phone: str, plan: str,
                 meal_types: Optional[List[str]] = None, delivery_days: Optional[List[str]] = None,
                 total_price: int = 0, created_at: Optional[datetime] = None,
                 allergies: Optional[str] = None, status: str = STATUS_ACTIVE,
                 pause_start: Optional[date] = None, pause_end: Optional[date] = None,
                 cancelled_at: Optional[datetime] = None, reactivated_at: Optional[datetime] = None,
                 id: Optional[int] = None, version: int = 1, updated_at: Optional[datetime] = None):
        self.id = id
        self.owner_id = owner_id
        self.name = name
        self.phone = phone
        self.plan = plan
        self.meal_types = meal_types[:] if meal_types else []
        self.delivery_days = delivery_days[:] if delivery_days else []
        self.allergies = allergies
        self.total_price = total_price
        self.status = status
        self.pause_start = pause_start
        self.pause_end = pause_end
        self.cancelled_at = cancelled_at
        self.reactivated_at = reactivated_at
        self.created_at = created_at
        self.updated_at = updated_at or created_at
        self.version = version

    def __str__(self) -> str:
        return f"Subscription #{self.id} [{self.status}] {self.plan} - owner {self.owner_id} - {self.total_price}"

    __repr__ = __str__

    # --- State machine ---------------------------------------------------
    def _reject(self, requested: str):
        raise InvalidTransitionError(self.status, requested)

    def pause(self, start: date, end: date, today: date):
        if self.status != STATUS_ACTIVE:
            self._reject(STATUS_PAUSED)
        errors = {}
        if start is None or end is None:
            errors["pause_dates"] = "Please select both start and end dates for the pause period"
        elif start >= end:
            errors["pause_end"] = "End date must be after start date"
        elif start < today:
            errors["pause_start"] = "Pause cannot start in the past"
        if errors:
            raise ValidationError("Invalid pause period", errors)
        self.status = STATUS_PAUSED
        self.pause_start = start
        self.pause_end = end

    def resume(self):
        if self.status != STATUS_PAUSED:
            self._reject(STATUS_ACTIVE)
        self.status = STATUS_ACTIVE
        self.pause_start = None
        self.pause_end = None

    def cancel(self, now: datetime):
        if self.status not in (STATUS_ACTIVE, STATUS_PAUSED):
            self._reject(STATUS_CANCELLED)
        self.status = STATUS_CANCELLED
        self.cancelled_at = now
        self.pause_start = None
        self.pause_end = None

    def reactivate(self, now: datetime):
        if self.status != STATUS_CANCELLED:
            self._reject(STATUS_ACTIVE)
        self.status = STATUS_ACTIVE
        self.reactivated_at = now
        self.cancelled_at = None

    # --- Serialization ---------------------------------------------------
    @staticmethod
    def from_dict(data):
        d = dict(data)
        allowed = {"id", "owner_id", "name", "phone", "plan", "meal_types", "delivery_days", "allergies",
                   "total_price", "status", "pause_start", "pause_end", "cancelled_at", "reactivated_at",
                   "created_at", "updated_at", "version"}
        d = {k: v for k, v in d.items() if k in allowed}
        for key in ("pause_start", "pause_end"):
            d[key] = _parse_date(d.get(key))
        for key in ("cancelled_at", "reactivated_at", "created_at", "updated_at"):
            d[key] = _parse_datetime(d.get(key))
        return Subscription(**d)

    def to_dict(self):
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "phone": self.phone,
            "plan": self.plan,
            "meal_types": self.meal_types,
            "delivery_days": self.delivery_days,
            "allergies": self.allergies,
            "total_price": self.total_price,
            "status": self.status,
            "pause_start": _iso(self.pause_start),
            "pause_end": _iso(self.pause_end),
            "cancelled_at": _iso(self.cancelled_at),
            "reactivated_at": _iso(self.reactivated_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "version": self.version,
        }
