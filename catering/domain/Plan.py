"""Plan domain entity: one of the fixed meal-subscription tiers with its per-meal price."""
from typing import List, Optional
from catering.utilities.constants import PLAN_CATALOG


class Plan:
    def __init__(self, id: str, name: str, unit_price: int, description: str = "",
                 features: Optional[List[str]] = None, default_meal_types: Optional[List[str]] = None,
                 default_delivery_days: Optional[List[str]] = None):
        self.id = id
        self.name = name
        self.unit_price = unit_price
        self.description = description
        self.features = features[:] if features else []
        self.default_meal_types = default_meal_types[:] if default_meal_types else []
        self.default_delivery_days = default_delivery_days[:] if default_delivery_days else []

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - {self.unit_price} per meal"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return Plan(**dict(data))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "unit_price": self.unit_price,
            "description": self.description,
            "features": self.features,
            "default_meal_types": self.default_meal_types,
            "default_delivery_days": self.default_delivery_days,
        }


_PLANS = {entry["id"]: Plan.from_dict(entry) for entry in PLAN_CATALOG}


def get_plan(plan_id) -> Optional[Plan]:
    if not isinstance(plan_id, str):
        return None
    return _PLANS.get(plan_id)


def list_plans() -> List[Plan]:
    return list(_PLANS.values())
