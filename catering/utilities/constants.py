from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")
DELIVERY_DAYS: Final[tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)
WEEKS_PER_MONTH: Final[str] = "4.3"

STATUS_ACTIVE: Final[str] = "active"
STATUS_PAUSED: Final[str] = "paused"
STATUS_CANCELLED: Final[str] = "cancelled"
STATUSES: Final[tuple[str, ...]] = (STATUS_ACTIVE, STATUS_PAUSED, STATUS_CANCELLED)

# Indonesian mobile numbers: 08 followed by 8-11 digits
PHONE_PATTERN: Final[str] = r"^08\d{8,11}$"
NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 50
ALLERGIES_MAX_LENGTH: Final[int] = 500
TESTIMONIAL_MIN_LENGTH: Final[int] = 10
TESTIMONIAL_MAX_LENGTH: Final[int] = 500
PASSWORD_MIN_LENGTH: Final[int] = 8

CSRF_TOKEN_BYTES: Final[int] = 32

PLAN_CATALOG: Final[list[dict]] = [
    {
        "id": "diet",
        "name": "Diet Plan",
        "unit_price": 30000,
        "description": "Perfect for weight management with balanced, nutritious meals designed to support your health goals.",
        "features": ["Low calorie meals", "Balanced nutrition", "Weight management", "Fresh ingredients"],
        "default_meal_types": ["lunch", "dinner"],
        "default_delivery_days": ["monday", "wednesday", "friday"],
    },
    {
        "id": "protein",
        "name": "Protein Plan",
        "unit_price": 40000,
        "description": "High-protein meals designed for fitness enthusiasts and those looking to build muscle mass.",
        "features": ["High protein content", "Muscle building", "Post-workout meals", "Premium ingredients"],
        "default_meal_types": ["breakfast", "lunch", "dinner"],
        "default_delivery_days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
    },
    {
        "id": "royal",
        "name": "Royal Plan",
        "unit_price": 60000,
        "description": "Premium gourmet meals with the finest ingredients for the ultimate dining experience.",
        "features": ["Gourmet ingredients", "Chef-prepared", "Premium quality", "Luxury dining"],
        "default_meal_types": ["breakfast", "lunch", "dinner"],
        "default_delivery_days": list(DELIVERY_DAYS),
    },
]
