"""
Input validation schemas using Pydantic. Free-text fields are sanitized before
their length and format constraints are checked.
"""
import re
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catering.domain.Plan import get_plan
from catering.domain.errors import ValidationError
from catering.utilities import sanitize
from catering.utilities.constants import (
    ALLERGIES_MAX_LENGTH, DELIVERY_DAYS, MEAL_TYPES, NAME_MAX_LENGTH, NAME_MIN_LENGTH,
    PHONE_PATTERN, TESTIMONIAL_MAX_LENGTH, TESTIMONIAL_MIN_LENGTH,
)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _selection(values, allowed, label):
    """Sanitize a multi-select, dropping duplicates and rejecting unknown ids."""
    if values is None:
        values = []
    if isinstance(values, str):
        values = [values]
    cleaned = []
    for v in sanitize.string_array(values):
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"Unknown {label}: {v}")
        if v not in cleaned:
            cleaned.append(v)
    if not cleaned:
        raise ValueError(f"Please select at least one {label}")
    return cleaned


class SubscriptionInput(BaseModel):
    """Checkout form for a new subscription."""
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    phone: str
    plan: str
    meal_types: List[str]
    delivery_days: List[str]
    allergies: Optional[str] = Field(None, max_length=ALLERGIES_MAX_LENGTH)

    @field_validator('name', mode='before')
    @classmethod
    def clean_name(cls, v):
        return sanitize.text(v) if isinstance(v, str) else v

    @field_validator('phone', mode='before')
    @classmethod
    def clean_phone(cls, v):
        return sanitize.phone(v) if isinstance(v, str) else v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if not re.match(PHONE_PATTERN, v):
            raise ValueError('Please enter a valid Indonesian phone number (08xxxxxxxxx)')
        return v

    @field_validator('plan', mode='before')
    @classmethod
    def validate_plan(cls, v):
        v = sanitize.text(v).lower() if isinstance(v, str) else v
        if get_plan(v) is None:
            raise ValueError('Please select a meal plan')
        return v

    @field_validator('meal_types', mode='before')
    @classmethod
    def validate_meal_types(cls, v):
        return _selection(v, MEAL_TYPES, 'meal type')

    @field_validator('delivery_days', mode='before')
    @classmethod
    def validate_delivery_days(cls, v):
        return _selection(v, DELIVERY_DAYS, 'delivery day')

    @field_validator('allergies', mode='before')
    @classmethod
    def clean_allergies(cls, v):
        if v is None:
            return None
        cleaned = sanitize.text(v) if isinstance(v, str) else v
        return cleaned or None


class QuoteInput(BaseModel):
    """Live price quote. Never rejected: incomplete selections simply quote 0."""
    plan: str = ""
    meal_types: List[str] = Field(default_factory=list)
    delivery_days: List[str] = Field(default_factory=list)


class PauseInput(BaseModel):
    start_date: date
    end_date: date


class StatusUpdateInput(BaseModel):
    status: Literal['active', 'paused', 'cancelled']
    pause_start: Optional[date] = None
    pause_end: Optional[date] = None


class TestimonialInput(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    message: str = Field(..., min_length=TESTIMONIAL_MIN_LENGTH, max_length=TESTIMONIAL_MAX_LENGTH)
    rating: int = Field(5, ge=1, le=5)
    location: Optional[str] = Field(None, max_length=100)

    @field_validator('name', 'message', 'location', mode='before')
    @classmethod
    def clean_text(cls, v):
        return sanitize.text(v) if isinstance(v, str) else v


class SignInInput(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, v):
        v = sanitize.email(v) if isinstance(v, str) else v
        if not isinstance(v, str) or not EMAIL_PATTERN.match(v):
            raise ValueError('Please enter a valid email address')
        return v


class SignUpInput(SignInInput):
    full_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)

    @field_validator('full_name', mode='before')
    @classmethod
    def clean_full_name(cls, v):
        return sanitize.text(v) if isinstance(v, str) else v


def field_errors_from(errors: List[Dict[str, Any]]) -> Dict[str, str]:
    """Flatten pydantic error dicts into {field: message} (first message per field wins)."""
    result: Dict[str, str] = {}
    for err in errors:
        loc = [str(p) for p in err.get('loc', ()) if p not in ('body', 'query', 'path')]
        field = loc[0] if loc else '__root__'
        msg = str(err.get('msg', 'Invalid value'))
        if msg.startswith('Value error, '):
            msg = msg[len('Value error, '):]
        result.setdefault(field, msg)
    return result


def validate_input(model_cls, data):
    """Return a validated model instance, raising the service ValidationError on failure."""
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Please correct the highlighted fields", field_errors_from(e.errors())) from e
