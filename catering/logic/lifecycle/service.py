"""Subscription lifecycle: creation, listing and status transitions.

Every operation takes the caller explicitly. Authentication and ownership are
checked before any state-machine rule, so an outsider always gets an
authorization error, never a hint about the record's state. Saves are
compare-and-swap on the record version; a conflict is reported to the caller
and not retried.
"""
from __future__ import annotations
import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from catering.domain.Caller import CallerContext
from catering.domain.Subscription import Subscription
from catering.domain.errors import AuthenticationError, AuthorizationError, InvalidTransitionError, ValidationError
from catering.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from catering.events.event_helpers import publish_status_changed, publish_subscription_created
from catering.infra.Subscription_Repository import SubscriptionRepository
from catering.logic.pricing.calculator import compute_price
from catering.utilities.constants import STATUS_ACTIVE, STATUS_CANCELLED, STATUS_PAUSED
from catering.utilities.validators import SubscriptionInput, validate_input

logger = logging.getLogger(__name__)

__all__ = ["SubscriptionService", "utc_now"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_caller(caller: Optional[CallerContext]) -> CallerContext:
    if caller is None:
        raise AuthenticationError()
    return caller


class SubscriptionService:
    def __init__(self, repository: SubscriptionRepository, clock: Callable[[], datetime] = utc_now,
                 event_bus: Optional[EventBus] = None):
        self.repository = repository
        self.clock = clock
        self.event_bus = event_bus or GLOBAL_EVENT_BUS

    # --- Creation & reads -------------------------------------------------
    def create(self, caller: Optional[CallerContext], data) -> Subscription:
        caller = require_caller(caller)
        form = validate_input(SubscriptionInput, data)
        total = compute_price(form.plan, form.meal_types, form.delivery_days)
        if total <= 0:
            # validated selections always price above zero; guard the invariant anyway
            raise ValidationError("Incomplete plan selection", {"plan": "Please complete your plan selection"})
        now = self.clock()
        subscription = Subscription(
            owner_id=caller.account_id,
            name=form.name,
            phone=form.phone,
            plan=form.plan,
            meal_types=form.meal_types,
            delivery_days=form.delivery_days,
            allergies=form.allergies,
            total_price=total,
            status=STATUS_ACTIVE,
            created_at=now,
        )
        subscription = self.repository.add(subscription)
        publish_subscription_created(subscription, caller.account_id, bus=self.event_bus)
        return subscription

    def get(self, caller: Optional[CallerContext], subscription_id: int) -> Subscription:
        caller = require_caller(caller)
        subscription = self.repository.get(subscription_id)
        if not caller.can_manage(subscription.owner_id):
            logger.warning("Account %s denied access to subscription %s", caller.account_id, subscription_id)
            raise AuthorizationError()
        return subscription

    def list(self, caller: Optional[CallerContext]) -> List[Subscription]:
        """Own subscriptions, or every subscription for an admin. Newest first, unpaginated."""
        caller = require_caller(caller)
        if caller.is_admin:
            return self.repository.list_all()
        return self.repository.list_by_owner(caller.account_id)

    # --- Transitions -------------------------------------------------------
    def _transition(self, caller, subscription_id: int, apply: Callable[[Subscription], None]) -> Subscription:
        subscription = self.get(caller, subscription_id)
        loaded_version = subscription.version
        from_status = subscription.status
        apply(subscription)
        subscription.updated_at = self.clock()
        saved = self.repository.save(subscription, expected_version=loaded_version)
        logger.info("Subscription %s: %s -> %s by %s", saved.id, from_status, saved.status, caller.account_id)
        publish_status_changed(saved, caller.account_id, from_status, bus=self.event_bus)
        return saved

    def pause(self, caller, subscription_id: int, start: date, end: date) -> Subscription:
        today = self.clock().date()
        return self._transition(caller, subscription_id, lambda s: s.pause(start, end, today))

    def resume(self, caller, subscription_id: int) -> Subscription:
        return self._transition(caller, subscription_id, lambda s: s.resume())

    def cancel(self, caller, subscription_id: int) -> Subscription:
        now = self.clock()
        return self._transition(caller, subscription_id, lambda s: s.cancel(now))

    def reactivate(self, caller, subscription_id: int) -> Subscription:
        now = self.clock()
        return self._transition(caller, subscription_id, lambda s: s.reactivate(now))

    def update_status(self, caller, subscription_id: int, new_status: str,
                      pause_start: Optional[date] = None, pause_end: Optional[date] = None) -> Subscription:
        """Move a subscription to new_status through the transition legal from its current status.

        Admin overrides go through the same table; being an admin only lifts the ownership check.
        """
        current = self.get(caller, subscription_id).status
        if current == STATUS_ACTIVE and new_status == STATUS_PAUSED:
            return self.pause(caller, subscription_id, pause_start, pause_end)
        if current == STATUS_PAUSED and new_status == STATUS_ACTIVE:
            return self.resume(caller, subscription_id)
        if current in (STATUS_ACTIVE, STATUS_PAUSED) and new_status == STATUS_CANCELLED:
            return self.cancel(caller, subscription_id)
        if current == STATUS_CANCELLED and new_status == STATUS_ACTIVE:
            return self.reactivate(caller, subscription_id)
        raise InvalidTransitionError(current, new_status)
