"""Event helper utilities.

Quick import:
    from catering.events.event_helpers import (
        publish_subscription_created, publish_status_changed,
        publish_testimonial_submitted, publish_testimonial_approved
    )
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    SUBSCRIPTION_CREATED, SUBSCRIPTION_STATUS_CHANGED, TESTIMONIAL_SUBMITTED, TESTIMONIAL_APPROVED,
)

__all__ = [
    'publish_subscription_created', 'publish_status_changed',
    'publish_testimonial_submitted', 'publish_testimonial_approved',
]


def publish_subscription_created(subscription, actor_id: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(SUBSCRIPTION_CREATED, {
        'subscription': subscription.to_dict(),
        'actor_id': actor_id,
    })


def publish_status_changed(subscription, actor_id: str, from_status: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(SUBSCRIPTION_STATUS_CHANGED, {
        'subscription': subscription.to_dict(),
        'actor_id': actor_id,
        'from_status': from_status,
        'to_status': subscription.status,
    })


def publish_testimonial_submitted(testimonial, actor_id: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(TESTIMONIAL_SUBMITTED, {
        'testimonial': testimonial.to_dict(),
        'actor_id': actor_id,
    })


def publish_testimonial_approved(testimonial, actor_id: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(TESTIMONIAL_APPROVED, {
        'testimonial': testimonial.to_dict(),
        'actor_id': actor_id,
    })
