"""Customer testimonials: submitted by signed-in customers, published after admin approval."""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from catering.domain.Caller import CallerContext
from catering.domain.Testimonial import Testimonial
from catering.domain.errors import AuthorizationError
from catering.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from catering.events.event_helpers import publish_testimonial_approved, publish_testimonial_submitted
from catering.infra.Testimonial_Repository import TestimonialRepository
from catering.logic.lifecycle.service import require_caller
from catering.utilities.validators import TestimonialInput, validate_input

logger = logging.getLogger(__name__)

__all__ = ["TestimonialService"]


class TestimonialService:
    __test__ = False  # not a pytest test class

    def __init__(self, repository: TestimonialRepository, clock: Callable[[], datetime] = None,
                 event_bus: Optional[EventBus] = None):
        self.repository = repository
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.event_bus = event_bus or GLOBAL_EVENT_BUS

    def create(self, caller: Optional[CallerContext], data) -> Testimonial:
        caller = require_caller(caller)
        form = validate_input(TestimonialInput, data)
        testimonial = Testimonial(
            owner_id=caller.account_id,
            name=form.name,
            message=form.message,
            rating=form.rating,
            location=form.location or None,
            approved=False,
            created_at=self.clock(),
        )
        testimonial = self.repository.add(testimonial)
        publish_testimonial_submitted(testimonial, caller.account_id, bus=self.event_bus)
        return testimonial

    def list_approved(self) -> List[Testimonial]:
        return [t for t in self.repository.list_all() if t.approved]

    def list_mine(self, caller: Optional[CallerContext]) -> List[Testimonial]:
        caller = require_caller(caller)
        return [t for t in self.repository.list_all() if t.owner_id == caller.account_id]

    def list_all(self, caller: Optional[CallerContext]) -> List[Testimonial]:
        self._require_admin(caller)
        return self.repository.list_all()

    def approve(self, caller: Optional[CallerContext], testimonial_id: int) -> Testimonial:
        caller = self._require_admin(caller)
        testimonial = self.repository.set_approved(testimonial_id, True)
        logger.info("Testimonial %s approved by %s", testimonial_id, caller.account_id)
        publish_testimonial_approved(testimonial, caller.account_id, bus=self.event_bus)
        return testimonial

    @staticmethod
    def _require_admin(caller: Optional[CallerContext]) -> CallerContext:
        caller = require_caller(caller)
        if not caller.is_admin:
            raise AuthorizationError("Admin access required")
        return caller
