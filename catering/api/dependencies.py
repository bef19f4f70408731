"""Service wiring and FastAPI dependencies (caller resolution, anti-forgery check)."""
from __future__ import annotations
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from fastapi import Depends, Header, Request, Response

from catering.domain.Caller import CallerContext
from catering.domain.errors import AuthenticationError
from catering.events.Event_Bus import EventBus
from catering.events.web_observers import ActivityFeed
from catering.infra.Account_Repository import AccountRepository
from catering.infra.Subscription_Repository import SubscriptionRepository
from catering.infra.Testimonial_Repository import TestimonialRepository
from catering.infra.paths import ACCOUNTS_FILENAME, SUBSCRIPTIONS_FILENAME, TESTIMONIALS_FILENAME, data_file
from catering.logic.auth.accounts import AccountService
from catering.logic.lifecycle.service import SubscriptionService, utc_now
from catering.logic.reporting.metrics import MetricsService
from catering.logic.security.csrf import CsrfTokenService
from catering.logic.security.rate_limiter import RateLimiter
from catering.logic.testimonials.service import TestimonialService
from catering.utilities.config import ADMIN_EMAILS


@dataclass
class Services:
    subscriptions: SubscriptionService
    metrics: MetricsService
    accounts: AccountService
    testimonials: TestimonialService
    csrf: CsrfTokenService
    activity: ActivityFeed
    event_bus: EventBus


def build_services(data_dir: Optional[Path] = None, clock: Callable[[], datetime] = utc_now,
                   monotonic: Callable[[], float] = time.monotonic,
                   admin_emails: Iterable[str] = ADMIN_EMAILS) -> Services:
    """Wire repositories and services over one data directory with its own event bus."""
    bus = EventBus()
    activity = ActivityFeed()
    activity.start(bus)
    subscription_repo = SubscriptionRepository(data_file(SUBSCRIPTIONS_FILENAME, data_dir))
    rate_limiter = RateLimiter(clock=monotonic)
    return Services(
        subscriptions=SubscriptionService(subscription_repo, clock=clock, event_bus=bus),
        metrics=MetricsService(subscription_repo, clock=clock),
        accounts=AccountService(AccountRepository(data_file(ACCOUNTS_FILENAME, data_dir)), rate_limiter,
                                clock=clock, admin_emails=admin_emails),
        testimonials=TestimonialService(TestimonialRepository(data_file(TESTIMONIALS_FILENAME, data_dir)),
                                        clock=clock, event_bus=bus),
        csrf=CsrfTokenService(),
        activity=activity,
        event_bus=bus,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_optional_caller(token: Optional[str] = Depends(bearer_token),
                        services: Services = Depends(get_services)) -> Optional[CallerContext]:
    return services.accounts.resolve(token)


def get_caller(caller: Optional[CallerContext] = Depends(get_optional_caller)) -> CallerContext:
    if caller is None:
        raise AuthenticationError()
    return caller


def require_csrf(x_session_id: Optional[str] = Header(default=None),
                 x_csrf_token: Optional[str] = Header(default=None),
                 services: Services = Depends(get_services)) -> str:
    """Check the anti-forgery headers and return the session id they belong to."""
    services.csrf.validate(x_session_id, x_csrf_token)
    return x_session_id


def rotate_csrf(response: Response, session_id: str, services: Services) -> None:
    """Replace the session token after a successful form submission and hand the new one back."""
    response.headers["X-CSRF-Token"] = services.csrf.issue(session_id)
