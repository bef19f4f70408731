"""Accounts and bearer-token sessions.

Sign-in and sign-up are rate limited per "auth_<email>" key; a successful call
clears the key. Sessions are process-local and expire after SESSION_TTL_HOURS.
"""
from __future__ import annotations
import logging
import secrets
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional, Tuple
from uuid import uuid4

from catering.domain.Account import Account
from catering.domain.Caller import CallerContext, ROLE_ADMIN, ROLE_USER
from catering.domain.errors import AuthenticationError, ValidationError
from catering.infra.Account_Repository import AccountRepository
from catering.logic.auth.passwords import hash_password, password_errors, verify_password
from catering.logic.security.rate_limiter import RateLimiter
from catering.utilities.config import ADMIN_EMAILS, SESSION_TTL_HOURS
from catering.utilities.validators import SignInInput, SignUpInput, validate_input

logger = logging.getLogger(__name__)

__all__ = ["AccountService"]


class AccountService:
    def __init__(self, repository: AccountRepository, rate_limiter: RateLimiter,
                 clock: Callable[[], datetime] = None, admin_emails=ADMIN_EMAILS,
                 session_ttl: timedelta = timedelta(hours=SESSION_TTL_HOURS)):
        self.repository = repository
        self.rate_limiter = rate_limiter
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.admin_emails = frozenset(e.lower() for e in admin_emails)
        self.session_ttl = session_ttl
        self._sessions: Dict[str, Tuple[str, datetime]] = {}
        self._lock = Lock()

    def sign_up(self, data) -> Account:
        form = validate_input(SignUpInput, data)
        problems = password_errors(form.password)
        if problems:
            raise ValidationError("Password does not meet requirements", {"password": ", ".join(problems)})
        key = f"auth_{form.email}"
        self.rate_limiter.hit(key)
        role = ROLE_ADMIN if form.email in self.admin_emails else ROLE_USER
        account = Account(
            id=uuid4().hex,
            email=form.email,
            full_name=form.full_name,
            password_hash=hash_password(form.password),
            role=role,
            created_at=self.clock(),
        )
        account = self.repository.add(account)
        self.rate_limiter.clear(key)
        logger.info("Account created: %s (%s)", account.email, account.role)
        return account

    def sign_in(self, data) -> Tuple[str, CallerContext]:
        form = validate_input(SignInInput, data)
        key = f"auth_{form.email}"
        self.rate_limiter.hit(key)
        account = self.repository.find_by_email(form.email)
        if account is None or not verify_password(form.password, account.password_hash):
            logger.warning("Failed sign-in for %s", form.email)
            raise AuthenticationError("Invalid email or password")
        self.rate_limiter.clear(key)
        token = secrets.token_urlsafe(32)
        now = self.clock()
        with self._lock:
            self._drop_expired(now)
            self._sessions[token] = (account.id, now + self.session_ttl)
        return token, account.to_caller()

    def _drop_expired(self, now: datetime) -> None:
        # caller holds self._lock
        for token in [t for t, (_, expires_at) in self._sessions.items() if now >= expires_at]:
            del self._sessions[token]

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def sign_out(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def resolve(self, token: Optional[str]) -> Optional[CallerContext]:
        """Caller for a bearer token, or None when the token is unknown or expired."""
        if not token:
            return None
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            account_id, expires_at = entry
            if self.clock() >= expires_at:
                del self._sessions[token]
                return None
        account = self.repository.get(account_id)
        return account.to_caller() if account else None
