"""Per-session anti-forgery tokens for form submissions."""
from __future__ import annotations
import hmac
import logging
import secrets
from threading import Lock
from typing import Dict, Optional

from catering.domain.errors import SecurityTokenError
from catering.utilities.constants import CSRF_TOKEN_BYTES

logger = logging.getLogger(__name__)

TOKEN_LENGTH = CSRF_TOKEN_BYTES * 2  # hex encoded

__all__ = ["CsrfTokenService", "TOKEN_LENGTH"]


class CsrfTokenService:
    def __init__(self):
        self._tokens: Dict[str, str] = {}
        self._lock = Lock()

    @staticmethod
    def generate_token() -> str:
        return secrets.token_hex(CSRF_TOKEN_BYTES)

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(16)

    def issue(self, session_id: str) -> str:
        """Create (or rotate) the token bound to session_id."""
        token = self.generate_token()
        with self._lock:
            self._tokens[session_id] = token
        return token

    def get(self, session_id: str) -> Optional[str]:
        with self._lock:
            return self._tokens.get(session_id)

    def is_valid(self, session_id: Optional[str], token: Optional[str]) -> bool:
        if not session_id or not token or len(token) != TOKEN_LENGTH:
            return False
        stored = self.get(session_id)
        return stored is not None and hmac.compare_digest(stored, token)

    def validate(self, session_id: Optional[str], token: Optional[str]) -> None:
        if not self.is_valid(session_id, token):
            logger.warning("Anti-forgery token rejected for session %s", session_id)
            raise SecurityTokenError()

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._tokens.pop(session_id, None)
