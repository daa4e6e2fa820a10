"""
In-memory one-time password store for the email sign-in flow.

Codes are single use and expire after ``OTP_TTL_SECONDS``.  Requesting a
new code for an email replaces any previous one.
"""

from __future__ import annotations

import hmac
import logging
import secrets
import time
from dataclasses import dataclass

from app.config import OTP_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PendingOtp:
    code: str
    expires_at: float


class OtpStore:
    def __init__(self) -> None:
        self._pending: dict[str, _PendingOtp] = {}

    def create(self, email: str, code: str | None = None, ttl_seconds: int = OTP_TTL_SECONDS) -> str:
        code = code or f"{secrets.randbelow(1_000_000):06d}"
        self._pending[email.lower()] = _PendingOtp(code, time.monotonic() + ttl_seconds)
        return code

    def verify(self, email: str, code: str) -> bool:
        """Check and consume the code for ``email``."""
        pending = self._pending.get(email.lower())
        if pending is None:
            return False
        if time.monotonic() > pending.expires_at:
            del self._pending[email.lower()]
            logger.info("Expired OTP presented for %s", email)
            return False
        if not hmac.compare_digest(pending.code, code):
            return False
        del self._pending[email.lower()]
        return True

    def clear(self) -> None:
        self._pending.clear()


otp_store = OtpStore()
