"""
Rate limiting configuration using slowapi.

Sign-in endpoints get their own tighter limits:
  • strict  – 5/min  (OTP request, each call sends an email)
  • auth    – 10/min (OTP verify)

Booking, availability and admin routes fall under the default limit.
The limiter keys on client IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

STRICT = "5/minute"
AUTH = "10/minute"
DEFAULT = "60/minute"

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT])
