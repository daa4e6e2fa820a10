"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Environment ───────────────────────────────────────────────────────────

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

VERSION = "0.1.0"

# ── JWT ───────────────────────────────────────────────────────────────────

JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me-in-production")
JWT_ALGORITHM: str = "HS256"
JWT_EXPIRY_DAYS: int = int(os.getenv("JWT_EXPIRY_DAYS", "7"))

# One-time passwords are valid for this many seconds.
OTP_TTL_SECONDS: int = int(os.getenv("OTP_TTL_SECONDS", "300"))

# ── SMTP ──────────────────────────────────────────────────────────────────

SMTP_HOST: str = os.getenv("SMTP_HOST", "")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM_EMAIL: str = os.getenv("SMTP_FROM_EMAIL", "noreply@blazingpaddles.local")
SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

_SMTP_ENABLED_OVERRIDE: str = os.getenv("SMTP_ENABLED", "auto")


def smtp_enabled() -> bool:
    """True when SMTP should actually send emails.

    Controlled by SMTP_ENABLED env var:
      • "auto" (default) - send if credentials are configured
      • "true"  - always send (will fail if credentials are missing)
      • "false" - never send, log to console instead
    """
    if _SMTP_ENABLED_OVERRIDE.lower() == "false":
        return False
    if _SMTP_ENABLED_OVERRIDE.lower() == "true":
        return True
    return bool(SMTP_HOST and SMTP_USERNAME and SMTP_PASSWORD)


# ── Opening hours ─────────────────────────────────────────────────────────

OPEN_HOUR: int = int(os.getenv("OPEN_HOUR", "8"))
CLOSE_HOUR: int = int(os.getenv("CLOSE_HOUR", "20"))

# ── Courts ────────────────────────────────────────────────────────────────

# Courts are always booked for a fixed two-hour session.
COURT_SLOT_HOURS = 2
COURT_START_HOURS: tuple[int, ...] = tuple(
    range(OPEN_HOUR, CLOSE_HOUR - COURT_SLOT_HOURS + 1, COURT_SLOT_HOURS)
)

# Maximum signups per skill level for one court session.
COURT_LEVEL_CAPACITY: int = int(os.getenv("COURT_LEVEL_CAPACITY", "12"))

# ── Practice bays ─────────────────────────────────────────────────────────

BAY_COUNT: int = int(os.getenv("BAY_COUNT", "2"))
BAY_DURATIONS: tuple[int, ...] = (30, 60, 90, 120)

# ── Credits ───────────────────────────────────────────────────────────────

COURT_CREDIT_COST = 1
BAY_CREDIT_COST = 1
PRIVATE_COURT_CREDIT_COST = 4

CREDIT_PACKAGES: tuple[int, ...] = (5, 10, 20, 50)
CREDIT_PRICE: int = int(os.getenv("CREDIT_PRICE", "14"))  # USD per paid session

# Balance given to an account created on first sign-in.
NEW_MEMBER_CREDITS: int = int(os.getenv("NEW_MEMBER_CREDITS", "0"))

# ── Group training defaults ───────────────────────────────────────────────

EVENT_DEFAULT_DURATION_HOURS = 2
EVENT_DEFAULT_MAX_PARTICIPANTS = 12
EVENT_DEFAULT_CREDITS_REQUIRED = 2

# ── Seed accounts ─────────────────────────────────────────────────────────
# Loaded into the user directory on startup.

SEED_USERS: list[dict] = [
    {
        "id": "member-1",
        "email": os.getenv("SEED_MEMBER_EMAIL", "member@example.com"),
        "name": "John Member",
        "role": "member",
        "credits": 10,
    },
    {
        "id": "admin-1",
        "email": os.getenv("SEED_ADMIN_EMAIL", "admin@blazingpaddles.com"),
        "name": "Admin User",
        "role": "admin",
        "credits": 999,
    },
]
