"""
Email service - sends sign-in codes via SMTP.

In development (no SMTP configured), emails are logged to the console
so you can see what *would* be sent without configuring a mail server.
"""

from __future__ import annotations

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.config import (
    OTP_TTL_SECONDS,
    SMTP_FROM_EMAIL,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USE_TLS,
    SMTP_USERNAME,
    smtp_enabled,
)

logger = logging.getLogger(__name__)


def _build_html_body(otp_code: str) -> str:
    minutes = OTP_TTL_SECONDS // 60
    return f"""
    <html>
    <body style="font-family:sans-serif;color:#333">
      <h2>Blazing Paddles sign-in</h2>
      <p>Your one-time code is:</p>
      <p style="font-size:2em;font-weight:bold;letter-spacing:0.2em">{otp_code}</p>
      <p style="margin-top:1em;font-size:0.9em;color:#888">
        The code expires in {minutes} minutes. If you did not request it, ignore this email.
      </p>
    </body>
    </html>
    """


async def send_otp_email(to_email: str, otp_code: str) -> None:
    """
    Send (or log) a one-time sign-in code.

    If SMTP is not configured, falls back to console output.
    """
    subject = "Your Blazing Paddles sign-in code"

    # ── Console fallback (dev mode) ───────────────────────────────────
    if not smtp_enabled():
        logger.info("[DEV] Would send OTP %s to %s", otp_code, to_email)
        return

    # ── Real SMTP send ────────────────────────────────────────────────
    import aiosmtplib

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = SMTP_FROM_EMAIL
    msg["To"] = to_email

    msg.attach(MIMEText(f"Your sign-in code: {otp_code}", "plain"))
    msg.attach(MIMEText(_build_html_body(otp_code), "html"))

    try:
        await aiosmtplib.send(
            msg,
            hostname=SMTP_HOST,
            port=SMTP_PORT,
            username=SMTP_USERNAME,
            password=SMTP_PASSWORD,
            start_tls=SMTP_USE_TLS,
        )
        logger.info("Sign-in code sent to %s", to_email)
    except Exception:
        logger.exception("Failed to send email to %s", to_email)
        raise
