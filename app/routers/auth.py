"""
Authentication endpoints – email OTP flow with JWT session cookies.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from app.config import NEW_MEMBER_CREDITS, OTP_TTL_SECONDS
from app.dependencies import CurrentUser, create_session_cookie
from app.models import (
    AuthResponse,
    MessageResponse,
    OtpRequest,
    OtpRequestResponse,
    OtpVerifyRequest,
    User,
)
from app.rate_limit import AUTH, STRICT, limiter
from app.services import booking
from app.services.email import send_otp_email
from app.services.otp import otp_store
from app.services.store import store

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/request-otp",
    response_model=OtpRequestResponse,
    operation_id="requestOtp",
    summary="Request a one-time password sent to the given email",
)
@limiter.limit(STRICT)
async def request_otp(request: Request, body: OtpRequest) -> OtpRequestResponse:
    """
    Generate a 6-digit OTP, keep it in the OTP store, and send it via email.
    In dev mode (no SMTP configured), the OTP is logged to the console.
    """
    otp_code = otp_store.create(body.email, ttl_seconds=OTP_TTL_SECONDS)
    await send_otp_email(body.email, otp_code)

    return OtpRequestResponse(
        message=f"OTP sent to {body.email}",
        expires_in_seconds=OTP_TTL_SECONDS,
    )


@router.post(
    "/verify-otp",
    response_model=AuthResponse,
    operation_id="verifyOtp",
    summary="Verify OTP and receive a JWT session cookie",
)
@limiter.limit(AUTH)
async def verify_otp(request: Request, body: OtpVerifyRequest, response: Response) -> AuthResponse:
    """
    Validate the OTP. On success, sign in the matching account (creating a
    member account on first sign-in) and set a signed JWT session cookie.
    """
    if not otp_store.verify(body.email, body.otp_code):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired OTP",
        )

    user = await store.apply(booking.register_member, body.email, NEW_MEMBER_CREDITS)
    create_session_cookie(response, user.id)
    return AuthResponse(message="Authenticated successfully", user=user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    operation_id="logout",
    summary="Clear the session cookie",
)
async def logout(current_user: CurrentUser, response: Response) -> MessageResponse:
    response.delete_cookie("session")
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=User,
    operation_id="getMe",
    summary="Get current authenticated user info",
)
async def get_me(current_user: CurrentUser) -> User:
    return store.state.users.get(current_user.id, current_user)
