"""
Credit packages.

Every session costs one credit at ``CREDIT_PRICE`` dollars.  Packages are
sold "buy 4, get the 5th free": for every full five credits only four are
paid for.
"""

from __future__ import annotations

from app.config import CREDIT_PACKAGES, CREDIT_PRICE
from app.errors import BookingValidationError
from app.models import CreditPackage, User
from app.services.state import FacilityState


def paid_sessions(credits: int) -> int:
    return credits // 5 * 4 + credits % 5


def price_package(credits: int) -> CreditPackage:
    paid = paid_sessions(credits)
    price = paid * CREDIT_PRICE
    return CreditPackage(
        credits=credits,
        paid_sessions=paid,
        price=price,
        savings=(credits - paid) * CREDIT_PRICE,
        price_per_credit=round(price / credits, 2),
    )


def list_packages() -> list[CreditPackage]:
    return [price_package(c) for c in CREDIT_PACKAGES]


def purchase_credits(
    state: FacilityState, user_id: str, credits: int
) -> tuple[FacilityState, tuple[CreditPackage, User]]:
    """Add a package to the user's balance. No payment provider is involved."""
    if credits not in CREDIT_PACKAGES:
        raise BookingValidationError(
            f"Unknown credit package: {credits}", offered=list(CREDIT_PACKAGES)
        )
    user = state.get_user(user_id)
    package = price_package(credits)
    user = user.model_copy(update={"credits": user.credits + credits})
    return state.with_user(user), (package, user)
