"""
Credit packages and purchases.
"""

from fastapi import APIRouter

from app.dependencies import CurrentUser
from app.models import CreditPackageList, CreditPurchaseReceipt, CreditPurchaseRequest
from app.services import credits
from app.services.store import store

router = APIRouter(prefix="/api/credits", tags=["credits"])


@router.get(
    "/packages",
    response_model=CreditPackageList,
    operation_id="listCreditPackages",
    summary="Credit packages on offer",
)
async def list_credit_packages() -> CreditPackageList:
    return CreditPackageList(items=credits.list_packages())


@router.post(
    "/purchase",
    response_model=CreditPurchaseReceipt,
    operation_id="purchaseCredits",
    summary="Buy a credit package",
)
async def purchase_credits(
    body: CreditPurchaseRequest, current_user: CurrentUser
) -> CreditPurchaseReceipt:
    package, user = await store.apply(credits.purchase_credits, current_user.id, body.credits)
    return CreditPurchaseReceipt(package=package, credits_balance=user.credits)
