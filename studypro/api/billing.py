from fastapi import APIRouter, Depends

from studypro.api.deps import get_current_user, get_repo
from studypro.core.plans import PLANS
from studypro.models.user import User
from studypro.repositories.sql import SqlRepository
from studypro.schemas.billing import AccessOut, PaymentOut, PlanOut, SubmitPaymentIn, SubscriptionOut
from studypro.services import access, ledger, payments

router = APIRouter(prefix="/api", tags=["billing"])

# Display available subscription plans
@router.get("/plans", response_model=list[PlanOut])
def list_plans():
    return sorted(PLANS.values(), key=lambda p: p.days)

# Declare a manual payment (UTR) for admin review
@router.post("/payments/submit-utr", response_model=PaymentOut)
def submit_payment(
    payload: SubmitPaymentIn,
    repo: SqlRepository = Depends(get_repo),
    user: User = Depends(get_current_user),
):
    return payments.submit(repo, user.id, payload.plan_key, payload.reference_code)

# Current user's payments, newest first
@router.get("/payments/history", response_model=list[PaymentOut])
def payment_history(repo: SqlRepository = Depends(get_repo), user: User = Depends(get_current_user)):
    return payments.list_for_user(repo, user.id)

@router.get("/subscription", response_model=SubscriptionOut | None)
def my_subscription(repo: SqlRepository = Depends(get_repo), user: User = Depends(get_current_user)):
    return ledger.current_active(repo, user.id)

@router.get("/access/{section}", response_model=AccessOut)
def section_access(section: str, repo: SqlRepository = Depends(get_repo), user: User = Depends(get_current_user)):
    decision = access.evaluate(repo, user.id, section)
    return AccessOut(
        section=decision.section,
        allowed=decision.allowed,
        subscription=SubscriptionOut.model_validate(decision.subscription) if decision.subscription else None,
    )
