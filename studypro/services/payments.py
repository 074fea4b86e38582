"""
Manual payment workflow.

Users declare a payment by quoting the UTR of an external transfer; an admin
checks it by hand and approves or declines. Approval is what creates a
subscription.

    pending -> approved   (creates a subscription)
    pending -> declined
"""
import logging
import re
from datetime import datetime
from uuid import uuid4

from studypro.core.errors import InvalidPlan, InvalidReference, InvalidState, NotFound
from studypro.core.plans import lookup
from studypro.models.payment import Payment
from studypro.models.subscription import Subscription
from studypro.models.user import User
from studypro.repositories.base import Repository
from studypro.services import ledger
from studypro.services.locks import user_lock
from studypro.utils.dt import utcnow

logger = logging.getLogger(__name__)

UTR_PATTERN = re.compile(r"[A-Za-z0-9-]{6,40}")


def new_payment_ref() -> str:
    return f"REQ-{uuid4().hex[:20].upper()}"


def submit(
    repo: Repository,
    user_id: int,
    plan_key: str | None,
    reference_code: str | None,
    now: datetime | None = None,
) -> Payment:
    plan = lookup(plan_key)
    if not plan:
        raise InvalidPlan()

    utr = str(reference_code or "").strip()
    if not UTR_PATTERN.fullmatch(utr):
        raise InvalidReference()

    # No uniqueness check on utr: duplicates are surfaced to the reviewer instead
    with repo.transaction():
        payment = repo.add_payment(Payment(
            user_id=user_id,
            plan_key=plan.key,
            amount=plan.amount,
            payment_ref=new_payment_ref(),
            utr=utr,
            status="pending",
            review_note="",
            created_at=now or utcnow(),
        ))

    logger.info("Payment %s submitted by user %s for plan %s (utr=%s)", payment.id, user_id, plan.key, utr)
    return payment


def _load_for_review(repo: Repository, payment_id: int) -> Payment:
    payment = repo.get_payment(payment_id)
    if not payment:
        raise NotFound("Payment not found")
    return payment


def approve(repo: Repository, payment_id: int, reviewer_id: int, now: datetime | None = None) -> Subscription:
    payment = _load_for_review(repo, payment_id)

    with user_lock(payment.user_id):
        with repo.transaction():
            # status may have moved while we waited for the lock
            payment = repo.get_payment(payment_id, for_update=True)
            if payment.status != "pending":
                raise InvalidState("Only pending payments can be approved")

            plan = lookup(payment.plan_key)
            if not plan:
                raise InvalidPlan("Invalid plan in payment")

            now = now or utcnow()
            payment.status = "approved"
            payment.reviewed_by = reviewer_id
            payment.reviewed_at = now

            sub = ledger.append_active(repo, payment.user_id, plan, payment.amount, payment_id=payment.id, now=now)

    logger.info("Payment %s approved by %s", payment_id, reviewer_id)
    return sub


def decline(
    repo: Repository,
    payment_id: int,
    reviewer_id: int,
    note: str | None = None,
    now: datetime | None = None,
) -> Payment:
    payment = _load_for_review(repo, payment_id)

    with user_lock(payment.user_id):
        with repo.transaction():
            payment = repo.get_payment(payment_id, for_update=True)
            if payment.status != "pending":
                raise InvalidState("Only pending payments can be declined")

            payment.status = "declined"
            payment.review_note = str(note or "").strip()
            payment.reviewed_by = reviewer_id
            payment.reviewed_at = now or utcnow()

    logger.info("Payment %s declined by %s", payment_id, reviewer_id)
    return payment


def list_for_user(repo: Repository, user_id: int) -> list[Payment]:
    return repo.list_payments_for_user(user_id)


def list_all(repo: Repository) -> list[tuple[Payment, User | None]]:
    return repo.list_payments_with_users()
