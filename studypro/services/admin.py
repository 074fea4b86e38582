"""
Admin review surface.

Read-only aggregation plus pass-through to the payment workflow. Callers are
expected to have run ``studypro.core.roles.ensure_admin`` already.
"""
from datetime import datetime

from studypro.core.plans import CONTENT_SECTIONS
from studypro.models.payment import Payment
from studypro.models.subscription import Subscription
from studypro.models.user import User
from studypro.repositories.base import Repository
from studypro.services import payments
from studypro.utils.dt import utcnow


def overview(repo: Repository, now: datetime | None = None) -> dict:
    now = now or utcnow()
    stats = {
        "users": repo.count_users(),
        "payments": repo.count_payments(),
        "revenue": repo.sum_approved_amounts(),
        "active_subscriptions": repo.count_active_subscriptions(now),
    }
    for section in CONTENT_SECTIONS:
        stats[section] = repo.count_content(section)
    return stats


def list_users(repo: Repository) -> list[User]:
    return repo.list_users()


def list_payments(repo: Repository) -> list[dict]:
    rows = []
    for payment, user in payments.list_all(repo):
        rows.append({
            "payment": payment,
            "name": user.name if user else "-",
            "email": user.email if user else "-",
        })
    return rows


def approve_payment(repo: Repository, payment_id: int, reviewer_id: int) -> Subscription:
    return payments.approve(repo, payment_id, reviewer_id)


def decline_payment(repo: Repository, payment_id: int, reviewer_id: int, note: str | None) -> Payment:
    return payments.decline(repo, payment_id, reviewer_id, note)
