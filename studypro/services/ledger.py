"""
Subscription ledger.

Rows are only ever appended; the one mutation allowed on an existing row is
``active -> expired``. A user has at most one ``active`` row, but a row can
still say ``active`` after its ``ends_at`` has passed: expiry by time is
decided when reading, never by a sweep.
"""
import logging
from datetime import datetime, timedelta

from studypro.core.plans import Plan
from studypro.models.subscription import Subscription
from studypro.repositories.base import Repository
from studypro.services.locks import user_lock
from studypro.utils.dt import as_utc_aware, utcnow

logger = logging.getLogger(__name__)


def is_active_now(sub: Subscription, now: datetime) -> bool:
    return sub.status == "active" and now < as_utc_aware(sub.ends_at)


def current_active(repo: Repository, user_id: int, now: datetime | None = None) -> Subscription | None:
    """Return the user's live subscription, or None.

    If more than one row qualifies (should not happen) the latest ``ends_at`` wins.
    """
    now = now or utcnow()
    live = [s for s in repo.list_subscriptions_for_user(user_id, status="active") if is_active_now(s, now)]
    if not live:
        return None
    return max(live, key=lambda s: as_utc_aware(s.ends_at))


def append_active(
    repo: Repository,
    user_id: int,
    plan: Plan,
    amount: int,
    payment_id: int | None = None,
    now: datetime | None = None,
) -> Subscription:
    """Expire the user's active rows and append a fresh active one.

    The caller must hold ``user_lock(user_id)`` and an open ``repo.transaction()``
    until the commit; nothing is committed here.
    """
    now = now or utcnow()
    for old in repo.list_subscriptions_for_user(user_id, status="active"):
        old.status = "expired"
        logger.info("Expired subscription %s for user %s", old.id, user_id)

    sub = repo.add_subscription(Subscription(
        user_id=user_id,
        payment_id=payment_id,
        plan_key=plan.key,
        amount=amount,
        starts_at=now,
        ends_at=now + timedelta(days=plan.days),
        status="active",
        created_at=now,
    ))

    logger.info("Activated subscription %s (%s) for user %s until %s", sub.id, plan.key, user_id, sub.ends_at.isoformat())
    return sub


def activate(
    repo: Repository,
    user_id: int,
    plan: Plan,
    amount: int,
    payment_id: int | None = None,
    now: datetime | None = None,
) -> Subscription:
    """Standalone activation: takes the user's lock and commits before releasing it."""
    with user_lock(user_id):
        with repo.transaction():
            return append_active(repo, user_id, plan, amount, payment_id=payment_id, now=now)
