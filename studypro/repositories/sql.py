import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from sqlalchemy import func
from sqlalchemy.orm import Session

from studypro.models import ContentItem, Payment, Subscription, User

logger = logging.getLogger(__name__)


class SqlRepository:
    """Repository backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator["SqlRepository"]:
        try:
            yield self
            self.db.commit()
        except Exception:
            logger.debug("Rolling back transaction", exc_info=True)
            self.db.rollback()
            raise

    # ---------------------------
    # users
    # ---------------------------

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def add_user(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id.desc()).all()

    def count_users(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    # ---------------------------
    # payments
    # ---------------------------

    def add_payment(self, payment: Payment) -> Payment:
        self.db.add(payment)
        self.db.flush()  # assigns payment.id without committing
        return payment

    def get_payment(self, payment_id: int, for_update: bool = False) -> Payment | None:
        if for_update:
            # re-read from the DB so a racing commit is visible
            return self.db.get(Payment, payment_id, with_for_update=True, populate_existing=True)
        return self.db.get(Payment, payment_id)

    def list_payments_for_user(self, user_id: int) -> list[Payment]:
        return (self.db.query(Payment)
                .filter(Payment.user_id == user_id)
                .order_by(Payment.id.desc())
                .all())

    def list_payments_with_users(self) -> list[tuple[Payment, User | None]]:
        rows = (self.db.query(Payment, User)
                .outerjoin(User, User.id == Payment.user_id)
                .order_by(Payment.id.desc())
                .all())
        return [(p, u) for p, u in rows]

    def count_payments(self) -> int:
        return self.db.query(func.count(Payment.id)).scalar() or 0

    def sum_approved_amounts(self) -> int:
        total = (self.db.query(func.coalesce(func.sum(Payment.amount), 0))
                 .filter(Payment.status == "approved")
                 .scalar())
        return int(total or 0)

    # ---------------------------
    # subscriptions
    # ---------------------------

    def add_subscription(self, sub: Subscription) -> Subscription:
        self.db.add(sub)
        self.db.flush()
        return sub

    def list_subscriptions_for_user(self, user_id: int, status: str | None = None) -> list[Subscription]:
        q = self.db.query(Subscription).filter(Subscription.user_id == user_id)
        if status:
            q = q.filter(Subscription.status == status)
        return q.order_by(Subscription.id.desc()).all()

    def count_active_subscriptions(self, now: datetime) -> int:
        return (self.db.query(func.count(Subscription.id))
                .filter(Subscription.status == "active", Subscription.ends_at > now)
                .scalar()) or 0

    # ---------------------------
    # content
    # ---------------------------

    def add_content(self, item: ContentItem) -> ContentItem:
        self.db.add(item)
        self.db.flush()
        return item

    def get_content(self, section: str, item_id: int) -> ContentItem | None:
        return (self.db.query(ContentItem)
                .filter(ContentItem.section == section, ContentItem.id == item_id)
                .first())

    def list_content(self, section: str, published_only: bool = False) -> list[ContentItem]:
        q = self.db.query(ContentItem).filter(ContentItem.section == section)
        if published_only:
            q = q.filter(ContentItem.status == "published")
        return q.order_by(ContentItem.id.desc()).all()

    def delete_content(self, item: ContentItem) -> None:
        self.db.delete(item)
        self.db.flush()

    def count_content(self, section: str) -> int:
        return (self.db.query(func.count(ContentItem.id))
                .filter(ContentItem.section == section)
                .scalar()) or 0
