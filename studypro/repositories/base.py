"""
Storage interface the services depend on.

Services never touch a SQLAlchemy session directly; they go through a
``Repository``. Every mutation happens inside ``transaction()``, which must
persist on success and discard everything on error.
"""
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol

from studypro.models import ContentItem, Payment, Subscription, User


class Repository(Protocol):
    def transaction(self) -> AbstractContextManager["Repository"]: ...

    # users
    def get_user(self, user_id: int) -> User | None: ...
    def get_user_by_email(self, email: str) -> User | None: ...
    def add_user(self, user: User) -> User: ...
    def list_users(self) -> list[User]: ...
    def count_users(self) -> int: ...

    # payments
    def add_payment(self, payment: Payment) -> Payment: ...
    def get_payment(self, payment_id: int, for_update: bool = False) -> Payment | None: ...
    def list_payments_for_user(self, user_id: int) -> list[Payment]: ...
    def list_payments_with_users(self) -> list[tuple[Payment, User | None]]: ...
    def count_payments(self) -> int: ...
    def sum_approved_amounts(self) -> int: ...

    # subscriptions
    def add_subscription(self, sub: Subscription) -> Subscription: ...
    def list_subscriptions_for_user(self, user_id: int, status: str | None = None) -> list[Subscription]: ...
    def count_active_subscriptions(self, now: datetime) -> int: ...

    # content
    def add_content(self, item: ContentItem) -> ContentItem: ...
    def get_content(self, section: str, item_id: int) -> ContentItem | None: ...
    def list_content(self, section: str, published_only: bool = False) -> list[ContentItem]: ...
    def delete_content(self, item: ContentItem) -> None: ...
    def count_content(self, section: str) -> int: ...
