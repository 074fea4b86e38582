from datetime import datetime
from sqlalchemy import ForeignKey, Enum, DateTime, String, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column
from studypro.db.base import Base
from studypro.utils.dt import utcnow

class Subscription(Base):
    __tablename__ = "subscriptions"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    # The approved payment that produced this grant
    payment_id: Mapped[int | None] = mapped_column(ForeignKey("payments.id"), unique=True, nullable=True)

    plan_key: Mapped[str] = mapped_column(String(32))
    amount: Mapped[int] = mapped_column(Integer)

    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    # A row may still say "active" after ends_at; readers must also compare ends_at
    status: Mapped[str] = mapped_column(
        Enum("active", "expired", name="subscription_status"),
        default="active",
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("ix_subscriptions_user_status", "user_id", "status"),
    )
