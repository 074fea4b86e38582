from datetime import datetime
from sqlalchemy import ForeignKey, Enum, DateTime, String, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column
from studypro.db.base import Base
from studypro.utils.dt import utcnow

class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    # Key into the static plan catalog, validated at submission
    plan_key: Mapped[str] = mapped_column(String(32))

    # Copied from the plan when submitted, never recomputed
    amount: Mapped[int] = mapped_column(Integer)

    # Our own correlation token, e.g. "REQ-3f2a..."
    payment_ref: Mapped[str] = mapped_column(String(64), unique=True)

    # User supplied transaction id; duplicates are allowed and left to the reviewer
    utr: Mapped[str] = mapped_column(String(40), index=True)

    # pending -> approved | declined, both terminal
    status: Mapped[str] = mapped_column(
        Enum("pending", "approved", "declined", name="payment_status"),
        default="pending",
        index=True
    )

    review_note: Mapped[str] = mapped_column(String(500), default="")
    reviewed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("ix_payments_user_status", "user_id", "status"),
    )
