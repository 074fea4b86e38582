from datetime import datetime
from sqlalchemy import Enum, DateTime, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from studypro.db.base import Base
from studypro.utils.dt import utcnow

class ContentItem(Base):
    __tablename__ = "content_items"

    id: Mapped[int] = mapped_column(primary_key=True)

    # One of: "courses", "books", "pyqs", "mock"
    section: Mapped[str] = mapped_column(String(16), index=True)

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    meta: Mapped[str] = mapped_column(String(200), default="")

    status: Mapped[str] = mapped_column(
        Enum("published", "draft", name="content_status"),
        default="published"
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_content_items_section_status", "section", "status"),
    )
