from datetime import datetime
from sqlalchemy import Enum, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from studypro.db.base import Base
from studypro.utils.dt import utcnow

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(120))

    # Always stored lower-cased and trimmed
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    password_hash: Mapped[str] = mapped_column(String(255))

    role: Mapped[str] = mapped_column(
        Enum("user", "admin", name="user_role"),
        default="user",
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
