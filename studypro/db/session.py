from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from studypro.core.config import settings
from typing import Generator

# SQLite connections are shared with the request thread pool
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Engine = the DB connection factory
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    connect_args=connect_args,
    future=True
)

# SessionLocal = the session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)

def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
