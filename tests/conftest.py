import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studypro.core.security import create_access_token, hash_password
from studypro.db.base import Base
from studypro.db.session import get_db
from studypro.main import app
from studypro.models import Payment, User
from studypro.repositories.sql import SqlRepository
from studypro.utils.dt import utcnow


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
def engine():
    """Isolated in-memory database shared by every connection in the test."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db):
    return SqlRepository(db)


@pytest.fixture
def client(db):
    def _override():
        yield db

    app.dependency_overrides[get_db] = _override
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


# ============================================================================
# Users and tokens
# ============================================================================

@pytest.fixture
def make_user(repo):
    counter = {"n": 0}

    def _make(role: str = "user", email: str | None = None, password: str = "secret-pass") -> User:
        counter["n"] += 1
        with repo.transaction():
            user = repo.add_user(User(
                name=f"{role.title()} {counter['n']}",
                email=email or f"{role}{counter['n']}@example.com",
                password_hash=hash_password(password),
                role=role,
                created_at=utcnow(),
            ))
        return user

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin_user(make_user):
    return make_user(role="admin")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id), user.role)}"}


@pytest.fixture
def user_headers(user):
    return bearer(user)


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


def active_rows(db, user_id: int):
    from studypro.models import Subscription
    return db.query(Subscription).filter(Subscription.user_id == user_id, Subscription.status == "active").all()


def payment_count(db) -> int:
    return db.query(Payment).count()
