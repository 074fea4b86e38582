import logging

from sqlalchemy.exc import IntegrityError

from studypro.core.config import settings
from studypro.core.errors import Conflict, Unauthorized, ValidationError
from studypro.core.security import hash_password, verify_password
from studypro.models.user import User
from studypro.repositories.base import Repository
from studypro.utils.dt import utcnow

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return str(email or "").strip().lower()


def register(repo: Repository, name: str | None, email: str | None, password: str | None) -> User:
    name = str(name or "").strip()
    em = normalize_email(email)
    if not name or not em or not password:
        raise ValidationError("Missing fields")

    if repo.get_user_by_email(em):
        raise Conflict("Email already registered")

    try:
        with repo.transaction():
            user = repo.add_user(User(
                name=name,
                email=em,
                password_hash=hash_password(password),
                role="user",
                created_at=utcnow(),
            ))
    except IntegrityError:
        # lost a race with a concurrent registration
        raise Conflict("Email already registered")

    logger.info("Registered user %s", user.id)
    return user


def authenticate(repo: Repository, email: str | None, password: str | None) -> User:
    user = repo.get_user_by_email(normalize_email(email))
    if not user or not password or not verify_password(password, user.password_hash):
        raise Unauthorized("Invalid credentials")
    return user


def seed_admin(repo: Repository) -> User:
    """Create the first-run admin account unless it already exists."""
    em = normalize_email(settings.admin_email)
    existing = repo.get_user_by_email(em)
    if existing:
        return existing

    with repo.transaction():
        admin = repo.add_user(User(
            name="Admin",
            email=em,
            password_hash=hash_password(settings.admin_password),
            role="admin",
            created_at=utcnow(),
        ))

    logger.info("Seeded admin account %s", em)
    return admin
