from datetime import datetime
from typing import NamedTuple

from studypro.core.errors import InvalidSection
from studypro.core.plans import normalize_section
from studypro.models.subscription import Subscription
from studypro.repositories.base import Repository
from studypro.services import ledger


class AccessDecision(NamedTuple):
    section: str
    allowed: bool
    subscription: Subscription | None


def evaluate(repo: Repository, user_id: int, section: str, now: datetime | None = None) -> AccessDecision:
    # Flat entitlement: any live subscription opens every section
    normalized = normalize_section(section)
    if not normalized:
        raise InvalidSection()

    sub = ledger.current_active(repo, user_id, now=now)
    return AccessDecision(section=normalized, allowed=sub is not None, subscription=sub)
