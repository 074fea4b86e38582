from pydantic import BaseModel, ConfigDict


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    # Smallest currency unit
    amount: int
    days: int


# Static offer table, never persisted
PLANS: dict[str, Plan] = {
    "daily": Plan(key="daily", label="Daily", amount=9, days=1),
    "weekly": Plan(key="weekly", label="7 Days", amount=29, days=7),
    "monthly": Plan(key="monthly", label="Monthly", amount=99, days=30),
}

CONTENT_SECTIONS = ("courses", "books", "pyqs", "mock")


def lookup(plan_key: str | None) -> Plan | None:
    if not plan_key:
        return None
    return PLANS.get(plan_key)


def normalize_section(value: str | None) -> str | None:
    section = str(value or "").strip().lower()
    return section if section in CONTENT_SECTIONS else None
