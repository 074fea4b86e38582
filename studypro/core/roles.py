from enum import Enum

from studypro.core.errors import Forbidden


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


def ensure_admin(role: Role) -> Role:
    """Guard called before any admin operation; raises Forbidden otherwise."""
    if role != Role.ADMIN:
        raise Forbidden()
    return role
