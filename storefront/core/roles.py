from enum import Enum
from typing import Optional


class Role(str, Enum):
    BUYER = "BUYER"
    SELLER = "SELLER"


# Values the role column held before the buyer/seller split
LEGACY_ROLE_MAP = {
    "USER": Role.BUYER,
    "ADMIN": Role.SELLER,
}


def parse_role(value) -> Optional[Role]:
    """Map a stored role value to a Role, accepting legacy values; None if unknown."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return LEGACY_ROLE_MAP.get(value)
