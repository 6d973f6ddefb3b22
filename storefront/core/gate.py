"""
Edge authorization gate.

Decides, for a request path and the caller's session, whether the request
passes through or is redirected to a login page. The decision is a pure
function of (path, session); resolving the session is the caller's job.
"""

from dataclasses import dataclass
from typing import Optional

from storefront.core.roles import Role

LOGIN_PATH = "/login"
SELLER_LOGIN_PATH = "/seller/login"
CRM_PREFIX = "/crm"
SELLER_PREFIX = "/seller"

# Seller pages reachable without a seller session
PUBLIC_SELLER_PATHS = frozenset({SELLER_LOGIN_PATH, "/seller/register"})


@dataclass(frozen=True)
class Session:
    user_id: str
    role: Role


@dataclass(frozen=True)
class GateDecision:
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


PASS = GateDecision()


def _normalize(path: str) -> str:
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def _is_seller_area(path: str) -> bool:
    return _under(path, SELLER_PREFIX) and path not in PUBLIC_SELLER_PATHS


def is_gated(path: str) -> bool:
    """True when `evaluate` can return something other than PASS for `path`."""
    path = _normalize(path)
    return (
        _under(path, CRM_PREFIX)
        or _under(path, SELLER_PREFIX)
        or path == LOGIN_PATH
    )


def evaluate(path: str, session: Optional[Session]) -> GateDecision:
    """Apply the guards in order; the first one that matches decides."""
    path = _normalize(path)
    role = session.role if session is not None else None

    if _under(path, CRM_PREFIX) and session is None:
        return GateDecision(LOGIN_PATH)

    if _is_seller_area(path):
        if session is None:
            return GateDecision(SELLER_LOGIN_PATH)
        if role != Role.SELLER:
            return GateDecision(f"{SELLER_LOGIN_PATH}?error=unauthorized")

    if path == LOGIN_PATH and role == Role.SELLER:
        return GateDecision(SELLER_LOGIN_PATH)

    if path == SELLER_LOGIN_PATH and role == Role.BUYER:
        return GateDecision(LOGIN_PATH)

    return PASS
