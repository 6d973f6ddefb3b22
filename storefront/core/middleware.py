import logging
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import RedirectResponse

from storefront.core import gate
from storefront.core.dependencies import extract_token

logger = logging.getLogger(__name__)

ResolveSession = Callable[[str], Optional[gate.Session]]


SECURITY_HEADERS = (
    (b"x-content-type-options", b"nosniff"),
    (b"x-frame-options", b"DENY"),
    (b"referrer-policy", b"strict-origin-when-cross-origin"),
)


class SecurityHeadersMiddleware:
    """Adds SECURITY_HEADERS to every HTTP response that does not already set them"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in SECURITY_HEADERS if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_headers)


class AuthorizationGateMiddleware:
    """Redirects requests into the login pages according to storefront.core.gate"""

    def __init__(self, app, session_resolver: ResolveSession):
        self.app = app
        self.session_resolver = session_resolver

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not gate.is_gated(scope["path"]):
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        session = await self._resolve_session(request)
        decision = gate.evaluate(request.url.path, session)
        if decision.allowed:
            await self.app(scope, receive, send)
            return

        logger.info("Gate redirect %s -> %s", request.url.path, decision.redirect_to)
        response = RedirectResponse(decision.redirect_to, status_code=307)
        await response(scope, receive, send)

    async def _resolve_session(self, request: Request) -> Optional[gate.Session]:
        token = extract_token(request)
        if not token:
            return None
        try:
            return await run_in_threadpool(self.session_resolver, token)
        except Exception:
            # An unresolvable session is treated as no session
            logger.warning("Session resolution failed for %s", request.url.path, exc_info=True)
            return None
