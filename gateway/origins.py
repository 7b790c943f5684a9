"""Origin allow-list enforcement."""

import re
from typing import Iterable, Literal, Optional
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
import structlog

logger = structlog.get_logger()

MatchMode = Literal["prefix", "exact"]


class OriginAllowList:
    """Known front-end origins allowed to make cross-origin calls.

    Matching is plain string comparison, either by prefix (so hosting
    subdomains and paths under an entry pass) or by equality.
    """

    def __init__(self, origins: Iterable[str], mode: MatchMode = "prefix"):
        self.origins = tuple(o for o in origins if o)
        self.mode = mode

    def allows(self, origin: Optional[str]) -> bool:
        """Check an Origin header value; requests without one are always allowed."""
        if not origin:
            return True
        if self.mode == "exact":
            return origin in self.origins
        return any(origin.startswith(allowed) for allowed in self.origins)

    def as_regex(self) -> str:
        """Regex equivalent of ``allows`` for CORSMiddleware's allow_origin_regex."""
        if not self.origins:
            # Matches nothing
            return r"(?!)"
        alternatives = "|".join(re.escape(o) for o in self.origins)
        if self.mode == "exact":
            return f"(?:{alternatives})"
        return f"(?:{alternatives}).*"


class OriginGateMiddleware:
    """Reject requests from unknown origins before any route runs."""

    def __init__(self, app: ASGIApp, allow_list: OriginAllowList):
        self.app = app
        self.allow_list = allow_list

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = None
        for name, value in scope["headers"]:
            if name == b"origin":
                origin = value.decode("latin-1")
                break

        if self.allow_list.allows(origin):
            await self.app(scope, receive, send)
            return

        logger.warning("origin_rejected", origin=origin, path=scope.get("path"))
        response = JSONResponse(
            status_code=403,
            content={"detail": f"Not allowed by CORS: {origin}"},
        )
        await response(scope, receive, send)
