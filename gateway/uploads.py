"""Upload size enforcement ahead of multipart parsing."""

from typing import Iterable
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
import structlog

logger = structlog.get_logger()

# Room for multipart boundaries and part headers around the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class UploadLimitMiddleware:
    """Reject uploads whose declared Content-Length exceeds the cap.

    Runs before the form is parsed, so an oversized body is never spooled.
    Bodies without a usable Content-Length are left to the route's own check.
    """

    def __init__(self, app: ASGIApp, paths: Iterable[str], max_upload_bytes: int):
        self.app = app
        self.paths = frozenset(paths)
        self.max_upload_bytes = max_upload_bytes
        self.max_body_bytes = max_upload_bytes + MULTIPART_OVERHEAD_BYTES

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http" or scope.get("path") not in self.paths:
            await self.app(scope, receive, send)
            return

        content_length = None
        for name, value in scope["headers"]:
            if name == b"content-length":
                try:
                    content_length = int(value)
                except ValueError:
                    content_length = None
                break

        if content_length is None or content_length <= self.max_body_bytes:
            await self.app(scope, receive, send)
            return

        logger.warning(
            "upload_rejected_by_content_length",
            path=scope.get("path"),
            content_length=content_length,
        )
        response = JSONResponse(
            status_code=413,
            content={
                "detail": (
                    "File too large. Maximum size is "
                    f"{self.max_upload_bytes // (1024 * 1024)} MB."
                )
            },
        )
        await response(scope, receive, send)
