"""Request gateway: origin allow-list, upload limits and body parsing."""

from .body import read_json_body
from .origins import OriginAllowList, OriginGateMiddleware
from .uploads import UploadLimitMiddleware

__all__ = ["OriginAllowList", "OriginGateMiddleware", "UploadLimitMiddleware", "read_json_body"]
