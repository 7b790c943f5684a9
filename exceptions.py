"""HTTP error types raised by the route handlers."""

from fastapi import HTTPException


class ConfigurationException(HTTPException):
    def __init__(self, detail: str = "Missing OPENAI_API_KEY on server."):
        super().__init__(status_code=500, detail=detail)


class ClientInputException(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class UploadTooLargeException(HTTPException):
    def __init__(self, limit_bytes: int):
        super().__init__(
            status_code=413,
            detail=f"File too large. Maximum size is {limit_bytes // (1024 * 1024)} MB.",
        )


class UpstreamException(HTTPException):
    """Completion service answered with a non-success status."""

    def __init__(self, body: str, error: str = "OpenAI API error"):
        super().__init__(status_code=500, detail={"error": error, "detail": body})


class ServerErrorException(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=500, detail={"error": "Server error", "detail": message})
