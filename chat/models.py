"""Chat data models."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Chat request from user."""
    message: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ChatRequest":
        """Build from a raw JSON body, accepting ``text`` as an alias for ``message``.

        Only string values count. The message is trimmed.
        """
        for key in ("message", "text"):
            value = payload.get(key)
            if isinstance(value, str):
                return cls(message=value.strip())
        return cls()


class ChatResponse(BaseModel):
    """Chat reply with optional spoken audio."""
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    audio_base64: Optional[str] = Field(None, alias="audioBase64")
