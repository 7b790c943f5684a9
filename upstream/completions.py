"""OpenAI chat completions client."""

from typing import Any, Literal, Optional
from fastapi import Depends
from pydantic import BaseModel
import httpx
import structlog

from config import Settings, get_settings
from exceptions import ConfigurationException

logger = structlog.get_logger()


class CompletionMessage(BaseModel):
    """Role-tagged message sent to the completion service."""
    role: Literal["system", "user"]
    content: str


class CompletionError(Exception):
    """Completion service returned a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Completion service returned {status_code}")
        self.status_code = status_code
        self.body = body


class CompletionClient:
    """Async client for the chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client with authentication."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def complete(
        self,
        messages: list[CompletionMessage],
        model: str,
        temperature: float,
    ) -> Optional[str]:
        """Submit messages and return the first choice's text, or None if there is none."""
        client = await self._get_client()
        response = await client.post(
            "/chat/completions",
            json={
                "model": model,
                "messages": [m.model_dump() for m in messages],
                "temperature": temperature,
            },
        )
        if not response.is_success:
            logger.error(
                "completion_request_failed",
                status_code=response.status_code,
                body=response.text,
            )
            raise CompletionError(response.status_code, response.text)

        return _first_choice_text(response.json())


def _first_choice_text(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    return content.strip() or None


# Dependency injection helper
async def get_completion_client(settings: Settings = Depends(get_settings)):
    """FastAPI dependency for CompletionClient."""
    if not settings.completion_configured:
        raise ConfigurationException()
    client = CompletionClient(
        api_key=settings.openai_api_key.get_secret_value(),
        base_url=settings.openai_base_url,
        timeout=settings.upstream_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.close()
