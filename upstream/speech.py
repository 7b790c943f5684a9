"""ElevenLabs text-to-speech client.

Synthesis is an optional add-on to a chat reply, so ``synthesize`` never
raises: every outcome is reported as a ``SynthesisResult``.
"""

from base64 import b64encode
from dataclasses import dataclass
from typing import Literal, Optional
from fastapi import Depends
import httpx
import structlog

from config import Settings, get_settings

logger = structlog.get_logger()

SynthesisStatus = Literal["skipped", "failed", "succeeded"]


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of a speech synthesis attempt."""
    status: SynthesisStatus
    audio: Optional[bytes] = None
    error: Optional[str] = None

    @classmethod
    def skipped(cls) -> "SynthesisResult":
        return cls(status="skipped")

    @classmethod
    def failed(cls, error: str) -> "SynthesisResult":
        return cls(status="failed", error=error)

    @classmethod
    def succeeded(cls, audio: bytes) -> "SynthesisResult":
        return cls(status="succeeded", audio=audio)

    def as_base64(self) -> Optional[str]:
        """Base64 audio for the response body; None for anything but success."""
        if self.status != "succeeded" or self.audio is None:
            return None
        return b64encode(self.audio).decode("ascii")


class SpeechClient:
    """Async client for the ElevenLabs text-to-speech endpoint."""

    def __init__(
        self,
        api_key: str,
        voice_id: str,
        base_url: str = "https://api.elevenlabs.io/v1",
        model: str = "eleven_multilingual_v2",
        stability: float = 0.5,
        similarity_boost: float = 0.75,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.voice_id = voice_id
        self.model = model
        self.stability = stability
        self.similarity_boost = similarity_boost
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "xi-api-key": api_key,
                "Content-Type": "application/json",
                "Accept": "audio/mpeg",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def synthesize(self, text: str) -> SynthesisResult:
        """Convert text to audio bytes."""
        try:
            response = await self._client.post(
                f"/text-to-speech/{self.voice_id}",
                json={
                    "text": text,
                    "model_id": self.model,
                    "voice_settings": {
                        "stability": self.stability,
                        "similarity_boost": self.similarity_boost,
                    },
                },
            )
        except Exception as e:
            logger.warning("speech_synthesis_failed", error=str(e))
            return SynthesisResult.failed(str(e))

        if not response.is_success:
            logger.warning(
                "speech_synthesis_failed",
                status_code=response.status_code,
                body=response.text,
            )
            return SynthesisResult.failed(f"{response.status_code}: {response.text}")

        logger.info("speech_synthesized", audio_bytes=len(response.content))
        return SynthesisResult.succeeded(response.content)


# Dependency injection helper
async def get_speech_client(settings: Settings = Depends(get_settings)):
    """FastAPI dependency for SpeechClient; yields None when speech is not configured."""
    if not settings.speech_enabled:
        yield None
        return
    client = SpeechClient(
        api_key=settings.elevenlabs_api_key.get_secret_value(),
        voice_id=settings.elevenlabs_voice_id,
        base_url=settings.elevenlabs_base_url,
        model=settings.tts_model,
        stability=settings.tts_stability,
        similarity_boost=settings.tts_similarity_boost,
        timeout=settings.upstream_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.close()
