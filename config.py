"""Application configuration."""

import json
from functools import lru_cache
from typing import Annotated, Literal, Optional
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_ALLOWED_ORIGINS = [
    "https://projectpilot.ai",
    "https://www.projectpilot.ai",
    "https://projectpilot-ai.filesusr.com",
    "https://www-projectpilot-ai.filesusr.com",
    "https://renaeliving.wixsite.com",
    "https://renaeliving-wixsite-com.filesusr.com",
]


class Settings(BaseSettings):
    """App settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Server
    environment: str = "development"
    port: int = 3000

    # OpenAI chat completions
    openai_api_key: Optional[SecretStr] = None
    openai_base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-4.1-mini"
    chat_temperature: float = 0.4
    analysis_temperature: float = 0.2

    # ElevenLabs text-to-speech (optional)
    elevenlabs_api_key: Optional[SecretStr] = None
    elevenlabs_voice_id: Optional[str] = None
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    tts_model: str = "eleven_multilingual_v2"
    tts_stability: float = 0.5
    tts_similarity_boost: float = 0.75

    # Applied to every outbound call
    upstream_timeout_seconds: float = 30.0

    # Uploads
    max_upload_bytes: int = 5 * 1024 * 1024
    max_schedule_rows: int = 120

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = DEFAULT_ALLOWED_ORIGINS
    origin_match: Literal["prefix", "exact"] = "prefix"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        """Accept a JSON list or a comma-separated string."""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def completion_configured(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.get_secret_value())

    @property
    def speech_enabled(self) -> bool:
        """Speech needs both the ElevenLabs key and a voice id."""
        return bool(
            self.elevenlabs_api_key
            and self.elevenlabs_api_key.get_secret_value()
            and self.elevenlabs_voice_id
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
