"""Clients for the third-party AI services."""

from .completions import (
    CompletionClient, CompletionError, CompletionMessage, get_completion_client
)
from .speech import SpeechClient, SynthesisResult, get_speech_client

__all__ = [
    "CompletionClient", "CompletionError", "CompletionMessage", "get_completion_client",
    "SpeechClient", "SynthesisResult", "get_speech_client",
]
