"""Chat API routes."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
import structlog

from chat.models import ChatRequest, ChatResponse
from chat.orchestrator import ChatOrchestrator
from config import Settings, get_settings
from exceptions import ServerErrorException, UpstreamException
from gateway import read_json_body
from upstream import (
    CompletionClient, CompletionError, SpeechClient, get_completion_client, get_speech_client
)

logger = structlog.get_logger()

router = APIRouter()


def get_chat_orchestrator(
    settings: Settings = Depends(get_settings),
    completions: CompletionClient = Depends(get_completion_client),
    speech: Optional[SpeechClient] = Depends(get_speech_client),
) -> ChatOrchestrator:
    """FastAPI dependency for ChatOrchestrator."""
    return ChatOrchestrator(
        completions=completions,
        speech=speech,
        model=settings.chat_model,
        temperature=settings.chat_temperature,
    )


@router.post("", response_model=ChatResponse)
async def chat(
    request: Request,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """Send a message to Aero and get a reply, with audio when speech is configured.

    Accepts ``{"message": "..."}`` or ``{"text": "..."}``. A missing or
    malformed body is treated as an empty message.
    """
    try:
        chat_request = ChatRequest.from_payload(await read_json_body(request))
        return await orchestrator.respond(chat_request.message)
    except HTTPException:
        raise
    except CompletionError as e:
        raise UpstreamException(e.body)
    except Exception as e:
        logger.error("chat_failed", error=str(e))
        raise ServerErrorException(str(e))
