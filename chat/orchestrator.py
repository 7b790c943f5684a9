"""Aero chat orchestration: completion, then optional speech."""

from typing import Optional
import structlog

from chat.models import ChatResponse
from upstream import CompletionClient, CompletionMessage, SpeechClient, SynthesisResult

logger = structlog.get_logger()

GREETING = (
    "Hi, I'm Aero. Tell me about your project and I'll help you build a schedule, "
    "identify risks, and figure out what to do next."
)
FALLBACK_REPLY = "I'm not sure how to respond to that."

SYSTEM_PROMPT = """You are "Aero", an AI Project Management Coach for new project managers using the ProjectPilot website.
- Be friendly, clear, and encouraging.
- Explain project management concepts in simple language.
- Use bullet points and short paragraphs.
- When asked for schedules, create concise markdown tables with tasks, owner, duration, dependencies, and notes.
- Focus on practical "what to do next" advice."""


def build_chat_messages(message: str) -> list[CompletionMessage]:
    """System persona plus the user's trimmed message."""
    return [
        CompletionMessage(role="system", content=SYSTEM_PROMPT),
        CompletionMessage(role="user", content=message.strip()),
    ]


class ChatOrchestrator:
    """Runs one chat turn against the completion and speech services."""

    def __init__(
        self,
        completions: CompletionClient,
        speech: Optional[SpeechClient],
        model: str,
        temperature: float,
    ):
        self.completions = completions
        self.speech = speech
        self.model = model
        self.temperature = temperature

    async def respond(self, message: str) -> ChatResponse:
        """Answer a user message.

        An empty message gets the greeting without touching any upstream.
        ``CompletionError`` propagates; speech failures never do.
        """
        message = message.strip()
        if not message:
            return ChatResponse(reply=GREETING, audio_base64=None)

        reply = await self.completions.complete(
            build_chat_messages(message),
            model=self.model,
            temperature=self.temperature,
        )
        reply = reply or FALLBACK_REPLY

        synthesis = await self._synthesize(reply)
        logger.info("chat_completed", reply_length=len(reply), speech=synthesis.status)
        return ChatResponse(reply=reply, audio_base64=synthesis.as_base64())

    async def _synthesize(self, reply: str) -> SynthesisResult:
        if self.speech is None:
            return SynthesisResult.skipped()
        return await self.speech.synthesize(reply)
