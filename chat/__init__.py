"""Aero chat feature."""

from .models import ChatRequest, ChatResponse
from .orchestrator import ChatOrchestrator
from .routes import router

__all__ = ["ChatRequest", "ChatResponse", "ChatOrchestrator", "router"]
