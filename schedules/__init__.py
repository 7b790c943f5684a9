"""Schedule upload and risk analysis feature."""

from .models import AnalysisResponse, ScheduleRow
from .analyzer import ScheduleAnalyzer
from .normalizer import (
    EmptyScheduleError, ScheduleParseError, parse_schedule, render_rows, truncate_rows
)
from .routes import router

__all__ = [
    "AnalysisResponse", "ScheduleRow", "ScheduleAnalyzer",
    "EmptyScheduleError", "ScheduleParseError",
    "parse_schedule", "render_rows", "truncate_rows", "router",
]
