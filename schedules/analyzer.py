"""Schedule risk analysis against the completion service."""

import structlog

from schedules.models import AnalysisResponse
from schedules.normalizer import (
    MAX_ROWS, EmptyScheduleError, build_analysis_messages, parse_schedule,
    render_rows, truncate_rows,
)
from upstream import CompletionClient

logger = structlog.get_logger()

FALLBACK_ANALYSIS = "No analysis was returned."


class ScheduleAnalyzer:
    """Turns an uploaded CSV schedule into a markdown risk assessment."""

    def __init__(
        self,
        completions: CompletionClient,
        model: str,
        temperature: float,
        max_rows: int = MAX_ROWS,
    ):
        self.completions = completions
        self.model = model
        self.temperature = temperature
        self.max_rows = max_rows

    async def analyze(self, data: bytes) -> AnalysisResponse:
        """Parse, bound and render the CSV, then ask for an assessment.

        Raises ``ScheduleParseError`` or ``EmptyScheduleError`` for bad input;
        ``CompletionError`` propagates.
        """
        rows = parse_schedule(data)
        if not rows:
            raise EmptyScheduleError("CSV contains no data rows.")

        kept = truncate_rows(rows, self.max_rows)
        csv_text = render_rows(kept)
        logger.info("schedule_rendered", total_rows=len(rows), kept_rows=len(kept))

        analysis = await self.completions.complete(
            build_analysis_messages(csv_text),
            model=self.model,
            temperature=self.temperature,
        )
        return AnalysisResponse(analysis=analysis or FALLBACK_ANALYSIS)
