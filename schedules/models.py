"""Schedule analysis data models."""

from pydantic import BaseModel

# One CSV record keyed by column header
ScheduleRow = dict[str, str]


class AnalysisResponse(BaseModel):
    """Markdown assessment of an uploaded schedule, ending in a risk table."""
    analysis: str
