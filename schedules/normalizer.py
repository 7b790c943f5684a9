"""CSV schedule parsing and prompt rendering."""

import csv
import io
import re

from schedules.models import ScheduleRow
from upstream import CompletionMessage

MAX_ROWS = 120
# A single cell may be as large as the whole upload
MAX_FIELD_SIZE = 5 * 1024 * 1024

csv.field_size_limit(max(csv.field_size_limit(), MAX_FIELD_SIZE))

_LINE_BREAKS = re.compile(r"[\r\n]+")

ANALYSIS_SYSTEM_PROMPT = """You are "Aero", an experienced project scheduler reviewing a project schedule for a new project manager.
You will receive the schedule as comma-separated rows with a header line.
1. Start with a short assessment of the schedule: overall structure, sequencing, durations, dependencies, owners, and any obvious gaps.
2. Then list 8-12 key risks as a markdown table with the columns: ID, Risk, Why it matters, Suggested mitigation, Likelihood, Impact.
Use High, Medium, or Low for Likelihood and Impact. Keep the language simple and practical."""


class ScheduleParseError(ValueError):
    """Upload is not readable as CSV."""


class EmptyScheduleError(ValueError):
    """CSV has a header but no data rows."""


def parse_schedule(data: bytes) -> list[ScheduleRow]:
    """Decode UTF-8 CSV bytes into rows keyed by the header line.

    Blank lines are skipped. Records whose field count does not match the
    header are rejected.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ScheduleParseError(f"file is not valid UTF-8 ({e.reason})") from e

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[ScheduleRow] = []
    try:
        for record in reader:
            if not record or all(not field.strip() for field in record):
                continue
            if header is None:
                header = [name.strip() for name in record]
                continue
            if len(record) != len(header):
                raise ScheduleParseError(
                    f"line {reader.line_num} has {len(record)} fields, "
                    f"expected {len(header)}"
                )
            rows.append(dict(zip(header, record)))
    except csv.Error as e:
        raise ScheduleParseError(f"line {reader.line_num}: {e}") from e
    return rows


def truncate_rows(rows: list[ScheduleRow], limit: int = MAX_ROWS) -> list[ScheduleRow]:
    return rows[:limit]


def sanitize_cell(value: str) -> str:
    """Flatten a cell so the rendered line stays comma-delimited without quoting."""
    return _LINE_BREAKS.sub(" ", value).replace(",", ";")


def render_rows(rows: list[ScheduleRow]) -> str:
    """Render rows as a header line plus one comma-joined line per row.

    Column order comes from the first row. The output is lossy: commas in
    cells become semicolons and line breaks become spaces.
    """
    if not rows:
        return ""
    columns = list(rows[0].keys())
    lines = [",".join(columns)]
    for row in rows:
        lines.append(",".join(sanitize_cell(row.get(column) or "") for column in columns))
    return "\n".join(lines)


def build_analysis_messages(csv_text: str) -> list[CompletionMessage]:
    return [
        CompletionMessage(role="system", content=ANALYSIS_SYSTEM_PROMPT),
        CompletionMessage(
            role="user",
            content=(
                "Here is my project schedule as CSV:\n\n"
                f"{csv_text}\n\n"
                "Please assess it and list the key risks."
            ),
        ),
    ]
