"""Schedule upload routes."""

from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
import structlog

from config import Settings, get_settings
from exceptions import (
    ClientInputException, ServerErrorException, UploadTooLargeException, UpstreamException
)
from schedules.analyzer import ScheduleAnalyzer
from schedules.models import AnalysisResponse
from schedules.normalizer import EmptyScheduleError, ScheduleParseError
from upstream import CompletionClient, CompletionError, get_completion_client

logger = structlog.get_logger()

router = APIRouter()


def get_schedule_analyzer(
    settings: Settings = Depends(get_settings),
    completions: CompletionClient = Depends(get_completion_client),
) -> ScheduleAnalyzer:
    """FastAPI dependency for ScheduleAnalyzer."""
    return ScheduleAnalyzer(
        completions=completions,
        model=settings.chat_model,
        temperature=settings.analysis_temperature,
        max_rows=settings.max_schedule_rows,
    )


def require_schedule_file(schedule: Optional[UploadFile] = File(None)) -> UploadFile:
    """FastAPI dependency for the uploaded ``schedule`` form field.

    Declared ahead of the analyzer so a missing file is reported before
    upstream configuration is checked.
    """
    if schedule is None:
        raise ClientInputException("No file uploaded.")
    return schedule


@router.post("/upload-schedule", response_model=AnalysisResponse)
async def upload_schedule(
    schedule: UploadFile = Depends(require_schedule_file),
    settings: Settings = Depends(get_settings),
    analyzer: ScheduleAnalyzer = Depends(get_schedule_analyzer),
):
    """Upload a CSV schedule (form field ``schedule``) and get a risk assessment."""
    try:
        data = await schedule.read(settings.max_upload_bytes + 1)
        if len(data) > settings.max_upload_bytes:
            logger.warning("schedule_upload_too_large", filename=schedule.filename)
            raise UploadTooLargeException(settings.max_upload_bytes)

        result = await analyzer.analyze(data)
        logger.info("schedule_analyzed", filename=schedule.filename, upload_bytes=len(data))
        return result
    except HTTPException:
        raise
    except ScheduleParseError as e:
        logger.warning("schedule_parse_failed", error=str(e))
        raise ClientInputException(f"Could not parse CSV: {e}")
    except EmptyScheduleError as e:
        raise ClientInputException(str(e))
    except CompletionError as e:
        raise UpstreamException(e.body)
    except Exception as e:
        logger.error("upload_schedule_failed", error=str(e))
        raise ServerErrorException(str(e))
