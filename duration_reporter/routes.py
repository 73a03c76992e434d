"""
Duration Reporter API Routes

Read-only HTTP view of the global duration reporter, plus a clear endpoint.
Actions are never begun or ended over HTTP; tracking stays in-process.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from .reporter import get_duration_reporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/durations", tags=["durations"])


class ClearResponse(BaseModel):
    """Response model for clearing collected durations"""
    cleared_events: int
    timestamp: str


def _json_safe(value: Any) -> Any:
    """Payloads are opaque; fall back to repr for anything JSON can't carry"""
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return repr(value)


@router.get("/report", response_class=PlainTextResponse, summary="Get the rendered duration report")
async def get_duration_report():
    """
    Render collected durations with the reporter's configured generator
    """
    try:
        return get_duration_reporter().generate_report()
    except Exception as e:
        logger.error(f"Failed to generate duration report: {e}")
        raise HTTPException(status_code=500, detail=f"Report generation error: {str(e)}")


@router.get("/data", summary="Get collected durations as structured data")
async def get_duration_data() -> Dict[str, Any]:
    """
    Export every event with its total and per-action reports
    """
    data = get_duration_reporter().export()
    for event in data['events'].values():
        for report in event['reports']:
            report['begin_payload'] = _json_safe(report['begin_payload'])
            report['end_payload'] = _json_safe(report['end_payload'])

    data['timestamp'] = datetime.now().isoformat()
    return data


@router.delete("", response_model=ClearResponse, summary="Clear collected durations")
async def clear_durations():
    """
    Clear all gathered data; numbering restarts on the next begin
    """
    cleared_events = get_duration_reporter().clear()
    return ClearResponse(cleared_events=cleared_events, timestamp=datetime.now().isoformat())
