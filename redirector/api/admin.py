"""
FastAPI Endpoints for the Admin Surface

Every route here requires the shared secret (see core/security.py) and is
exempt from rate limiting and the kill switch.

Unlike the redirect path, store failures are surfaced to the caller:
these are low-volume operator calls where visibility matters more than
availability.
"""

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from redirector.api.schemas import AdminStateResponse, KillSwitchResponse, RecentClick
from redirector.core.exceptions import DatabaseError, ServiceUnavailableError
from redirector.core.security import require_admin
from redirector.services.report_service import ReportService
from redirector.services.state import RedirectorState, get_state

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _csv_attachment(content: str, filename: str) -> PlainTextResponse:
    return PlainTextResponse(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def _raise_for_store_error(error: Exception) -> None:
    if isinstance(error, ServiceUnavailableError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(error)
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(error)
    )


@router.get(
    "/last",
    response_model=list[RecentClick],
    summary="Most recent clicks",
    description="Returns the 5 most recently recorded clicks, newest first"
)
async def last_clicks(state: RedirectorState = Depends(get_state)) -> list[dict]:
    try:
        return await ReportService(state.event_store).last()
    except (DatabaseError, ServiceUnavailableError) as e:
        _raise_for_store_error(e)


@router.get("/export", summary="Export recent clicks as CSV")
async def export_clicks(state: RedirectorState = Depends(get_state)) -> PlainTextResponse:
    try:
        content = await ReportService(state.event_store).export_recent()
    except (DatabaseError, ServiceUnavailableError) as e:
        _raise_for_store_error(e)

    return _csv_attachment(content, "clicks.csv")


@router.get("/export/day", summary="Export one UTC day of clicks as CSV")
async def export_clicks_for_day(
    day: Optional[date] = Query(default=None, description="Day as YYYY-MM-DD, defaults to today (UTC)"),
    state: RedirectorState = Depends(get_state)
) -> PlainTextResponse:
    if day is None:
        day = datetime.now(timezone.utc).date()

    try:
        content = await ReportService(state.event_store).export_day(day)
    except (DatabaseError, ServiceUnavailableError) as e:
        _raise_for_store_error(e)

    return _csv_attachment(content, f"clicks-{day.isoformat()}.csv")


@router.post("/kill", response_model=KillSwitchResponse, summary="Disable public traffic")
async def kill(state: RedirectorState = Depends(get_state)) -> KillSwitchResponse:
    state.kill_switch.kill()
    return KillSwitchResponse(killed=state.kill_switch.killed)


@router.post("/unkill", response_model=KillSwitchResponse, summary="Re-enable public traffic")
async def unkill(state: RedirectorState = Depends(get_state)) -> KillSwitchResponse:
    state.kill_switch.unkill()
    return KillSwitchResponse(killed=state.kill_switch.killed)


@router.get("/state", response_model=AdminStateResponse, summary="Kill switch and store state")
async def admin_state(state: RedirectorState = Depends(get_state)) -> AdminStateResponse:
    return AdminStateResponse(
        killed=state.kill_switch.killed,
        store=state.event_store is not None,
        pending_writes=state.event_logger.pending
    )
