"""GET /v1/reports/daily and POST /v1/cache/clear - operator reporting endpoints"""

import time
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from visiofex_reports.api.dependencies import get_report_service, get_request_id, require_admin
from visiofex_reports.api.v1.schemas import CacheClearResponse, ReportResponse
from visiofex_reports.domain.exceptions import (
    InvalidDateRangeError,
    MissingCredentialError,
    ReportUnavailableError,
)
from visiofex_reports.infrastructure.observability.logging import log_report
from visiofex_reports.services.reports import ReportService
from visiofex_reports.utils.date_utils import default_report_range, recent_window

router = APIRouter()


@router.get("/reports/daily", response_model=ReportResponse)
def get_daily_report(
    request: Request,
    start: Optional[date] = Query(None, description="First day of the range (default: 7 days ago)"),
    end: Optional[date] = Query(None, description="Last day of the range (default: today)"),
    recent: bool = Query(False, description="Yesterday and today, ignores start/end"),
    force: bool = Query(False, description="Bypass cached API responses"),
    service: ReportService = Depends(get_report_service),
):
    """
    Daily transaction summary.

    Flow:
    1. Ask the accounting endpoint for pre-summarized totals
    2. On failure, page through the transaction list and aggregate per day
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if recent:
        start, end = recent_window()
    else:
        default_start, default_end = default_report_range()
        start = start or default_start
        end = end or default_end

    try:
        if recent:
            result = service.get_recent_report(force=force, today=end)
        else:
            result = service.get_report(start, end, force=force)

    except InvalidDateRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    except MissingCredentialError as e:
        logging.error(f"Missing API key: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="API key not configured")

    except ReportUnavailableError as e:
        logging.error(f"Report unavailable: {e}", extra={"request_id": request_id, "stage": e.stage})
        raise HTTPException(status_code=502, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    log_report(
        request_id,
        start.isoformat(),
        end.isoformat(),
        result.source,
        len(result.days),
        result.may_have_more,
        duration_ms,
        aggregate_error=result.aggregate_error,
    )

    return ReportResponse.from_result(start.isoformat(), end.isoformat(), result)


@router.post("/cache/clear", response_model=CacheClearResponse, dependencies=[Depends(require_admin)])
def clear_cache(request: Request, service: ReportService = Depends(get_report_service)):
    """Drop every cached API response of this service"""
    cleared = service.clear_cache()
    logging.info("Cache cleared", extra={"request_id": get_request_id(request), "cleared": cleared})
    return CacheClearResponse(cleared=cleared)
