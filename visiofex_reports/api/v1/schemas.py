"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from visiofex_reports.domain.models import ReportResult


class DailySummaryItem(BaseModel):
    """One row of the report table"""

    date: str
    count: int
    gross: Decimal
    platform_fee: Decimal
    net_profit: Decimal


class PaginationInfo(BaseModel):
    """How much of the transaction list the fallback saw"""

    total_fetched: int
    pages_fetched: int
    may_have_more: bool
    stopped_on_error: bool


class ReportResponse(BaseModel):
    """Response for GET /v1/reports/daily"""

    start: str
    end: str
    source: str
    days: List[DailySummaryItem]
    pagination: Optional[PaginationInfo] = None
    aggregate_error: Optional[str] = None

    @classmethod
    def from_result(cls, start: str, end: str, result: ReportResult) -> "ReportResponse":
        pagination = None
        if result.pagination is not None:
            pagination = PaginationInfo(
                total_fetched=result.pagination.total_fetched,
                pages_fetched=result.pagination.pages_fetched,
                may_have_more=result.pagination.may_have_more,
                stopped_on_error=result.pagination.stopped_on_error,
            )
        return cls(
            start=start,
            end=end,
            source=result.source,
            days=[
                DailySummaryItem(
                    date=day,
                    count=bucket.count,
                    gross=bucket.gross,
                    platform_fee=bucket.platform_fee,
                    net_profit=bucket.net_profit,
                )
                for day, bucket in result.days.items()
            ],
            pagination=pagination,
            aggregate_error=result.aggregate_error,
        )


class CacheClearResponse(BaseModel):
    """Response for POST /v1/cache/clear"""

    cleared: int
