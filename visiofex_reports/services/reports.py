"""Report orchestration - aggregate endpoint first, transaction pagination as fallback"""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from visiofex_reports.domain.aggregation import (
    build_daily_summary,
    filter_by_date_range,
    filter_by_dates,
    summary_from_totals,
)
from visiofex_reports.domain.exceptions import (
    DomainException,
    InvalidDateRangeError,
    MissingCredentialError,
    ReportUnavailableError,
)
from visiofex_reports.domain.models import AggregateFailure, AggregateOutcome, ReportResult
from visiofex_reports.infrastructure.cache.gateway import CacheGateway, daily_key
from visiofex_reports.infrastructure.clients.visiofex import VisioFexClient, parse_daily_report
from visiofex_reports.infrastructure.observability.metrics import report_counter, report_fallback_counter
from visiofex_reports.services.pagination import TransactionPaginator
from visiofex_reports.utils.date_utils import recent_window

logger = logging.getLogger(__name__)


class ReportService:
    """Builds daily financial reports for an operator-facing view"""

    def __init__(
        self,
        client: VisioFexClient,
        cache: CacheGateway,
        paginator: Optional[TransactionPaginator] = None,
        fallback_page_size: int = 250,
        fallback_max_pages: int = 20,
        recent_label: str = "Recent Days",
    ):
        self.client = client
        self.cache = cache
        self.paginator = paginator or TransactionPaginator(client, cache)
        self.fallback_page_size = fallback_page_size
        self.fallback_max_pages = fallback_max_pages
        self.recent_label = recent_label

    def fetch_aggregate(self, start: date, end: date, force: bool = False) -> AggregateOutcome:
        """Call the daily report endpoint through the cache; errors become AggregateFailure"""

        def fetch_usable_payload():
            payload = self.client.fetch_daily_report(start, end)
            outcome = parse_daily_report(payload)
            # Unusable bodies must not be cached
            if isinstance(outcome, AggregateFailure):
                raise outcome.error
            return payload

        try:
            payload = self.cache.get_or_compute(daily_key(start, end), fetch_usable_payload, force=force)
        except DomainException as e:
            return AggregateFailure(e)
        return parse_daily_report(payload)

    def get_report(self, start: date, end: date, force: bool = False) -> ReportResult:
        """
        Daily summary for [start, end].

        Raises:
            InvalidDateRangeError: start is after end
            ReportUnavailableError: aggregate endpoint and fallback both failed
        """
        if start > end:
            raise InvalidDateRangeError(f"Start date {start} is after end date {end}")
        return self._build(start, end, force, recent=False)

    def get_recent_report(self, force: bool = False, today: Optional[date] = None) -> ReportResult:
        """Summary for yesterday and today"""
        start, end = recent_window(today)
        return self._build(start, end, force, recent=True)

    def clear_cache(self) -> int:
        return self.cache.purge("")

    def _build(self, start: date, end: date, force: bool, recent: bool) -> ReportResult:
        outcome = self.fetch_aggregate(start, end, force=force)

        if isinstance(outcome, AggregateFailure):
            report_fallback_counter.inc()
            logger.warning(
                f"Error fetching daily report, falling back to transaction list: {outcome.error}",
                extra={"start": start.isoformat(), "end": end.isoformat()},
            )
            report = self._fallback(start, end, force, recent, outcome.error)
        elif outcome.totals is None:
            report = ReportResult(source="aggregate")
        else:
            label = self.recent_label if recent else start.isoformat()
            report = summary_from_totals(label, outcome.totals)

        report_counter.labels(source=report.source).inc()
        return report

    def _fallback(self, start: date, end: date, force: bool, recent: bool, cause: Exception) -> ReportResult:
        try:
            pagination = self.paginator.fetch_all(self.fallback_page_size, self.fallback_max_pages, force=force)
        except DomainException as e:
            logger.error(
                f"Transaction fallback failed: {e}",
                extra={"start": start.isoformat(), "end": end.isoformat(), "aggregate_error": str(cause)},
            )
            if isinstance(e, MissingCredentialError):
                raise
            raise ReportUnavailableError("transaction list", f"{e} (daily report: {cause})") from e

        if recent:
            transactions = filter_by_dates(pagination.transactions, (start, end))
        else:
            transactions = filter_by_date_range(pagination.transactions, start, end)

        return replace(
            build_daily_summary(transactions),
            pagination=pagination,
            aggregate_error=str(cause),
        )
