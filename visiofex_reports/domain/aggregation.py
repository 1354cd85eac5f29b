"""Daily aggregation engine - folds transactions into per-date financial buckets"""

from datetime import date
from typing import Dict, Iterable, List, Set, Union

from visiofex_reports.domain.models import AggregateTotals, DailyBucket, ReportResult, Transaction

DateLike = Union[date, str]


def _iso(value: DateLike) -> str:
    return value.isoformat() if isinstance(value, date) else value


def build_daily_summary(transactions: Iterable[Transaction]) -> ReportResult:
    """
    Group transactions into per-day buckets.

    - Date key is the first 10 characters of created_at
    - Transactions without created_at are skipped
    - Result is ordered by date, most recent first
    """
    buckets: Dict[str, DailyBucket] = {}
    for txn in transactions:
        day = txn.date_key
        if day is None:
            continue
        if day not in buckets:
            buckets[day] = DailyBucket()
        buckets[day].add(txn)

    ordered = {day: buckets[day] for day in sorted(buckets, reverse=True)}
    return ReportResult(days=ordered, source="transactions")


def filter_by_date_range(transactions: Iterable[Transaction], start: DateLike, end: DateLike) -> List[Transaction]:
    """Keep transactions whose date key lies in [start, end] (ISO strings compare chronologically)"""
    start_key, end_key = _iso(start), _iso(end)
    return [
        t for t in transactions
        if t.date_key is not None and start_key <= t.date_key <= end_key
    ]


def filter_by_dates(transactions: Iterable[Transaction], dates: Iterable[DateLike]) -> List[Transaction]:
    """Keep transactions whose date key is one of the given dates"""
    wanted: Set[str] = {_iso(d) for d in dates}
    return [t for t in transactions if t.date_key in wanted]


def summary_from_totals(label: str, totals: AggregateTotals) -> ReportResult:
    """Wrap aggregate endpoint totals as a single-entry report"""
    bucket = DailyBucket(
        count=totals.count,
        gross=totals.gross,
        platform_fee=totals.platform_fee,
        net_profit=totals.net_profit,
    )
    return ReportResult(days={label: bucket}, source="aggregate")
