"""Unit tests for daily aggregation logic"""

from datetime import date
from decimal import Decimal
from visiofex_reports.domain.models import AggregateTotals, Transaction
from visiofex_reports.domain.aggregation import (
    build_daily_summary,
    filter_by_date_range,
    filter_by_dates,
    summary_from_totals,
)


def _txns(payloads):
    return [Transaction.from_payload(p) for p in payloads]


def test_build_daily_summary_groups_by_day_descending(sample_transactions):
    """Two days, most recent first, with missing fees counted as zero"""
    result = build_daily_summary(_txns(sample_transactions))

    assert list(result.days) == ["2024-01-02", "2024-01-01"]

    jan2 = result.days["2024-01-02"]
    assert jan2.count == 1
    assert jan2.gross == Decimal("20")
    assert jan2.platform_fee == Decimal("0")
    assert jan2.net_profit == Decimal("0")

    jan1 = result.days["2024-01-01"]
    assert jan1.count == 2
    assert jan1.gross == Decimal("150")
    assert jan1.platform_fee == Decimal("7")
    assert jan1.net_profit == Decimal("135")


def test_build_daily_summary_skips_missing_created_at():
    """Transactions without createdAt land in no bucket"""
    transactions = _txns([
        {"id": "1", "createdAt": "2024-03-05T08:00:00Z", "amount": 10},
        {"id": "2", "amount": 99},
        {"id": "3", "createdAt": "", "amount": 99},
        {"id": "4", "createdAt": None, "amount": 99},
    ])

    result = build_daily_summary(transactions)

    assert list(result.days) == ["2024-03-05"]
    assert result.transaction_count == 1
    assert result.days["2024-03-05"].gross == Decimal("10")


def test_build_daily_summary_counts_match_dated_transactions():
    """Bucket counts add up to the number of transactions with a timestamp"""
    payloads = []
    for i in range(40):
        created_at = None if i % 7 == 0 else f"2024-02-{(i % 9) + 1:02d}T00:00:00Z"
        payloads.append({"id": str(i), "createdAt": created_at, "amount": i})
    transactions = _txns(payloads)

    result = build_daily_summary(transactions)

    dated = sum(1 for t in transactions if t.created_at)
    assert sum(bucket.count for bucket in result.days.values()) == dated


def test_build_daily_summary_is_idempotent(sample_transactions):
    transactions = _txns(sample_transactions)

    first = build_daily_summary(transactions)
    second = build_daily_summary(transactions)

    assert first == second
    assert list(first.days) == list(second.days)


def test_build_daily_summary_empty_input():
    result = build_daily_summary([])

    assert result.days == {}
    assert result.source == "transactions"


def test_build_daily_summary_keeps_decimal_precision():
    """Cents do not drift the way float sums do"""
    transactions = _txns([
        {"id": str(i), "createdAt": "2024-01-01T00:00:00Z", "amount": "0.10"} for i in range(3)
    ])

    result = build_daily_summary(transactions)

    assert result.days["2024-01-01"].gross == Decimal("0.30")


def test_filter_by_date_range_is_inclusive():
    transactions = _txns([
        {"id": "a", "createdAt": "2024-01-01T23:59:59Z", "amount": 1},
        {"id": "b", "createdAt": "2024-01-02T00:00:00Z", "amount": 1},
        {"id": "c", "createdAt": "2024-01-05T12:00:00Z", "amount": 1},
        {"id": "d", "createdAt": "2024-01-06T00:00:00Z", "amount": 1},
        {"id": "e", "amount": 1},
    ])

    kept = filter_by_date_range(transactions, date(2024, 1, 2), date(2024, 1, 5))

    assert [t.id for t in kept] == ["b", "c"]


def test_filter_by_dates_matches_exact_days():
    transactions = _txns([
        {"id": "a", "createdAt": "2024-06-09T10:00:00Z", "amount": 1},
        {"id": "b", "createdAt": "2024-06-10T10:00:00Z", "amount": 1},
        {"id": "c", "createdAt": "2024-06-11T10:00:00Z", "amount": 1},
    ])

    kept = filter_by_dates(transactions, [date(2024, 6, 10), "2024-06-11"])

    assert [t.id for t in kept] == ["b", "c"]


def test_summary_from_totals_single_entry():
    totals = AggregateTotals.from_payload({
        "total_transaction_count": 12,
        "total_daily_revenue": "540.25",
        "total_platform_fees": 16.2,
        "net_profit": None,
    })

    result = summary_from_totals("Recent Days", totals)

    assert result.source == "aggregate"
    assert list(result.days) == ["Recent Days"]
    bucket = result.days["Recent Days"]
    assert bucket.count == 12
    assert bucket.gross == Decimal("540.25")
    assert bucket.platform_fee == Decimal("16.2")
    assert bucket.net_profit == Decimal("0")


def test_transaction_from_payload_defaults():
    txn = Transaction.from_payload({"id": 7, "createdAt": "2024-01-01T00:00:00Z", "amount": 3.5})

    assert txn.id == "7"
    assert txn.amount == Decimal("3.5")
    assert txn.platform_fee == Decimal("0")
    assert txn.net_profit == Decimal("0")
    assert txn.date_key == "2024-01-01"


def test_build_daily_summary_tolerates_non_string_created_at():
    """Epoch numbers are bucketed by their leading digits, objects count as missing"""
    transactions = _txns([
        {"id": "1", "createdAt": 1704103200, "amount": 5},
        {"id": "2", "createdAt": {"date": "2024-01-01"}, "amount": 7},
        {"id": "3", "createdAt": True, "amount": 9},
        {"id": "4", "createdAt": "2024-01-01T10:00:00Z", "amount": 11},
    ])

    result = build_daily_summary(transactions)

    assert list(result.days) == ["2024-01-01", "1704103200"]
    assert result.days["1704103200"].gross == Decimal("5")
    assert result.transaction_count == 2


def test_filter_by_date_range_skips_epoch_created_at():
    transactions = _txns([
        {"id": "epoch", "createdAt": 1704103200, "amount": 1},
        {"id": "iso", "createdAt": "2024-01-01T10:00:00Z", "amount": 1},
    ])

    kept = filter_by_date_range(transactions, date(2024, 1, 1), date(2024, 1, 2))

    assert [t.id for t in kept] == ["iso"]
