"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number or numeric string to Decimal, treating null/garbage as 0"""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def to_timestamp_text(value: Any) -> Optional[str]:
    """createdAt as text; numbers (epoch seconds) are kept as their digits, other shapes count as missing"""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value)
    return text or None


@dataclass(frozen=True)
class Transaction:
    """Transaction record from the payment API list endpoint"""

    id: str
    created_at: Optional[str]
    amount: Decimal
    platform_fee: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")

    @property
    def date_key(self) -> Optional[str]:
        """Calendar date (YYYY-MM-DD) the transaction is bucketed under"""
        if not isinstance(self.created_at, str) or not self.created_at:
            return None
        return self.created_at[:10]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Transaction":
        raw_id = payload.get("id")
        return cls(
            id="" if raw_id is None else str(raw_id),
            created_at=to_timestamp_text(payload.get("createdAt")),
            amount=to_decimal(payload.get("amount")),
            platform_fee=to_decimal(payload.get("platformFee")),
            net_profit=to_decimal(payload.get("netProfit")),
        )


@dataclass
class DailyBucket:
    """Per-date accumulator of counts and monetary sums"""

    count: int = 0
    gross: Decimal = Decimal("0")
    platform_fee: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")

    def add(self, txn: Transaction) -> None:
        self.count += 1
        self.gross += txn.amount
        self.platform_fee += txn.platform_fee
        self.net_profit += txn.net_profit


@dataclass
class PaginationResult:
    """Transactions merged from consecutive list-endpoint pages"""

    transactions: List[Transaction] = field(default_factory=list)
    total_fetched: int = 0
    pages_fetched: int = 0
    may_have_more: bool = False  # stopped at max_pages on a full page
    stopped_on_error: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class AggregateTotals:
    """Pre-summarized totals returned by the daily report endpoint"""

    count: int
    gross: Decimal
    platform_fee: Decimal
    net_profit: Decimal

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AggregateTotals":
        try:
            count = int(data.get("total_transaction_count") or 0)
        except (TypeError, ValueError):
            count = 0
        return cls(
            count=count,
            gross=to_decimal(data.get("total_daily_revenue")),
            platform_fee=to_decimal(data.get("total_platform_fees")),
            net_profit=to_decimal(data.get("net_profit")),
        )


@dataclass(frozen=True)
class AggregateSuccess:
    """Aggregate endpoint answered; totals is None when it had no data for the range"""

    totals: Optional[AggregateTotals]


@dataclass(frozen=True)
class AggregateFailure:
    """Aggregate endpoint could not be used"""

    error: Exception


AggregateOutcome = Union[AggregateSuccess, AggregateFailure]


@dataclass
class ReportResult:
    """Date-bucketed summary, most recent date first"""

    days: Dict[str, DailyBucket] = field(default_factory=dict)
    source: str = "transactions"  # "aggregate" | "transactions"
    pagination: Optional[PaginationResult] = None
    aggregate_error: Optional[str] = None

    @property
    def may_have_more(self) -> bool:
        return bool(self.pagination and self.pagination.may_have_more)

    @property
    def transaction_count(self) -> int:
        return sum(bucket.count for bucket in self.days.values())
