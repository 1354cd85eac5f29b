"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import Optional, Tuple


def recent_window(today: Optional[date] = None) -> Tuple[date, date]:
    """Yesterday-to-today range; the daily report endpoint rejects start == end"""
    today = today or date.today()
    return today - timedelta(days=1), today


def default_report_range(today: Optional[date] = None, days: int = 7) -> Tuple[date, date]:
    """Range used when the operator gives no explicit dates"""
    today = today or date.today()
    return today - timedelta(days=days), today
