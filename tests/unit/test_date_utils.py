"""Unit tests for report date ranges"""

from datetime import date
from visiofex_reports.utils.date_utils import default_report_range, recent_window


def test_recent_window_spans_yesterday_to_today():
    assert recent_window(date(2024, 3, 1)) == (date(2024, 2, 29), date(2024, 3, 1))


def test_recent_window_start_never_equals_end():
    start, end = recent_window()
    assert start < end


def test_default_report_range_is_one_week():
    assert default_report_range(date(2024, 1, 8)) == (date(2024, 1, 1), date(2024, 1, 8))
