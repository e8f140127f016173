from pathlib import Path

from splitcast_core.domain.models import AppConfig, MonthlySummary
from splitcast_core.services import stats
from splitcast_core.services.formatting import format_amount, format_currency, month_label, month_names


def _summaries():
    return [
        MonthlySummary("2026-01", cash_total=100.0, installment_total=300.0),
        MonthlySummary("2026-02", cash_total=0.0, installment_total=300.0),
        MonthlySummary("2026-03", cash_total=400.0, installment_total=0.0),
    ]


def test_dashboard_stats():
    summaries = _summaries()
    assert stats.grand_total(summaries) == 1100.0
    assert stats.average_monthly_total(summaries) == 1100.0 / 3
    assert stats.peak_month(summaries).month == "2026-01"
    assert stats.mode_split(summaries) == (500.0, 600.0)
    assert stats.installment_ratio(summaries) == 600.0 / 1100.0 * 100


def test_dashboard_stats_empty():
    assert stats.average_monthly_total([]) == 0.0
    assert stats.peak_month([]) is None
    assert stats.installment_ratio([]) == 0.0


def test_format_currency_locales():
    assert format_currency(1234.5) == "R$ 1.234,50"
    us = AppConfig(store_path=Path("x"), locale="en-US", currency_symbol="$")
    assert format_currency(1234.5, us) == "$1,234.50"
    assert format_currency(-10, us) == "-$10.00"
    assert format_currency(0.004) == "R$ 0,00"


def test_month_labels():
    assert month_label("2025-11") == "nov/25"
    assert month_label("2026-01", "en-US") == "Jan 26"
    assert len(month_names("en-US")) == 12


def test_format_amount_matches_currency_body():
    assert format_amount(1500.0) == "1.500,00"
    assert format_amount(1500.0, "en-US") == "1,500.00"
    assert format_currency(1234567.891).endswith(format_amount(1234567.891))
