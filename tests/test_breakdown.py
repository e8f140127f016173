import datetime as dt

import pytest

from splitcast_core.services.breakdown import annual_breakdown, available_years, recent_records
from splitcast_core.services.projection import monthly_summaries
from splitcast_core.services.records import build_record


def _records():
    return [
        build_record("Notebook", 1200.0, "2025-11-15", "installment", 4, "Educação"),
        build_record("Aluguel", 1500.0, "2026-01-05", "cash", None, "Moradia"),
        build_record("Cinema", 60.0, "2024-03-02", "cash", None, "Lazer"),
    ]


def test_matrix_rows_include_categories_absent_in_year():
    result = annual_breakdown(_records(), 2026)
    assert result.categories == ("Educação", "Lazer", "Moradia")
    assert result.matrix["Lazer"] == (0.0,) * 12
    assert result.matrix["Moradia"][0] == 1500.0
    # Notebook: 2025-11, 2025-12, 2026-01, 2026-02 at 300 each
    assert result.matrix["Educação"][:3] == (300.0, 300.0, 0.0)


def test_matrix_totals():
    result = annual_breakdown(_records(), 2026)
    assert result.month_totals[0] == 1800.0
    assert result.month_totals[1] == 300.0
    assert result.year_total == 2100.0
    assert result.monthly_average == 2100.0 / 12
    assert result.peak_month_index == 0
    assert result.category_totals["Educação"] == 600.0


def test_matrix_matches_monthly_summaries_for_year():
    records = _records() + [build_record("Sofá", 999.0, "2026-10-30", "installment", 5, "Moradia")]
    for year in (2024, 2025, 2026, 2027):
        result = annual_breakdown(records, year)
        expected = sum(s.total for s in monthly_summaries(records) if s.month.startswith(f"{year}-"))
        assert abs(result.year_total - expected) < 1e-6


def test_empty_record_set_gives_zero_matrix():
    result = annual_breakdown([], 2026)
    assert result.categories == ()
    assert result.month_totals == [0.0] * 12
    assert result.year_total == 0.0
    assert result.peak_month_index is None


def test_available_years_descending_with_current_year():
    years = available_years(_records(), today=dt.date(2030, 1, 1))
    assert years == [2030, 2026, 2025, 2024]


def test_available_years_empty_system_offers_current_year():
    assert available_years([], today=dt.date(2026, 10, 18)) == [2026]


def test_recent_records_keeps_store_order():
    records = _records()
    assert recent_records(records, limit=2) == records[:2]


def test_breakdown_outputs_are_read_only():
    result = annual_breakdown(_records(), 2026)
    with pytest.raises(TypeError):
        result.matrix["Lazer"] = (1.0,) * 12
    with pytest.raises(TypeError):
        result.matrix["Moradia"][0] = 0.0
    assert isinstance(result.categories, tuple)
    assert result.to_dict()["matrix"]["Moradia"][0] == 1500.0
