import datetime as dt

from splitcast_core.domain.models import PaymentMode
from splitcast_core.services.projection import allocations_frame, expand_record, expand_records, monthly_summaries
from splitcast_core.services.records import build_record


def _installment(amount: float, date: str, count: int, category: str = "Lazer", description: str = "TV"):
    return build_record(description, amount, date, "installment", count, category)


def _cash(amount: float, date: str, category: str = "Geral", description: str = "Mercado"):
    return build_record(description, amount, date, "cash", None, category)


def test_cash_record_single_allocation():
    record = _cash(500, "2026-03-10")
    allocations = expand_record(record)
    assert len(allocations) == 1
    assert allocations[0].month == "2026-03"
    assert allocations[0].allocated_amount == 500
    assert allocations[0].installment_label is None
    assert allocations[0].payment_mode is PaymentMode.CASH


def test_installment_split_sums_to_amount():
    record = _installment(1000.0, "2026-01-31", 3)
    allocations = expand_record(record)
    assert len(allocations) == 3
    assert abs(sum(a.allocated_amount for a in allocations) - 1000.0) < 1e-9
    assert [a.installment_label for a in allocations] == ["1/3", "2/3", "3/3"]


def test_installment_months_roll_over_year():
    record = _installment(400.0, "2025-11-15", 4)
    months = [a.month for a in expand_record(record)]
    assert months == ["2025-11", "2025-12", "2026-01", "2026-02"]


def test_end_of_month_origin_does_not_skip_months():
    # Jan 31 + 1 month must land in February, not March
    record = _installment(300.0, "2026-01-31", 3)
    assert [a.month for a in expand_record(record)] == ["2026-01", "2026-02", "2026-03"]


def test_long_plan_occupies_consecutive_months():
    record = _installment(2400.0, "2024-07-01", 24)
    months = [a.month for a in expand_record(record)]
    assert len(months) == 24 == len(set(months))
    assert months[0] == "2024-07"
    assert months[-1] == "2026-06"


def test_summaries_sorted_and_split_by_mode():
    records = [
        _installment(300.0, "2026-02-01", 3),
        _cash(50.0, "2026-01-20"),
        _cash(25.0, "2026-03-05"),
    ]
    summaries = monthly_summaries(records)
    assert [s.month for s in summaries] == ["2026-01", "2026-02", "2026-03", "2026-04"]
    jan, feb, mar, apr = summaries
    assert jan.cash_total == 50.0 and jan.installment_total == 0.0
    assert feb.installment_total == 100.0 and feb.cash_total == 0.0
    assert mar.total == 125.0
    assert apr.total == 100.0


def test_summaries_skip_empty_months():
    records = [_cash(10.0, "2025-01-01"), _cash(20.0, "2025-06-01")]
    assert [s.month for s in monthly_summaries(records)] == ["2025-01", "2025-06"]


def test_summary_totals_reconcile_with_amounts():
    records = [
        _installment(999.99, "2025-10-10", 7),
        _installment(123.45, "2025-12-31", 12),
        _cash(10.0, "2026-01-01"),
        _cash(0.0, "2026-01-02"),
    ]
    total = sum(s.total for s in monthly_summaries(records))
    assert abs(total - sum(r.amount for r in records)) < 1e-6


def test_summaries_do_not_depend_on_input_order():
    records = [_installment(600.0, "2026-05-01", 6), _cash(40.0, "2026-07-09"), _cash(15.0, "2026-04-01")]
    assert monthly_summaries(records) == monthly_summaries(list(reversed(records)))


def test_empty_inputs():
    assert monthly_summaries([]) == []
    assert expand_records([]) == []
    assert allocations_frame([]).empty


def test_removed_record_leaves_no_residue():
    keep = _cash(10.0, "2026-01-01")
    drop = _installment(120.0, "2026-01-01", 12)
    remaining = [r for r in [keep, drop] if r.id != drop.id]
    summaries = monthly_summaries(remaining)
    assert [s.month for s in summaries] == ["2026-01"]
    assert summaries[0].installment_total == 0.0
    assert all(a.source_id != drop.id for a in expand_records(remaining))


def test_record_date_is_a_plain_date():
    assert _cash(1.0, "2026-03-10").date == dt.date(2026, 3, 10)
