from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

import pandas as pd

from splitcast_core.domain.models import (
    ALL,
    DateRange,
    ExpenseRecord,
    InstallmentProgress,
    PaymentMode,
    RecordFilter,
)
from splitcast_core.services.records import parse_payment_mode

QUICK_RANGES = ("all", "today", "last_7_days", "last_30_days", "this_month", "last_month", "this_year")


def filter_records(records: Iterable[ExpenseRecord], record_filter: Optional[RecordFilter] = None) -> List[ExpenseRecord]:
    """
    Filters raw records (not allocations) by category, payment mode and
    origin date. Input order is preserved.
    """
    f = record_filter or RecordFilter()
    mode = ALL if f.payment_mode == ALL else parse_payment_mode(f.payment_mode)
    out = []
    for r in records:
        if f.category != ALL and r.category != f.category:
            continue
        if mode != ALL and r.payment_mode is not mode:
            continue
        if not f.date_range.contains(r.date):
            continue
        out.append(r)
    return out


def _month_bounds(period: pd.Period) -> DateRange:
    return DateRange(start=period.start_time.date(), end=period.end_time.date())


def quick_range(name: str, today: Optional[dt.date] = None) -> DateRange:
    today = today or dt.date.today()
    current = pd.Period(today, freq="M")

    if name == "all":
        return DateRange()
    if name == "today":
        return DateRange(start=today, end=today)
    if name == "last_7_days":
        return DateRange(start=today - dt.timedelta(days=7), end=today)
    if name == "last_30_days":
        return DateRange(start=today - dt.timedelta(days=30), end=today)
    if name == "this_month":
        return _month_bounds(current)
    if name == "last_month":
        return _month_bounds(current - 1)
    if name == "this_year":
        return DateRange(start=dt.date(today.year, 1, 1), end=today)
    raise ValueError(f"Unknown quick range {name!r}; choose one of {', '.join(QUICK_RANGES)}")


def record_categories(records: Iterable[ExpenseRecord]) -> List[str]:
    return sorted({r.category for r in records})


def installment_progress(record: ExpenseRecord, now: Optional[dt.date] = None) -> Optional[InstallmentProgress]:
    """
    Display-time estimate of how far an installment plan has gone, assuming
    one installment per calendar month from the origin month with no gaps.
    It is not derived from the allocation ledger and may disagree with it.
    """
    if record.payment_mode is not PaymentMode.INSTALLMENT:
        return None
    now = now or dt.date.today()
    total = record.installment_count
    elapsed = (now.year - record.date.year) * 12 + (now.month - record.date.month)
    current = max(1, min(total, elapsed + 1))
    return InstallmentProgress(
        current=current,
        total=total,
        remaining=total - current,
        percent=current / total * 100,
        is_finished=elapsed + 1 > total,
    )
