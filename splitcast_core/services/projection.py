from __future__ import annotations

import datetime as dt
from typing import Iterable, List

import pandas as pd

from splitcast_core.domain.models import ExpenseRecord, MonthlyAllocation, MonthlySummary, PaymentMode

ALLOCATION_COLUMNS = [
    "source_id",
    "month",
    "category",
    "amount",
    "payment_mode",
    "installment_label",
    "description",
    "installment_index",
]


def shift_month(start: dt.date, offset: int) -> str:
    """Month key of `start` advanced by `offset` calendar months."""
    return str(pd.Period(start, freq="M") + offset)


def expand_record(record: ExpenseRecord) -> List[MonthlyAllocation]:
    """
    Expands one record into its monthly allocations:
    - Cash: a single allocation in the origin month for the full amount.
    - Installment: one equal share per month, starting at the origin month.
    """
    if record.payment_mode is PaymentMode.CASH:
        return [
            MonthlyAllocation(
                source_id=record.id,
                month=record.month_key,
                category=record.category,
                allocated_amount=record.amount,
                payment_mode=record.payment_mode,
                description=record.description,
            )
        ]

    share = record.amount / record.installment_count
    return [
        MonthlyAllocation(
            source_id=record.id,
            month=shift_month(record.date, i),
            category=record.category,
            allocated_amount=share,
            payment_mode=record.payment_mode,
            description=record.description,
            installment_index=i,
            installment_label=f"{i + 1}/{record.installment_count}",
        )
        for i in range(record.installment_count)
    ]


def expand_records(records: Iterable[ExpenseRecord]) -> List[MonthlyAllocation]:
    allocations: List[MonthlyAllocation] = []
    for record in records:
        allocations.extend(expand_record(record))
    return allocations


def allocations_frame(allocations: Iterable[MonthlyAllocation]) -> pd.DataFrame:
    rows = [
        {
            "source_id": a.source_id,
            "month": a.month,
            "category": a.category,
            "amount": a.allocated_amount,
            "payment_mode": a.payment_mode.value,
            "installment_label": a.installment_label,
            "description": a.description,
            "installment_index": a.installment_index,
        }
        for a in allocations
    ]
    if not rows:
        return pd.DataFrame(columns=ALLOCATION_COLUMNS).astype({"amount": float})
    return pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)


def monthly_summaries(records: Iterable[ExpenseRecord]) -> List[MonthlySummary]:
    """
    Folds every allocation into one summary per touched month, ascending.
    Months without allocations are not emitted.
    """
    df = allocations_frame(expand_records(records))
    if df.empty:
        return []

    modes = [PaymentMode.CASH.value, PaymentMode.INSTALLMENT.value]
    monthly = df.groupby(["month", "payment_mode"])["amount"].sum().unstack(fill_value=0.0)
    monthly = monthly.reindex(columns=modes, fill_value=0.0).sort_index()

    return [
        MonthlySummary(
            month=str(month),
            cash_total=float(row[PaymentMode.CASH.value]),
            installment_total=float(row[PaymentMode.INSTALLMENT.value]),
        )
        for month, row in monthly.iterrows()
    ]
