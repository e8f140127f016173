from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional

from splitcast_core.domain.models import AnnualBreakdown, ExpenseRecord
from splitcast_core.services.projection import allocations_frame, expand_records


def annual_breakdown(records: Iterable[ExpenseRecord], year: int) -> AnnualBreakdown:
    """
    Category x month matrix for `year`.

    Rows are every category ever used, so a category with no spending in
    `year` still shows up as a zero row.
    """
    records = list(records)
    categories = sorted({r.category for r in records})
    matrix: Dict[str, List[float]] = {cat: [0.0] * 12 for cat in categories}

    df = allocations_frame(expand_records(records))
    in_year = df[df["month"].str.startswith(f"{year:04d}-")] if not df.empty else df
    if not in_year.empty:
        cells = in_year.groupby(["category", "month"])["amount"].sum()
        for (category, month), value in cells.items():
            matrix[category][int(month[5:7]) - 1] = float(value)

    return AnnualBreakdown(year=year, categories=categories, matrix=matrix)


def available_years(records: Iterable[ExpenseRecord], today: Optional[dt.date] = None) -> List[int]:
    today = today or dt.date.today()
    years = {int(a.month[:4]) for a in expand_records(records)}
    years.add(today.year)
    return sorted(years, reverse=True)


def recent_records(records: Iterable[ExpenseRecord], limit: int = 5) -> List[ExpenseRecord]:
    # store order is newest first
    return list(records)[:limit]
