from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from splitcast_core.domain.models import (
    ALL,
    CategoryGroup,
    ExpenseRecord,
    MonthDetailItem,
    MonthlySummary,
    PaymentMode,
)
from splitcast_core.services.projection import allocations_frame, expand_records


def month_detail(
    records: Iterable[ExpenseRecord],
    month: str,
    category: Optional[str] = None,
) -> List[MonthDetailItem]:
    """
    Allocations falling in `month`, largest first.
    `category` of None or "all" keeps every category.
    """
    items: List[MonthDetailItem] = []
    for a in expand_records(records):
        if a.month != month:
            continue
        if category not in (None, ALL) and a.category != category:
            continue
        item_id = a.source_id if a.payment_mode is PaymentMode.CASH else f"{a.source_id}-{a.installment_index}"
        items.append(
            MonthDetailItem(
                id=item_id,
                description=a.description,
                category=a.category,
                amount=a.allocated_amount,
                payment_mode=a.payment_mode,
                installment_label=a.installment_label,
            )
        )
    return sorted(items, key=lambda item: item.amount, reverse=True)


def group_by_category(items: Iterable[MonthDetailItem]) -> List[CategoryGroup]:
    """Partitions detail items by category; largest subtotal first."""
    buckets: Dict[str, List[MonthDetailItem]] = {}
    for item in items:
        buckets.setdefault(item.category, []).append(item)
    groups = [CategoryGroup(category=cat, items=entries) for cat, entries in buckets.items()]
    return sorted(groups, key=lambda g: g.subtotal, reverse=True)


def category_totals(records: Iterable[ExpenseRecord], month: str) -> List[Tuple[str, float]]:
    df = allocations_frame(expand_records(records))
    df = df[df["month"] == month]
    if df.empty:
        return []
    # ties keep first-seen order in the largest-first stream, as in group_by_category
    df = df.sort_values("amount", ascending=False, kind="stable")
    totals = df.groupby("category", sort=False)["amount"].sum().sort_values(ascending=False, kind="stable")
    return [(str(cat), float(value)) for cat, value in totals.items()]


def month_categories(records: Iterable[ExpenseRecord], month: str) -> List[str]:
    return sorted({item.category for item in month_detail(records, month)})


def category_share(records: Iterable[ExpenseRecord], month: str, category: str) -> float:
    """Percentage of the month's total spent in `category`."""
    items = month_detail(records, month)
    month_total = sum(item.amount for item in items) or 1
    category_total = sum(item.amount for item in items if item.category == category)
    return category_total / month_total * 100


def default_month(summaries: Sequence[MonthlySummary]) -> Optional[str]:
    if not summaries:
        return None
    return summaries[-1].month
