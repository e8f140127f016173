from __future__ import annotations

from typing import Optional, Sequence, Tuple

from splitcast_core.domain.models import MonthlySummary


def grand_total(summaries: Sequence[MonthlySummary]) -> float:
    return sum(s.total for s in summaries)


def average_monthly_total(summaries: Sequence[MonthlySummary]) -> float:
    if not summaries:
        return 0.0
    return grand_total(summaries) / len(summaries)


def peak_month(summaries: Sequence[MonthlySummary]) -> Optional[MonthlySummary]:
    if not summaries:
        return None
    # max() keeps the first of equal totals
    return max(summaries, key=lambda s: s.total)


def mode_split(summaries: Sequence[MonthlySummary]) -> Tuple[float, float]:
    cash = sum(s.cash_total for s in summaries)
    installment = sum(s.installment_total for s in summaries)
    return cash, installment


def installment_ratio(summaries: Sequence[MonthlySummary]) -> float:
    total = grand_total(summaries)
    if total == 0:
        return 0.0
    return mode_split(summaries)[1] / total * 100
