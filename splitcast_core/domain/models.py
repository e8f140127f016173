from __future__ import annotations

import dataclasses
import datetime as dt
import enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


class PaymentMode(str, enum.Enum):
    CASH = "CASH"
    INSTALLMENT = "INSTALLMENT"


@dataclasses.dataclass(frozen=True)
class ExpenseRecord:
    id: str
    description: str
    amount: float  # full amount, never the per-installment value
    date: dt.date
    payment_mode: PaymentMode
    installment_count: int
    category: str

    @property
    def installment_value(self) -> float:
        return self.amount / self.installment_count

    @property
    def month_key(self) -> str:
        return self.date.strftime("%Y-%m")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "payment_mode": self.payment_mode.value,
            "installment_count": self.installment_count,
            "category": self.category,
        }


@dataclasses.dataclass(frozen=True)
class MonthlyAllocation:
    source_id: str
    month: str  # YYYY-MM
    category: str
    allocated_amount: float
    payment_mode: PaymentMode
    description: str
    installment_index: int = 0
    installment_label: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class MonthlySummary:
    month: str
    cash_total: float
    installment_total: float

    @property
    def total(self) -> float:
        return self.cash_total + self.installment_total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "cash_total": self.cash_total,
            "installment_total": self.installment_total,
            "total": self.total,
        }


@dataclasses.dataclass(frozen=True)
class AnnualBreakdown:
    year: int
    categories: Tuple[str, ...]
    matrix: Mapping[str, Tuple[float, ...]]  # category -> 12 monthly cells

    def __post_init__(self):
        object.__setattr__(self, "categories", tuple(self.categories))
        frozen = {cat: tuple(cells) for cat, cells in self.matrix.items()}
        object.__setattr__(self, "matrix", MappingProxyType(frozen))

    @property
    def month_totals(self) -> List[float]:
        totals = [0.0] * 12
        for cells in self.matrix.values():
            for idx, value in enumerate(cells):
                totals[idx] += value
        return totals

    @property
    def category_totals(self) -> Dict[str, float]:
        return {cat: sum(self.matrix[cat]) for cat in self.categories}

    @property
    def year_total(self) -> float:
        return sum(self.month_totals)

    @property
    def monthly_average(self) -> float:
        return self.year_total / 12

    @property
    def peak_month_index(self) -> Optional[int]:
        totals = self.month_totals
        peak = max(totals)
        if peak <= 0:
            return None
        return totals.index(peak)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "categories": list(self.categories),
            "matrix": {cat: list(cells) for cat, cells in self.matrix.items()},
            "month_totals": self.month_totals,
            "year_total": self.year_total,
            "monthly_average": self.monthly_average,
            "peak_month_index": self.peak_month_index,
        }


@dataclasses.dataclass(frozen=True)
class MonthDetailItem:
    id: str
    description: str
    category: str
    amount: float
    payment_mode: PaymentMode
    installment_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "payment_mode": self.payment_mode.value,
            "installment_label": self.installment_label,
        }


@dataclasses.dataclass(frozen=True)
class CategoryGroup:
    category: str
    items: Tuple[MonthDetailItem, ...]

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def subtotal(self) -> float:
        return sum(item.amount for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "subtotal": self.subtotal,
            "items": [item.to_dict() for item in self.items],
        }


@dataclasses.dataclass(frozen=True)
class InstallmentProgress:
    current: int
    total: int
    remaining: int
    percent: float
    is_finished: bool


@dataclasses.dataclass(frozen=True)
class DateRange:
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    def contains(self, day: dt.date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


ALL = "all"


@dataclasses.dataclass(frozen=True)
class RecordFilter:
    category: str = ALL
    payment_mode: str = ALL  # "all" or a PaymentMode value
    date_range: DateRange = DateRange()


@dataclasses.dataclass(frozen=True)
class AppConfig:
    store_path: Path
    locale: str = "pt-BR"
    currency_symbol: str = "R$"
    insight_model: str = "mistralai/Mistral-7B-Instruct-v0.2"


@dataclasses.dataclass
class AppState:
    records: List[ExpenseRecord] = dataclasses.field(default_factory=list)
    dark_mode: bool = True
