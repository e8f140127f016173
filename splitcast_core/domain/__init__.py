from splitcast_core.domain.models import (  # noqa: F401
    ALL,
    AnnualBreakdown,
    AppConfig,
    AppState,
    CategoryGroup,
    DateRange,
    ExpenseRecord,
    InstallmentProgress,
    MonthDetailItem,
    MonthlyAllocation,
    MonthlySummary,
    PaymentMode,
    RecordFilter,
)

__all__ = [
    "ALL",
    "AnnualBreakdown",
    "AppConfig",
    "AppState",
    "CategoryGroup",
    "DateRange",
    "ExpenseRecord",
    "InstallmentProgress",
    "MonthDetailItem",
    "MonthlyAllocation",
    "MonthlySummary",
    "PaymentMode",
    "RecordFilter",
]
