from splitcast_core.services.breakdown import annual_breakdown, available_years  # noqa: F401
from splitcast_core.services.detail import group_by_category, month_detail  # noqa: F401
from splitcast_core.services.filtering import filter_records, installment_progress, quick_range  # noqa: F401
from splitcast_core.services.projection import expand_record, expand_records, monthly_summaries  # noqa: F401
from splitcast_core.services.records import add_record, build_record, remove_record  # noqa: F401

__all__ = [
    "add_record",
    "annual_breakdown",
    "available_years",
    "build_record",
    "expand_record",
    "expand_records",
    "filter_records",
    "group_by_category",
    "installment_progress",
    "month_detail",
    "monthly_summaries",
    "quick_range",
    "remove_record",
]
