from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from splitcast_core.domain.models import ExpenseRecord
from splitcast_core.services.records import build_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"description", "amount", "date", "category"}


def load_records_csv(csv_path: str | Path) -> List[ExpenseRecord]:
    """
    Imports expenses from a CSV with description,amount,date,category and
    optional payment_mode (cash|installment) and installments columns.
    Rows go through build_record, so a bad row fails the whole import.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype={"date": str, "description": str, "category": str})
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in expense CSV: {sorted(missing)}")

    if "payment_mode" not in df.columns:
        df["payment_mode"] = "cash"
    if "installments" not in df.columns:
        df["installments"] = None

    records: List[ExpenseRecord] = []
    for idx, row in df.iterrows():
        installments = row["installments"]
        try:
            record = build_record(
                description=str(row["description"]) if pd.notna(row["description"]) else "",
                amount=None if pd.isna(row["amount"]) else row["amount"],
                date=str(row["date"]),
                payment_mode=str(row["payment_mode"]) if pd.notna(row["payment_mode"]) else "cash",
                installment_count=None if pd.isna(installments) else int(installments),
                category=str(row["category"]) if pd.notna(row["category"]) else None,
            )
        except ValueError as exc:
            raise ValueError(f"Row {idx + 2} of {path.name}: {exc}") from exc
        records.append(record)

    logger.info("Imported %d records from %s", len(records), path)
    return records
