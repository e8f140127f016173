from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from splitcast_core.domain.models import AppState, ExpenseRecord
from splitcast_core.services.records import build_record

logger = logging.getLogger(__name__)

RECORDS_KEY = "smart_finance_txs"
THEME_KEY = "smart_finance_theme"


def record_to_blob(record: ExpenseRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "description": record.description,
        "amount": record.amount,
        "date": record.date.isoformat(),
        "type": record.payment_mode.value,
        "installmentsCount": record.installment_count,
        "category": record.category,
    }


def record_from_blob(item: Dict[str, Any]) -> ExpenseRecord:
    return build_record(
        description=item.get("description", ""),
        amount=item.get("amount"),
        date=item.get("date", ""),
        payment_mode=item.get("type", "CASH"),
        installment_count=item.get("installmentsCount"),
        category=item.get("category"),
        record_id=item.get("id"),
    )


def load_state(path: str | Path) -> AppState:
    """
    Reads the two stored keys. A missing file is an empty state; an
    unreadable one is an error, never silently reset.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("No store at %s, starting empty", p)
        return AppState()

    try:
        data = json.loads(p.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as exc:
        raise ValueError(f"Store file {p} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Store file {p} must hold a JSON object")

    raw_records = data.get(RECORDS_KEY) or []
    # the records key holds its own serialized blob
    if isinstance(raw_records, str):
        raw_records = json.loads(raw_records)
    records: List[ExpenseRecord] = [record_from_blob(item) for item in raw_records]

    theme = data.get(THEME_KEY)
    state = AppState(records=records, dark_mode=theme != "light")
    logger.debug("Loaded %d records from %s", len(records), p)
    return state


def save_state(path: str | Path, state: AppState) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        RECORDS_KEY: json.dumps([record_to_blob(r) for r in state.records]),
        THEME_KEY: "dark" if state.dark_mode else "light",
    }
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    tmp.replace(p)
    logger.debug("Saved %d records to %s", len(state.records), p)
    return p
