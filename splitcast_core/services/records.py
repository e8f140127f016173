from __future__ import annotations

import datetime as dt
import logging
import math
import uuid
from typing import List, Optional, Union

from splitcast_core.domain.models import AppState, ExpenseRecord, PaymentMode

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Geral"
MAX_INSTALLMENTS = 60


def parse_payment_mode(raw: Union[str, PaymentMode]) -> PaymentMode:
    """
    Accepts the enum, its value ("CASH"/"INSTALLMENT") or the lowercase
    aliases used on the command line and in CSV imports.
    """
    if isinstance(raw, PaymentMode):
        return raw
    txt = str(raw).strip().upper()
    aliases = {"CASH": PaymentMode.CASH, "INSTALLMENT": PaymentMode.INSTALLMENT, "INSTALLMENTS": PaymentMode.INSTALLMENT}
    if txt not in aliases:
        raise ValueError(f"Unknown payment mode: {raw!r}")
    return aliases[txt]


def _parse_date(raw: Union[str, dt.date]) -> dt.date:
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    try:
        return dt.date.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid date {raw!r}, expected YYYY-MM-DD") from exc


def build_record(
    description: str,
    amount: Union[str, float],
    date: Union[str, dt.date],
    payment_mode: Union[str, PaymentMode] = PaymentMode.CASH,
    installment_count: Optional[int] = None,
    category: Optional[str] = None,
    record_id: Optional[str] = None,
) -> ExpenseRecord:
    """
    Validates raw input and builds an ExpenseRecord.

    This is the only place record invariants are checked; the projection
    services trust every record they receive.
    """
    description = (description or "").strip()
    if not description:
        raise ValueError("Description is required")

    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise ValueError("Amount is required")
    try:
        value = float(amount)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid amount: {amount!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise ValueError("Amount must be a finite, non-negative number")

    mode = parse_payment_mode(payment_mode)
    if mode is PaymentMode.CASH:
        count = 1
    else:
        if installment_count is None:
            raise ValueError("Installment expenses need an installment count")
        count = int(installment_count)
        if count < 2 or count > MAX_INSTALLMENTS:
            raise ValueError(f"Installment count must be between 2 and {MAX_INSTALLMENTS}")

    return ExpenseRecord(
        id=record_id or uuid.uuid4().hex,
        description=description,
        amount=value,
        date=_parse_date(date),
        payment_mode=mode,
        installment_count=count,
        category=(category or "").strip() or DEFAULT_CATEGORY,
    )


def add_record(state: AppState, record: ExpenseRecord) -> AppState:
    # newest first
    state.records = [record] + state.records
    logger.debug("Added record %s (%s)", record.id, record.description)
    return state


def remove_record(state: AppState, record_id: str) -> bool:
    before = len(state.records)
    state.records = [r for r in state.records if r.id != record_id]
    removed = len(state.records) != before
    if removed:
        logger.debug("Removed record %s", record_id)
    else:
        logger.debug("No record with id %s", record_id)
    return removed


def find_record(records: List[ExpenseRecord], record_id: str) -> Optional[ExpenseRecord]:
    for record in records:
        if record.id == record_id:
            return record
    return None
