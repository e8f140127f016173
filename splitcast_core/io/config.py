from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from splitcast_core.domain.models import AppConfig

DEFAULT_STORE = Path.home() / ".splitcast_store.json"
DEFAULT_MODEL = "mistralai/Mistral-7B-Instruct-v0.2"
CURRENCY_SYMBOLS = {"pt-BR": "R$", "en-US": "$"}


def default_app_config() -> AppConfig:
    locale = os.environ.get("SPLITCAST_LOCALE", "pt-BR")
    return AppConfig(
        store_path=Path(os.environ.get("SPLITCAST_STORE", DEFAULT_STORE)).expanduser(),
        locale=locale,
        currency_symbol=CURRENCY_SYMBOLS.get(locale, "R$"),
        insight_model=os.environ.get("HF_MODEL", DEFAULT_MODEL),
    )


def load_app_config(path: str | Path) -> AppConfig:
    base = default_app_config()
    data = _read_json(path)
    locale = str(data.get("locale", base.locale))
    return AppConfig(
        store_path=Path(data.get("store_path", base.store_path)).expanduser(),
        locale=locale,
        currency_symbol=str(data.get("currency_symbol", CURRENCY_SYMBOLS.get(locale, base.currency_symbol))),
        insight_model=str(data.get("insight_model", base.insight_model)),
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
