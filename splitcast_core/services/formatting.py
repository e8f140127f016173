"""Currency and month-label formatting shared by every output surface."""

from __future__ import annotations

from typing import Dict, List, Optional

from splitcast_core.domain.models import AppConfig

MONTH_NAMES: Dict[str, List[str]] = {
    "pt-BR": ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"],
    "en-US": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}

# (thousands separator, decimal separator, symbol goes before with a space)
_SEPARATORS = {
    "pt-BR": (".", ",", True),
    "en-US": (",", ".", False),
}


def _locale(locale: Optional[str]) -> str:
    return locale if locale in _SEPARATORS else "pt-BR"


def format_currency(value: float, config: Optional[AppConfig] = None) -> str:
    """
    Two fraction digits plus currency symbol, e.g. "R$ 1.234,56" or "$1,234.56".

    Every table and total goes through this helper so rounding is the same
    everywhere (Python's fixed-point formatting of the float value).
    """
    locale = _locale(config.locale if config else None)
    symbol = config.currency_symbol if config else "R$"
    spaced = _SEPARATORS[locale][2]

    body = format_amount(abs(value), locale)
    sign = "-" if round(value, 2) < 0 else ""
    gap = " " if spaced else ""
    return f"{sign}{symbol}{gap}{body}"


def format_amount(value: float, locale: Optional[str] = None) -> str:
    """Two fraction digits with the locale's separators and no symbol."""
    thousands, decimal, _ = _SEPARATORS[_locale(locale)]
    body = f"{value:,.2f}"
    return body.replace(",", "\0").replace(".", decimal).replace("\0", thousands)


def month_label(month_key: str, locale: Optional[str] = None) -> str:
    year, month = month_key.split("-")
    locale = _locale(locale)
    name = MONTH_NAMES[locale][int(month) - 1]
    if locale == "pt-BR":
        return f"{name}/{year[2:]}"
    return f"{name} {year[2:]}"


def month_names(locale: Optional[str] = None) -> List[str]:
    return MONTH_NAMES[_locale(locale)]
