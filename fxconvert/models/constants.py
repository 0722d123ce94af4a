"""Static currency display table used by the UI.

Conversion itself works for any code present in the fetched snapshot; this
table only decides what the form offers and how names are shown.
"""

from typing import Dict, NamedTuple, Optional


class CurrencyInfo(NamedTuple):
    name: str
    symbol: str


CURRENCY_SYMBOLS: Dict[str, CurrencyInfo] = {
    "CNY": CurrencyInfo("Chinese Yuan", "￥"),
    "USD": CurrencyInfo("US Dollar", "$"),
    "JPY": CurrencyInfo("Japanese Yen", "¥"),
    "EUR": CurrencyInfo("Euro", "€"),
    "GBP": CurrencyInfo("British Pound", "£"),
}


def currency_info(code: str) -> Optional[CurrencyInfo]:
    return CURRENCY_SYMBOLS.get(code.upper())


def display_name(code: str) -> str:
    info = currency_info(code)
    return info.name if info else code.upper()
