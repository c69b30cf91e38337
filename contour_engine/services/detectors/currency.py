"""Currency conversion detection: ``50 usd to eur``, ``$100 in gbp``.

Detection is synchronous and returns a loading placeholder; rates are filled
in by the currency resolver.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from contour_engine.core.models import CurrencyResult
from contour_engine.core.ports import Formatter
from contour_engine.services.detectors.common import parse_number
from contour_engine.services.formatting import DefaultFormatter

CURRENCIES: dict[str, tuple[str, str]] = {
    "USD": ("$", "US Dollar"),
    "EUR": ("€", "Euro"),
    "GBP": ("£", "British Pound"),
    "JPY": ("¥", "Japanese Yen"),
    "CNY": ("¥", "Chinese Yuan"),
    "INR": ("₹", "Indian Rupee"),
    "AUD": ("A$", "Australian Dollar"),
    "CAD": ("C$", "Canadian Dollar"),
    "CHF": ("CHF", "Swiss Franc"),
    "KRW": ("₩", "South Korean Won"),
    "SGD": ("S$", "Singapore Dollar"),
    "HKD": ("HK$", "Hong Kong Dollar"),
    "SEK": ("kr", "Swedish Krona"),
    "NOK": ("kr", "Norwegian Krone"),
    "DKK": ("kr", "Danish Krone"),
    "NZD": ("NZ$", "New Zealand Dollar"),
    "MXN": ("Mex$", "Mexican Peso"),
    "BRL": ("R$", "Brazilian Real"),
    "ZAR": ("R", "South African Rand"),
    "TRY": ("₺", "Turkish Lira"),
    "RUB": ("₽", "Russian Ruble"),
    "THB": ("฿", "Thai Baht"),
    "PHP": ("₱", "Philippine Peso"),
    "PLN": ("zł", "Polish Zloty"),
    "TWD": ("NT$", "Taiwan Dollar"),
    "MYR": ("RM", "Malaysian Ringgit"),
    "IDR": ("Rp", "Indonesian Rupiah"),
    "AED": ("د.إ", "UAE Dirham"),
    "SAR": ("﷼", "Saudi Riyal"),
    "ARS": ("AR$", "Argentine Peso"),
    "CLP": ("CLP$", "Chilean Peso"),
    "COP": ("COL$", "Colombian Peso"),
    "EGP": ("E£", "Egyptian Pound"),
    "NGN": ("₦", "Nigerian Naira"),
    "PKR": ("Rs", "Pakistani Rupee"),
    "BDT": ("৳", "Bangladeshi Taka"),
    "VND": ("₫", "Vietnamese Dong"),
    "CZK": ("Kč", "Czech Koruna"),
    "HUF": ("Ft", "Hungarian Forint"),
    "ILS": ("₪", "Israeli Shekel"),
    "RON": ("lei", "Romanian Leu"),
    "BGN": ("лв", "Bulgarian Lev"),
    "HRK": ("kn", "Croatian Kuna"),
    "ISK": ("kr", "Icelandic Krona"),
    "UAH": ("₴", "Ukrainian Hryvnia"),
    "KES": ("KSh", "Kenyan Shilling"),
    "GHS": ("GH₵", "Ghanaian Cedi"),
    "LKR": ("Rs", "Sri Lankan Rupee"),
    "BTC": ("₿", "Bitcoin"),
}

SYMBOL_MAP: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
    "₩": "KRW",
    "₿": "BTC",
}

POPULAR_CURRENCIES = ("USD", "EUR", "GBP", "JPY", "INR", "CNY", "AUD", "CAD", "CHF", "BTC")

CURRENCY_SYMBOLS: Mapping[str, str] = {code: symbol for code, (symbol, _) in CURRENCIES.items()}

_CODES = "|".join(CURRENCIES)
_SYMBOLS = "[" + re.escape("".join(SYMBOL_MAP)) + "]"

FULL_PATTERN = re.compile(
    rf"^({_SYMBOLS}?)\s*(-?[\d.,]+)\s*({_CODES})?\s+(?:to|in|=)\s+({_CODES})\s*$",
    re.IGNORECASE,
)
PARTIAL_PATTERN = re.compile(
    rf"^({_SYMBOLS}?)\s*(-?[\d.,]+)\s*({_CODES})?\s+(?:to|in|=)\s*$",
    re.IGNORECASE,
)

_DEFAULT_FORMATTER = DefaultFormatter(currency_symbols=CURRENCY_SYMBOLS)


def _source_code(symbol: str, code: Optional[str]) -> Optional[str]:
    # A symbol overrides the typed code, as in "$100 usd to eur".
    if symbol and symbol in SYMBOL_MAP:
        return SYMBOL_MAP[symbol]
    if code:
        return code.upper()
    return None


def detect_currency(text: str, formatter: Optional[Formatter] = None) -> Optional[CurrencyResult]:
    """Detect a conversion request; full matches come back with ``is_loading=True``."""
    fmt = formatter or _DEFAULT_FORMATTER
    trimmed = text.strip()

    match = FULL_PATTERN.match(trimmed)
    if match:
        value = parse_number(match.group(2))
        from_code = _source_code(match.group(1), match.group(3))
        to_code = match.group(4).upper()
        if value is None or from_code is None:
            return None
        if from_code not in CURRENCIES or to_code not in CURRENCIES:
            return None
        return CurrencyResult(
            from_value=value,
            from_currency=from_code,
            to_currency=to_code,
            display=f"{fmt.format_currency(value, from_code)} = ...",
            is_loading=True,
        )

    match = PARTIAL_PATTERN.match(trimmed)
    if match:
        value = parse_number(match.group(2))
        from_code = _source_code(match.group(1), match.group(3))
        if value is None or from_code is None or from_code not in CURRENCIES:
            return None
        return CurrencyResult(
            from_value=value,
            from_currency=from_code,
            to_currency="",
            display=f"{fmt.format_currency(value, from_code)} = ...",
            is_partial=True,
        )
    return None


def get_currency_info(code: str) -> Optional[dict[str, str]]:
    entry = CURRENCIES.get(code.upper())
    if entry is None:
        return None
    symbol, name = entry
    return {"symbol": symbol, "name": name}


def get_all_currency_codes() -> list[str]:
    return list(CURRENCIES)


def get_currency_list() -> list[dict[str, str]]:
    return [
        {"code": code, "symbol": symbol, "name": name}
        for code, (symbol, name) in CURRENCIES.items()
    ]


__all__ = [
    "CURRENCIES",
    "CURRENCY_SYMBOLS",
    "POPULAR_CURRENCIES",
    "SYMBOL_MAP",
    "detect_currency",
    "get_all_currency_codes",
    "get_currency_info",
    "get_currency_list",
]
