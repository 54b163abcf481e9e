"""
currencies.py — Table of supported currencies

================================================================================
DESIGN
================================================================================

The table is an Enum: it is built once at import and cannot be changed at
runtime. It is the library's only global state and it is read-only, so every
function stays pure and safe to call concurrently.

Each currency carries:
- its ISO 4217 code (or ticker for crypto)
- a symbol and name for display
- the decimals of its minor unit (USD=2, JPY=0, BTC=8)
- whether its format uses thousands separators

================================================================================
"""

from __future__ import annotations

from enum import Enum

from .errors import MonieError


class Currency(Enum):
    """
    Supported currencies and their precision.

    Each member's value is a tuple
    (code, symbol, name, decimals, grouping, crypto).
    """
    # Major currencies
    USD = ("USD", "$", "US Dollar", 2, True, False)
    EUR = ("EUR", "€", "Euro", 2, True, False)
    GBP = ("GBP", "£", "British Pound", 2, True, False)
    JPY = ("JPY", "¥", "Japanese Yen", 0, True, False)
    CHF = ("CHF", "CHF", "Swiss Franc", 2, True, False)
    CAD = ("CAD", "C$", "Canadian Dollar", 2, True, False)
    AUD = ("AUD", "A$", "Australian Dollar", 2, True, False)
    # Africa
    NGN = ("NGN", "₦", "Nigerian Naira", 2, True, False)
    ZAR = ("ZAR", "R", "South African Rand", 2, True, False)
    KES = ("KES", "KSh", "Kenyan Shilling", 2, True, False)
    GHS = ("GHS", "₵", "Ghanaian Cedi", 2, True, False)
    # Asia and Latin America
    CNY = ("CNY", "¥", "Chinese Yuan", 2, True, False)
    INR = ("INR", "₹", "Indian Rupee", 2, True, False)
    SGD = ("SGD", "S$", "Singapore Dollar", 2, True, False)
    BRL = ("BRL", "R$", "Brazilian Real", 2, True, False)
    # Crypto
    BTC = ("BTC", "₿", "Bitcoin", 8, True, True)
    ETH = ("ETH", "Ξ", "Ethereum", 8, True, True)
    USDT = ("USDT", "₮", "Tether", 2, True, True)

    def __init__(
        self,
        code: str,
        symbol: str,
        display_name: str,
        decimals: int,
        uses_grouping: bool,
        is_crypto: bool,
    ):
        self._code = code
        self._symbol = symbol
        self._display_name = display_name
        self._decimals = decimals
        self._uses_grouping = uses_grouping
        self._is_crypto = is_crypto

    @property
    def code(self) -> str:
        return self._code

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def uses_grouping(self) -> bool:
        return self._uses_grouping

    @property
    def is_crypto(self) -> bool:
        return self._is_crypto

    @property
    def multiplier(self) -> int:
        """Conversion factor from major to minor units."""
        return 10 ** self._decimals


def is_valid_currency(code: object) -> bool:
    """True if the code (case-insensitive) is in the table. Never raises."""
    if not isinstance(code, str):
        return False
    return code.upper() in Currency.__members__


def get_currency(code: object) -> Currency:
    """
    Case-insensitive lookup in the currency table.

    Raises:
        MonieError: if the code is not a string or is not supported
    """
    if not is_valid_currency(code):
        raise MonieError(f"Unsupported currency: {code}. Check the currency code.")
    return Currency[code.upper()]
