"""Currency conversion into the ledger's base currency."""

from decimal import Decimal
from typing import Iterable, Optional

from balanceit.domain.entities import Currency
from balanceit.utils.amount_parser import round_money

DEFAULT_BASE_CURRENCY = "USD"

DEFAULT_CURRENCIES = (
    Currency("USD", "US Dollar", "$", Decimal("1.0")),
    Currency("EUR", "Euro", "€", Decimal("1.09")),
    Currency("GBP", "British Pound", "£", Decimal("1.27")),
    Currency("CAD", "Canadian Dollar", "C$", Decimal("0.74")),
    Currency("AUD", "Australian Dollar", "A$", Decimal("0.66")),
    Currency("JPY", "Japanese Yen", "¥", Decimal("0.0068")),
    Currency("CNY", "Chinese Yuan", "¥", Decimal("0.14")),
    Currency("INR", "Indian Rupee", "₹", Decimal("0.012")),
)

UNKNOWN_RATE = Decimal("1.0")


def convert_to_base(amount: Decimal, rate: Decimal) -> Decimal:
    """Convert an amount in a foreign currency to base units.

    Rate is defined as "1 unit of the foreign currency = rate base units".
    The result is rounded to the stored money scale.
    """
    return round_money(Decimal(amount) * Decimal(rate))


class CurrencyTable:
    """Static code to rate lookup consumed by posting and import."""

    def __init__(self, currencies: Optional[Iterable[Currency]] = None):
        """Initialize currency table.

        Args:
            currencies: Currencies to expose. Defaults to DEFAULT_CURRENCIES.
        """
        if currencies is None:
            currencies = DEFAULT_CURRENCIES
        self._currencies = {c.code.upper(): c for c in currencies}

    def get(self, code: str) -> Optional[Currency]:
        return self._currencies.get(code.upper())

    def rate_for(self, code: str) -> Decimal:
        """Return the rate for a currency code, or 1.0 if the code is unknown."""
        currency = self.get(code)
        return currency.rate if currency is not None else UNKNOWN_RATE

    def symbol_for(self, code: str) -> str:
        currency = self.get(code)
        return currency.symbol if currency is not None else code

    def __contains__(self, code: str) -> bool:
        return code.upper() in self._currencies
