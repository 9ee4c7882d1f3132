"""
Gas pricing and coin amounts.

A gas price is written ``<amount><denom>``, e.g. ``0.025uosmo``. Amounts are
kept as Decimal so formatting returns exactly what was parsed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, InvalidOperation

from ..errors import GasPriceError


_GAS_PRICE_RE = re.compile(r"^([0-9.]+)([a-zA-Z][a-zA-Z0-9/:._-]*)$")
MAX_FRACTIONAL_DIGITS = 18


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


def _check_denom(denom: str) -> None:
    if not 3 <= len(denom) <= 128:
        raise GasPriceError(f"Denom must be between 3 and 128 characters: {denom!r}")


@dataclass(frozen=True)
class GasPrice:
    amount: Decimal
    denom: str

    @classmethod
    def from_string(cls, value: str) -> "GasPrice":
        """
        Parse ``"<amount><denom>"``.

        Raises:
            GasPriceError: If the string is not a non-negative decimal followed
                by a valid denom
        """
        match = _GAS_PRICE_RE.match(value.strip()) if value else None
        if match is None:
            raise GasPriceError(f"Invalid gas price string: {value!r}")

        amount_text, denom = match.groups()
        _check_denom(denom)
        try:
            amount = Decimal(amount_text)
        except InvalidOperation:
            raise GasPriceError(f"Invalid gas price amount: {amount_text!r}") from None

        exponent = amount.as_tuple().exponent
        if isinstance(exponent, int) and -exponent > MAX_FRACTIONAL_DIGITS:
            raise GasPriceError(
                f"Gas price amount has more than {MAX_FRACTIONAL_DIGITS} fractional digits"
            )
        return cls(amount=amount, denom=denom)

    def __str__(self) -> str:
        return f"{format(self.amount, 'f')}{self.denom}"

    def fee(self, gas_limit: int) -> Coin:
        """Fee for ``gas_limit`` units: ceil(gas_limit * amount)."""
        if gas_limit < 0:
            raise ValueError("Gas limit must not be negative")
        total = (self.amount * gas_limit).to_integral_value(rounding=ROUND_CEILING)
        return Coin(denom=self.denom, amount=int(total))


def parse_gas_price(value: "GasPrice | str | None") -> "GasPrice | None":
    if value is None or isinstance(value, GasPrice):
        return value
    return GasPrice.from_string(value)
