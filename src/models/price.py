# src/models/price.py

"""Money value object with two-decimal floor semantics."""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any

CENT = Decimal("0.01")


def truncate_to_cents(amount: Decimal) -> Decimal:
    """Floor ``amount`` to two fractional digits (10.567 -> 10.56)."""
    return amount.quantize(CENT, rounding=ROUND_FLOOR)


@dataclass(frozen=True)
class Money:
    """A price in a single currency.

    ``amount`` is always non-negative and carries exactly two
    fractional digits.
    """

    currency: str
    amount: Decimal

    def __post_init__(self) -> None:
        # str() first: Decimal(0.29) is 0.28999..., which would floor to 0.28
        amount = (
            Decimal(str(self.amount))
            if isinstance(self.amount, float)
            else Decimal(self.amount)
        )
        if amount < 0:
            raise ValueError(f"negative amount: {amount}")
        object.__setattr__(self, "amount", truncate_to_cents(amount))

    @classmethod
    def zero(cls) -> "Money":
        """The zero value used when a detail page has no product."""
        return cls(currency="", amount=Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.currency, "amount": float(self.amount)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Money":
        return cls(
            currency=str(data.get("type", "")),
            amount=Decimal(str(data.get("amount", 0))),
        )
