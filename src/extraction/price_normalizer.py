# src/extraction/price_normalizer.py

"""Turn storefront price text such as ``'1.234,56 TL'`` into Money."""

import re
from decimal import Decimal, InvalidOperation

from src.models.errors import MalformedPrice
from src.models.price import Money

# "1.234" / "12.345.678": dots used purely as thousands separators
_GROUPED_THOUSANDS = re.compile(r"^\d{1,3}(\.\d{3})+$")
_PLAIN_NUMBER = re.compile(r"^\d+(\.\d+)?$")


def _to_canonical(numeric: str) -> str:
    """Convert a Turkish-locale number to ``1234.56`` form."""
    if "," in numeric:
        return numeric.replace(".", "").replace(",", ".", 1)
    if _GROUPED_THOUSANDS.match(numeric):
        return numeric.replace(".", "")
    return numeric


def normalize(raw: str | None, marker: str = "TL") -> Money:
    """Parse ``raw`` into :class:`Money`, flooring to whole cents.

    The text before the first occurrence of ``marker`` is the amount.
    Sub-cent digits are discarded, never rounded up, so the result
    matches the price shown on the storefront.

    Raises:
        MalformedPrice: the marker is missing or the amount is not a
            non-negative number.
    """
    if not raw or marker not in raw:
        raise MalformedPrice(f"currency marker {marker!r} not in {raw!r}")

    numeric = raw.split(marker, 1)[0].strip()
    canonical = _to_canonical(numeric)
    if not _PLAIN_NUMBER.match(canonical):
        raise MalformedPrice(f"unparseable amount in {raw!r}")

    try:
        amount = Decimal(canonical)
    except InvalidOperation as exc:
        raise MalformedPrice(f"unparseable amount in {raw!r}") from exc

    return Money(currency=marker, amount=amount)
