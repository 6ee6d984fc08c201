"""
Quote — the one money computation both channels share.

All arithmetic is Decimal; the only rounding happens when a major-unit
amount is converted to integer minor units.

    q = price(25.00, 2, discount_percentage=20)
    q.discounted_unit_price   # Decimal("20.00")
    q.total_minor             # 4000
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront._errors import InvalidQuantity, ValidationError

_HUNDRED = Decimal(100)


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return result


def to_minor(amount: Decimal) -> int:
    """Major units to integer cents, half-up."""
    return int((amount * _HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_quantity(raw: object) -> int:
    """
    Positive integer or InvalidQuantity.

    Accepts ints, integral floats and digit strings ("2"). Booleans,
    fractions, zero and negatives are rejected.
    """
    match raw:
        case bool():
            raise InvalidQuantity(raw)
        case int():
            quantity = raw
        case float() if raw.is_integer():
            quantity = int(raw)
        case str() if raw.strip().lstrip("+-").isdigit():
            quantity = int(raw.strip())
        case _:
            raise InvalidQuantity(raw)
    if quantity < 1:
        raise InvalidQuantity(raw)
    return quantity


@dataclass(frozen=True, slots=True)
class Quote:
    unit_price: Decimal
    discounted_unit_price: Decimal
    quantity: int
    discount_percentage: Decimal
    total_major: Decimal
    total_minor: int

    @property
    def original_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def unit_amount_minor(self) -> int:
        """Per-unit charge in cents, as sent to the gateway line item."""
        return to_minor(self.discounted_unit_price)

    @property
    def charged_minor(self) -> int:
        """What the gateway bills: the per-unit charge times quantity."""
        return self.unit_amount_minor * self.quantity

    @property
    def charged_major(self) -> Decimal:
        return Decimal(self.charged_minor) / _HUNDRED


def price(
    unit_price: float | int | str | Decimal,
    quantity: object,
    discount_percentage: float | int | str | Decimal = 0,
) -> Quote:
    qty = parse_quantity(quantity)
    unit = to_decimal(unit_price)
    pct = to_decimal(discount_percentage)
    if unit < 0:
        raise ValidationError("Unit price must not be negative")
    if not 0 <= pct <= 100:
        raise ValidationError("Discount percentage must be between 0 and 100")

    discounted = unit * (1 - pct / _HUNDRED)
    total = discounted * qty
    return Quote(
        unit_price=unit,
        discounted_unit_price=discounted,
        quantity=qty,
        discount_percentage=pct,
        total_major=total,
        total_minor=to_minor(total),
    )


__all__ = ("Quote", "price", "parse_quantity", "to_decimal", "to_minor")
