from decimal import Decimal

import pytest

from storefront._errors import InvalidQuantity, ValidationError
from storefront.pricing import parse_quantity, price, to_minor


def test_no_discount_two_units() -> None:
    q = price(25.00, 2)
    assert q.discounted_unit_price == Decimal("25.0")
    assert q.total_minor == 5000
    assert q.unit_amount_minor == 2500
    assert q.original_total == Decimal("50.0")


def test_discount_applies_per_unit() -> None:
    q = price(25.00, 2, discount_percentage=20)
    assert q.unit_amount_minor == 2000
    assert q.total_minor == 4000
    assert q.total_major == Decimal("40.00")


@pytest.mark.parametrize(
    ("unit", "qty", "pct", "expected"),
    [
        (0.1, 3, 0, 30),
        (19.99, 3, 0, 5997),
        (19.99, 1, 15, 1699),  # 16.9915 -> 1699
        (10.005, 1, 0, 1001),  # half-up, no binary drift
        (33.33, 3, 10, 8999),  # 89.991 -> 8999
        (0, 5, 0, 0),
    ],
)
def test_total_rounds_once_half_up(unit: float, qty: int, pct: int, expected: int) -> None:
    assert price(unit, qty, pct).total_minor == expected


def test_total_is_not_sum_of_rounded_units() -> None:
    # 3 x 0.335 = 1.005 -> 101; rounding the unit first would give 102
    assert price("0.335", 3).total_minor == 101


def test_to_minor_half_up() -> None:
    assert to_minor(Decimal("0.125")) == 13
    assert to_minor(Decimal("2.5")) == 250


@pytest.mark.parametrize("raw", [0, -1, 1.5, "abc", "", None, True, "2.5", [2]])
def test_bad_quantity_rejected(raw: object) -> None:
    with pytest.raises(InvalidQuantity) as info:
        price(25, raw)
    assert info.value.status == 400


@pytest.mark.parametrize(("raw", "expected"), [(1, 1), (3.0, 3), ("2", 2), (" 4 ", 4)])
def test_quantity_accepts_integral_values(raw: object, expected: int) -> None:
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("pct", [-1, 101, "nan"])
def test_discount_out_of_range(pct: object) -> None:
    with pytest.raises(ValidationError):
        price(25, 1, pct)  # type: ignore[arg-type]


def test_negative_unit_price_rejected() -> None:
    with pytest.raises(ValidationError):
        price(-1, 1)


def test_full_discount_is_free() -> None:
    assert price(25, 2, 100).total_minor == 0
