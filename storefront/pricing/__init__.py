"""
Pricing — unit price, coupon-adjusted price and total owed.

    from storefront import pricing as P

    quote = P.price(product.price, "2", discount_percentage=20)
    quote.total_minor   # integer cents, the amount both channels store
"""

from storefront.pricing._quote import (
    Quote,
    price,
    parse_quantity,
    to_decimal,
    to_minor,
)

__all__ = ("Quote", "price", "parse_quantity", "to_decimal", "to_minor")
