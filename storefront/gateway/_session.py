"""Session request building: line-item label and redirect targets."""

from __future__ import annotations

from collections.abc import Mapping

from storefront.config import Settings
from storefront.gateway._types import LineItem, SessionRequest

SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


def line_item_label(name: str, color: str | None = None, size: str | None = None) -> str:
    """
    "<name> (<color> - <size>)", "<name> (<color>)" or "<name>".

    A size without a colour keeps the bare name.
    """
    if color and size:
        return f"{name} ({color} - {size})"
    if color:
        return f"{name} ({color})"
    return name


def success_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/success?session_id={SESSION_ID_PLACEHOLDER}"


def cancel_url(base_url: str, product_id: str) -> str:
    return f"{base_url.rstrip('/')}/product/{product_id}"


def build_session_request(
    settings: Settings,
    *,
    product_id: str,
    label: str,
    unit_amount: int,
    quantity: int,
    customer_email: str,
    metadata: Mapping[str, str],
) -> SessionRequest:
    return SessionRequest(
        line_item=LineItem(
            name=label,
            unit_amount=unit_amount,
            quantity=quantity,
            currency=settings.currency,
        ),
        metadata=dict(metadata),
        customer_email=customer_email,
        success_url=success_url(settings.public_base_url),
        cancel_url=cancel_url(settings.public_base_url, product_id),
        allowed_countries=settings.allowed_shipping_countries,
    )


__all__ = (
    "SESSION_ID_PLACEHOLDER",
    "line_item_label",
    "success_url",
    "cancel_url",
    "build_session_request",
)
