"""
StripeGateway — hosted checkout on Stripe.

Uses the async resource methods (httpx transport) with the secret key passed
per call, so no module-global stripe.api_key is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import stripe

from storefront._errors import UpstreamError
from storefront.gateway._types import GatewaySession, SessionHandle, SessionRequest

logger = logging.getLogger(__name__)

LIST_EXPAND = ["data.line_items", "data.customer"]
RETRIEVE_EXPAND = ["line_items", "customer"]


def _upstream(e: stripe.StripeError) -> UpstreamError:
    return UpstreamError(
        e.user_message or "Payment processing is unavailable",
        code=e.code,
        status=e.http_status or 500,
    )


def _description(raw: Mapping[str, Any]) -> str | None:
    line_items = raw.get("line_items") or {}
    for item in line_items.get("data") or ():
        if item.get("description"):
            return str(item["description"])
    return None


def session_from_dict(raw: Mapping[str, Any]) -> GatewaySession:
    """Plain-dict session (Session.to_dict()) to GatewaySession."""
    return GatewaySession(
        id=str(raw["id"]),
        created=int(raw.get("created") or 0),
        amount_total=raw.get("amount_total"),
        metadata={str(k): str(v) for k, v in (raw.get("metadata") or {}).items()},
        customer_details=dict(raw.get("customer_details") or {}),
        line_item_description=_description(raw),
        payment_status=raw.get("payment_status"),
        status=raw.get("status"),
    )


class StripeGateway:
    __slots__ = ("_api_key",)

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def create_session(self, request: SessionRequest) -> SessionHandle:
        item = request.line_item
        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self._api_key,
                payment_method_types=["card"],
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": item.currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                ],
                success_url=request.success_url,
                cancel_url=request.cancel_url,
                customer_email=request.customer_email,
                billing_address_collection="required",
                shipping_address_collection={
                    "allowed_countries": list(request.allowed_countries),  # type: ignore[typeddict-item]
                },
                metadata=dict(request.metadata),
            )
        except stripe.StripeError as e:
            logger.error("stripe session create failed: %r", e)
            raise _upstream(e) from e
        return SessionHandle(id=session.id, url=session.url)

    async def list_sessions(self, limit: int) -> list[GatewaySession]:
        try:
            page = await stripe.checkout.Session.list_async(
                api_key=self._api_key,
                limit=limit,
                expand=LIST_EXPAND,
            )
        except stripe.StripeError as e:
            logger.error("stripe session list failed: %r", e)
            raise _upstream(e) from e
        return [session_from_dict(s.to_dict()) for s in page.data]

    async def retrieve_session(self, session_id: str) -> GatewaySession:
        try:
            session = await stripe.checkout.Session.retrieve_async(
                session_id,
                api_key=self._api_key,
                expand=RETRIEVE_EXPAND,
            )
        except stripe.StripeError as e:
            logger.error("stripe session %s retrieve failed: %r", session_id, e)
            raise _upstream(e) from e
        return session_from_dict(session.to_dict())


__all__ = ("StripeGateway", "session_from_dict")
