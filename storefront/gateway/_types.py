from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


# ═══════════════════════════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class LineItem:
    name: str
    unit_amount: int  # minor units
    quantity: int
    currency: str = "usd"


@dataclass(frozen=True, slots=True)
class SessionRequest:
    line_item: LineItem
    metadata: Mapping[str, str]
    customer_email: str
    success_url: str
    cancel_url: str
    allowed_countries: tuple[str, ...] = ("US",)


@dataclass(frozen=True, slots=True)
class SessionHandle:
    id: str
    url: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Read
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class GatewaySession:
    """A hosted session as read back; amounts already in minor units."""

    id: str
    created: int  # unix seconds
    amount_total: int | None
    metadata: Mapping[str, str] = field(default_factory=dict)
    customer_details: Mapping[str, Any] = field(default_factory=dict)
    line_item_description: str | None = None
    payment_status: str | None = None
    status: str | None = None


class Gateway(Protocol):
    """
    Hosted-checkout gateway.

    Methods raise on failure; adapters raise UpstreamError with the
    gateway's own message, code and status when it supplies them.
    """

    async def create_session(self, request: SessionRequest) -> SessionHandle: ...

    async def list_sessions(self, limit: int) -> list[GatewaySession]: ...

    async def retrieve_session(self, session_id: str) -> GatewaySession: ...


__all__ = (
    "LineItem",
    "SessionRequest",
    "SessionHandle",
    "GatewaySession",
    "Gateway",
)
