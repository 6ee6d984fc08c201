"""MemoryGateway — in-process Gateway for testing."""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from storefront._errors import NotFoundError, UpstreamError
from storefront.gateway._types import GatewaySession, SessionHandle, SessionRequest


@dataclass(slots=True)
class MemoryGateway:
    """
    Records created sessions and lists them newest first.

    Set fail_with to make the next calls raise that error.
    """

    clock: Callable[[], int] = field(default=lambda: int(time.time()))
    sessions: list[GatewaySession] = field(default_factory=list)
    requests: list[SessionRequest] = field(default_factory=list)
    fail_with: UpstreamError | None = None
    _ids: itertools.count[int] = field(default_factory=lambda: itertools.count(1))

    def add(self, session: GatewaySession) -> GatewaySession:
        self.sessions.append(session)
        return session

    async def create_session(self, request: SessionRequest) -> SessionHandle:
        if self.fail_with is not None:
            raise self.fail_with
        self.requests.append(request)
        item = request.line_item
        session = self.add(
            GatewaySession(
                id=f"cs_test_{next(self._ids)}",
                created=self.clock(),
                amount_total=item.unit_amount * item.quantity,
                metadata=dict(request.metadata),
                customer_details={"email": request.customer_email},
                line_item_description=item.name,
                payment_status="paid",
                status="complete",
            )
        )
        return SessionHandle(id=session.id, url=f"https://checkout.test/{session.id}")

    async def list_sessions(self, limit: int) -> list[GatewaySession]:
        if self.fail_with is not None:
            raise self.fail_with
        newest_first = sorted(self.sessions, key=lambda s: s.created, reverse=True)
        return newest_first[:limit]

    async def retrieve_session(self, session_id: str) -> GatewaySession:
        if self.fail_with is not None:
            raise self.fail_with
        for session in self.sessions:
            if session.id == session_id:
                return session
        raise NotFoundError("Session not found")


__all__ = ("MemoryGateway",)
