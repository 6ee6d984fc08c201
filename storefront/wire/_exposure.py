"""
Exposures — which op answers which HTTP route, and how payloads convert.

An Endpoint pairs one Runner with (Route, Codec) exposures. Request models
are bound by the framework, then turn themselves into ops given the
RouteContext (path parameters, forwarded headers). Response models are
built from the op's Ok value; error values never reach them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from storefront.ops import Op, Runner

type Method = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})


# ═══════════════════════════════════════════════════════════════════════════════
# Route
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Route:
    """
    Method and path plus the request headers forwarded to the op.

    Forwarded headers reach RouteContext.headers, names lower-cased.
    """

    method: Method
    path: str
    forward: frozenset[str] = field(default_factory=frozenset)

    @property
    def has_body(self) -> bool:
        return self.method in BODY_METHODS

    def forwarding(self, *headers: str) -> Route:
        return Route(self.method, self.path, self.forward | {h.lower() for h in headers})


# ═══════════════════════════════════════════════════════════════════════════════
# Codec
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class RouteContext:
    """What a request carries besides its body or query string."""

    path_params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    def param(self, name: str) -> str:
        return self.path_params.get(name, "")


class ToDomain[OpT: Op[Any, Any]](Protocol):
    def to_domain(self, ctx: RouteContext) -> OpT: ...


class FromDomain[T](Protocol):
    @classmethod
    def from_domain(cls, dom: T) -> FromDomain[T]: ...


@dataclass(frozen=True, slots=True)
class Codec:
    request: type[ToDomain[Any]]
    response: type[FromDomain[Any]]


# ═══════════════════════════════════════════════════════════════════════════════
# Endpoint / Application
# ═══════════════════════════════════════════════════════════════════════════════

type Exposure = tuple[Route, Codec]


@dataclass(frozen=True, slots=True)
class Endpoint:
    runner: Runner
    exposures: tuple[Exposure, ...] = ()

    def expose(self, route: Route, request: type[Any], response: type[Any]) -> Endpoint:
        return Endpoint(self.runner, (*self.exposures, (route, Codec(request, response))))

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(f"{r.method} {r.path}" for r, _ in self.exposures)


@dataclass(slots=True)
class Application:
    endpoints: list[Endpoint] = field(default_factory=list)

    def mount(self, *endps: Endpoint) -> Application:
        self.endpoints.extend(endps)
        return self


def endpoint(runner: Runner) -> Endpoint:
    return Endpoint(runner)


__all__ = (
    "Method",
    "BODY_METHODS",
    "Route",
    "RouteContext",
    "ToDomain",
    "FromDomain",
    "Codec",
    "Exposure",
    "Endpoint",
    "Application",
    "endpoint",
)
