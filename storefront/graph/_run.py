"""
Runner — sugar over nodnod.

Dependencies are discovered from the target node; collaborators are
injected by type, usually a Protocol (DocumentStore, Gateway).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any, cast

from nodnod import EventLoopAgent, Node, Scope, Value

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# TypedScope
# ═══════════════════════════════════════════════════════════════════════════════

class TypedScope:
    """Type-keyed wrapper around nodnod.Scope."""

    __slots__ = ("_scope",)

    def __init__(self, scope: Scope | None = None, detail: str = "scope") -> None:
        self._scope = scope if scope is not None else Scope(detail=detail)

    @property
    def inner(self) -> Scope:
        return self._scope

    def inject[T](self, typ: type[T], value: T) -> TypedScope:
        self._scope.push(Value(typ, value))
        return self

    def get[T](self, typ: type[T]) -> T:
        result = self._scope.get(typ)
        if result is None:
            raise KeyError(f"{typ.__name__} not found in scope")
        return cast(T, result.value)

    async def __aenter__(self) -> TypedScope:
        await self._scope.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._scope.__aexit__(*args)


# ═══════════════════════════════════════════════════════════════════════════════
# Run — fluent awaitable builder
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Run[T]:
    """
    Resolve a node and everything it depends on.

        quote = await (
            run(QuoteNode)
            .given(checkout_request)
            .inject_as(DocumentStore, store)
        )

    Exceptions raised inside __compose__ propagate unchanged.
    """
    _target: type[T]
    _injections: tuple[tuple[type[Any], Any], ...] = ()

    def inject_as[V](self, typ: type[V], value: V) -> Run[T]:
        return Run(self._target, (*self._injections, (typ, value)))

    def given(self, *values: object) -> Run[T]:
        """Inject values under their runtime type."""
        typed = tuple((cast(type[Any], type(v)), v) for v in values)
        return Run(self._target, (*self._injections, *typed))

    def __await__(self) -> Any:
        return self._execute().__await__()

    async def _execute(self) -> T:
        agent = EventLoopAgent.build({cast(type[Node[Any, Any]], self._target)})
        started = time.perf_counter()

        async with TypedScope(detail=f"run:{self._target.__name__}") as scope:
            for typ, value in self._injections:
                scope.inject(typ, value)

            run_method = cast(
                Callable[[Scope, dict[type[Any], Scope]], Coroutine[Any, Any, None]],
                getattr(agent, "run"),
            )
            await run_method(scope.inner, {})
            logger.debug(
                "%s resolved in %.1fms",
                self._target.__name__,
                (time.perf_counter() - started) * 1000,
            )
            return scope.get(self._target)


def run[T](target: type[T]) -> Run[T]:
    return Run(target)


async def compose[T](target: type[T], *inputs: object) -> T:
    """One-shot: await compose(SessionNode, request, settings)."""
    return await run(target).given(*inputs)


__all__ = ("TypedScope", "Run", "run", "compose")
