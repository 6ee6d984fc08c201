"""
Ops — request dataclasses dispatched to handlers, run as a nodnod graph.

- Op[T, E] is the base class for an operation request
- each registered handler becomes a nodnod node
- Op-typed fields of a request are dependencies; their handlers run first,
  concurrently, and the dependent handler receives them already resolved

Example:
    @dataclass(frozen=True, slots=True)
    class LoadDeliveryOrders(Op[OrderFeed, StorefrontError]):
        caller: Caller

    @dataclass(frozen=True, slots=True)
    class ListOrders(Op[OrderFeed, StorefrontError]):
        delivery: LoadDeliveryOrders    # dependency
        gateway: LoadGatewayOrders      # dependency

    async def list_orders(
        req: ListOrders,
        delivery: LoadDeliveryOrders,   # awaitable → cached Result
        gateway: LoadGatewayOrders,
    ) -> Result[OrderFeed, StorefrontError]:
        d = await delivery              # instant, already computed
        ...

    runner = ops().on(LoadDeliveryOrders, ...).on(ListOrders, list_orders).compile()
    result = await runner.run(ListOrders(...))
"""

from __future__ import annotations

import inspect
import logging
import time
from abc import ABC
from dataclasses import dataclass, field, fields
from typing import Any, Awaitable, Callable, Generic, TypeVar, cast, get_type_hints

from kungfu import Error, LazyCoroResult, Ok, Result, Some
from nodnod import EventLoopAgent, Node
from nodnod.utils.create_node import create_node

from storefront import graph as G
from storefront._errors import StorefrontError

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")
T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)

HandlerFunc = Callable[..., Awaitable[Result[Any, Any]]]


class Op(ABC, Generic[T_co, E_co]):
    """
    Base class for operation requests.

    Inside a handler an Op-typed parameter is awaitable and yields the
    dependency's Result.
    """

    def get(self) -> LazyCoroResult[T_co, E_co]:
        raise RuntimeError(
            f"Operation {type(self).__name__} is not bound; "
            "it is only awaitable as a handler dependency"
        )

    def __await__(self):
        return self.get().__await__()


def _is_op_type(typ: object) -> bool:
    return isinstance(typ, type) and issubclass(typ, Op)


@dataclass(frozen=True, slots=True)
class _OpReg:
    op_type: type[Op[Any, Any]]
    handler: HandlerFunc
    node_cls: type[Node[Any, Any]]


class _CachedOp(Generic[T_co, E_co]):
    """Stands in for a dependency Op whose Result is already known."""

    __slots__ = ("_result",)

    def __init__(self, result: Result[T_co, E_co]) -> None:
        self._result = result

    def get(self) -> LazyCoroResult[T_co, E_co]:
        result = self._result

        async def instant() -> Result[T_co, E_co]:
            return result

        return LazyCoroResult(instant)

    def __await__(self):
        return self.get().__await__()


def _op_dependencies(handler: HandlerFunc, op_type: type[Op[Any, Any]]) -> dict[str, type[Op[Any, Any]]]:
    hints = get_type_hints(handler)
    return {
        name: typ
        for name, typ in hints.items()
        if name != "return" and typ is not op_type and _is_op_type(typ)
    }


def _create_node_for_handler(
    op_type: type[Op[Any, Any]],
    handler: HandlerFunc,
    registry: dict[type[Op[Any, Any]], type[Node[Any, Any]]],
) -> type[Node[Any, Any]]:
    """
    Node whose __compose__ calls the handler.

    - req: OpType       → the request, injected into scope by the runner
    - dep: OtherOp      → OtherOp's node; its Result is wrapped in _CachedOp
    - anything else     → injected from scope by type
    """
    sig = inspect.signature(handler)
    hints = get_type_hints(handler)
    op_deps = _op_dependencies(handler, op_type)

    annotations: dict[str, Any] = {}
    params: list[inspect.Parameter] = []
    for pname, p in sig.parameters.items():
        ptype = hints.get(pname, p.annotation)
        annotations[pname] = registry[ptype] if pname in op_deps else ptype
        params.append(inspect.Parameter(pname, inspect.Parameter.POSITIONAL_OR_KEYWORD))
    annotations["return"] = Result[Any, Any]

    async def compose_fn(**kwargs: Any) -> Result[Any, Any]:
        resolved = {
            k: _CachedOp(cast(Result[Any, Any], v)) if k in op_deps else v
            for k, v in kwargs.items()
        }
        return await handler(**resolved)

    compose_fn.__annotations__ = annotations
    compose_fn.__signature__ = inspect.Signature(parameters=params)  # type: ignore[attr-defined]
    compose_fn.__name__ = f"compose_{op_type.__name__}"

    return create_node(
        name=f"Node:{op_type.__name__}",
        base_node=Node,
        bases=(),
        namespace={
            "__compose__": compose_fn,
            "__module__": handler.__module__,
        },
    )


@dataclass(slots=True, frozen=True)
class OpsBuilder:
    _items: tuple[tuple[type[Op[Any, Any]], HandlerFunc], ...] = ()

    def on(self, op_type: type[Op[Any, Any]], handler: HandlerFunc) -> OpsBuilder:
        """Register a handler. Last registration for a type wins."""
        others = tuple(i for i in self._items if i[0] is not op_type)
        return OpsBuilder(_items=(*others, (op_type, handler)))

    def compile(self) -> Runner:
        """
        Build one node per handler.

        A dependency's node is built before any node that needs it, so
        registration order does not matter.
        """
        handlers = dict(self._items)
        nodes: dict[type[Op[Any, Any]], type[Node[Any, Any]]] = {}
        registrations: dict[type[Op[Any, Any]], _OpReg] = {}
        building: set[type[Op[Any, Any]]] = set()

        def build(op_type: type[Op[Any, Any]]) -> None:
            if op_type in nodes:
                return
            if op_type in building:
                raise ValueError(f"Circular op dependency through {op_type.__name__}")
            if op_type not in handlers:
                raise LookupError(f"No handler registered for {op_type.__name__}")
            building.add(op_type)
            handler = handlers[op_type]
            for dep in _op_dependencies(handler, op_type).values():
                build(dep)
            nodes[op_type] = _create_node_for_handler(op_type, handler, nodes)
            registrations[op_type] = _OpReg(op_type, handler, nodes[op_type])
            building.discard(op_type)

        for op_type in handlers:
            build(op_type)

        return Runner(_registry=registrations)


@dataclass(slots=True)
class Runner:
    """
    Executes operations through nodnod.

    For every run: collect the Op dependencies from the request's fields,
    build an agent over their nodes, inject the shared collaborators plus
    the requests themselves, and read the target node's Result back.
    """

    _registry: dict[type[Op[Any, Any]], _OpReg]
    _injections: dict[type[Any], Any] = field(default_factory=dict)

    def inject(self, typ: type[Any], impl: object) -> Runner:
        """Shared collaborator, looked up by type (usually a Protocol)."""
        self._injections[typ] = impl
        return self

    def _collect_op_deps(self, req: Op[Any, Any]) -> list[Op[Any, Any]]:
        deps: list[Op[Any, Any]] = []
        seen: set[int] = set()

        def collect(op: Op[Any, Any]) -> None:
            if id(op) in seen or not hasattr(op, "__dataclass_fields__"):
                return
            seen.add(id(op))
            for f in fields(op):  # type: ignore[arg-type]
                value = getattr(op, f.name)
                if isinstance(value, Op) and type(value) in self._registry:
                    deps.append(value)
                    collect(value)

        collect(req)
        return deps

    async def run(self, req: Op[T, E]) -> Result[T, E]:
        op_type = type(req)
        reg = self._registry.get(op_type)
        if reg is None:
            return cast(
                Result[T, E],
                Error(StorefrontError(f"Op not registered: {op_type.__name__}", "UNREGISTERED")),
            )

        deps = self._collect_op_deps(req)
        agent = EventLoopAgent.build({reg.node_cls, *(self._registry[type(d)].node_cls for d in deps)})
        started = time.perf_counter()

        async with G.TypedScope(detail=f"ops:{op_type.__name__}") as scope:
            for typ, impl in self._injections.items():
                scope.inject(typ, impl)
            scope.inject(op_type, req)
            for dep in deps:
                scope.inject(type(dep), dep)

            await agent.run(scope.inner, {})  # type: ignore[misc]

            match scope.inner.retrieve(reg.node_cls):
                case Some(value):
                    outcome = value.value
                case _:
                    raise LookupError(f"{reg.node_cls.__name__} produced no value")

        result = outcome if isinstance(outcome, (Ok, Error)) else Ok(outcome)
        logger.debug(
            "%s -> %s in %.1fms",
            op_type.__name__,
            "ok" if isinstance(result, Ok) else "error",
            (time.perf_counter() - started) * 1000,
        )
        return cast(Result[T, E], result)

    def __call__(self, req: Op[T, E]) -> LazyCoroResult[T, E]:
        async def inner() -> Result[T, E]:
            return await self.run(req)

        return LazyCoroResult(inner)


def ops() -> OpsBuilder:
    """ops().on(...).compile()"""
    return OpsBuilder()


Returning = Op

__all__ = ("Op", "Returning", "OpsBuilder", "Runner", "ops")
