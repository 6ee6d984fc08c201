"""
Ops — every externally reachable operation as a request dataclass.

    from storefront import ops as O

    @dataclass(frozen=True, slots=True)
    class ValidateCoupon(O.Returning[Accepted, StorefrontError]):
        code: str | None

    async def validate_coupon(req: ValidateCoupon, store: DocumentStore) -> Result[...]:
        ...

    runner = O.ops().on(ValidateCoupon, validate_coupon).compile().inject(DocumentStore, store)
    result = await runner.run(ValidateCoupon("SAVE20"))

Handlers receive their request, any Op-typed dependencies (already
resolved, in parallel) and collaborators injected by type.
"""

from storefront.ops._graph import (
    Op,
    Returning,
    OpsBuilder,
    Runner,
    ops,
)

__all__ = (
    "Op",
    "Returning",
    "OpsBuilder",
    "Runner",
    "ops",
)
