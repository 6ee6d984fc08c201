"""
Graph — checkout pipelines as auto-parallelized node graphs.

    from storefront import graph as G

    @G.node
    class QuoteNode:
        @classmethod
        def __compose__(cls, product: ProductNode, coupon: CouponNode) -> "QuoteNode":
            ...

    quote = await G.run(QuoteNode).given(request).inject_as(DocumentStore, store)
"""

from nodnod import scalar_node as node

from storefront.graph._run import (
    TypedScope,
    Run,
    run,
    compose,
)

__all__ = (
    "node",
    "TypedScope",
    "Run",
    "run",
    "compose",
)
