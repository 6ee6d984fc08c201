"""
Gateway — hosted card checkout, written once and read back later.

    from storefront import gateway as Gw

    bag = Gw.encode(Gw.CheckoutMetadata(product_id=pid, is_custom_product=False, quantity=2))
    request = Gw.build_session_request(settings, product_id=pid, label=..., ...)
    handle = await gateway.create_session(request)

    for session in await gateway.list_sessions(100):
        decoded = Gw.decode(session.metadata)
"""

from storefront.gateway._types import (
    LineItem,
    SessionRequest,
    SessionHandle,
    GatewaySession,
    Gateway,
)
from storefront.gateway._metadata import (
    METADATA_VERSION,
    MAX_VALUE_LENGTH,
    REQUIRED_KEYS,
    CheckoutMetadata,
    DecodedMetadata,
    encode,
    decode,
)
from storefront.gateway._session import (
    SESSION_ID_PLACEHOLDER,
    line_item_label,
    success_url,
    cancel_url,
    build_session_request,
)
from storefront.gateway._stripe import StripeGateway, session_from_dict
from storefront.gateway._memory import MemoryGateway

__all__ = (
    "LineItem",
    "SessionRequest",
    "SessionHandle",
    "GatewaySession",
    "Gateway",
    "METADATA_VERSION",
    "MAX_VALUE_LENGTH",
    "REQUIRED_KEYS",
    "CheckoutMetadata",
    "DecodedMetadata",
    "encode",
    "decode",
    "SESSION_ID_PLACEHOLDER",
    "line_item_label",
    "success_url",
    "cancel_url",
    "build_session_request",
    "StripeGateway",
    "session_from_dict",
    "MemoryGateway",
)
