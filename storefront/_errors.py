"""
Errors — one taxonomy for both checkout channels.

Every failure the core can report is a StorefrontError with a kind,
a human-readable message (shown as-is by the storefront), a machine code
and the HTTP status it maps to.

    match await resolve(store, product_id, source):
        case Ok(product):
            ...
        case Error(ProductNotFound() as e):
            print(e.status, e.message)  # 404 Product not found
"""

from __future__ import annotations

from enum import Enum, auto


# ═══════════════════════════════════════════════════════════════════════════════
# Kinds
# ═══════════════════════════════════════════════════════════════════════════════

class ErrorKind(Enum):
    """Error kinds."""
    VALIDATION = auto()  # Missing or malformed input, never retried
    NOT_FOUND = auto()  # Product, order or coupon absent
    AUTHORIZATION = auto()  # Non-admin calling an admin-only operation
    UPSTREAM = auto()  # Gateway or store call failed
    PARTIAL = auto()  # One reconciliation item failed, page survives


# ═══════════════════════════════════════════════════════════════════════════════
# Base
# ═══════════════════════════════════════════════════════════════════════════════

class StorefrontError(Exception):
    """Base for every error the core reports."""

    kind: ErrorKind = ErrorKind.UPSTREAM
    default_status: int = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status if status is not None else self.default_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# Validation (400)
# ═══════════════════════════════════════════════════════════════════════════════

class ValidationError(StorefrontError):
    kind = ErrorKind.VALIDATION
    default_status = 400

    def __init__(self, message: str, code: str | None = "VALIDATION") -> None:
        super().__init__(message, code)


class MissingField(ValidationError):
    """Required request fields were absent or blank."""

    def __init__(self, *fields: str) -> None:
        super().__init__("Missing required fields", "MISSING_FIELD")
        self.fields = fields


class InvalidIdentifier(ValidationError):
    """Identifier is not a valid document-store id. Raised before any I/O."""

    def __init__(self, entity: str, value: object) -> None:
        super().__init__(f"Invalid {entity} ID", "INVALID_ID")
        self.entity = entity
        self.value = value


class InvalidQuantity(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__("Quantity must be a positive integer", "INVALID_QUANTITY")
        self.value = value


# ═══════════════════════════════════════════════════════════════════════════════
# Not found (404)
# ═══════════════════════════════════════════════════════════════════════════════

class NotFoundError(StorefrontError):
    kind = ErrorKind.NOT_FOUND
    default_status = 404

    def __init__(self, message: str, code: str | None = "NOT_FOUND") -> None:
        super().__init__(message, code)


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: str, collection: str) -> None:
        super().__init__("Product not found", "PRODUCT_NOT_FOUND")
        self.product_id = product_id
        self.collection = collection


# ═══════════════════════════════════════════════════════════════════════════════
# Authorization (403) / Upstream (5xx) / Partial
# ═══════════════════════════════════════════════════════════════════════════════

class AuthorizationError(StorefrontError):
    kind = ErrorKind.AUTHORIZATION
    default_status = 403

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message, "NOT_AUTHORIZED")


class UpstreamError(StorefrontError):
    """
    Gateway or store failure. Upstream message/code/status pass through.

    wrap() leaves errors the core already classified untouched.
    """

    kind = ErrorKind.UPSTREAM
    default_status = 500

    @classmethod
    def wrap(cls, exc: Exception, message: str) -> StorefrontError:
        if isinstance(exc, StorefrontError):
            return exc
        return cls(f"{message}: {exc}" if str(exc) else message)


class PartialProcessingError(StorefrontError):
    """
    One item of a multi-item read failed.

    Logged and collected next to the results; never the reason a whole
    request fails.
    """

    kind = ErrorKind.PARTIAL

    def __init__(self, item_id: str, reason: StorefrontError | Exception) -> None:
        super().__init__(f"{item_id}: {reason}", "PARTIAL")
        self.item_id = item_id
        self.reason = reason


__all__ = (
    "ErrorKind",
    "StorefrontError",
    "ValidationError",
    "MissingField",
    "InvalidIdentifier",
    "InvalidQuantity",
    "NotFoundError",
    "ProductNotFound",
    "AuthorizationError",
    "UpstreamError",
    "PartialProcessingError",
)
