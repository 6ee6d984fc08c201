from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront._errors import ValidationError
from storefront.pricing import to_decimal
from storefront.store import Document


def normalize_code(code: str | None) -> str:
    """Trim + upper-case. Codes are case-insensitive, stored upper-case."""
    return (code or "").strip().upper()


def stored_percentage(value: object) -> float | None:
    """A stored discount as a float, or None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(to_decimal(value))  # type: ignore[arg-type]
    except ValidationError:
        return None


@dataclass(frozen=True, slots=True)
class Coupon:
    id: str
    code: str
    discount_percentage: float
    description: str = ""
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> Coupon:
        return cls(
            id=str(doc["_id"]),
            code=str(doc.get("code", "")),
            discount_percentage=stored_percentage(doc.get("discountPercentage")) or 0.0,
            description=str(doc.get("description") or ""),
            is_active=bool(doc.get("isActive", False)),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Verdict
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Accepted:
    code: str
    discount_percentage: float
    description: str = ""


@dataclass(frozen=True, slots=True)
class Rejected:
    code: str
    reason: str  # "absent" | "not_found" | "inactive" | "invalid" | "unavailable"

    @property
    def discount_percentage(self) -> float:
        return 0.0


type CouponVerdict = Accepted | Rejected


__all__ = (
    "normalize_code",
    "stored_percentage",
    "Coupon",
    "Accepted",
    "Rejected",
    "CouponVerdict",
)
