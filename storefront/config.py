"""
Config — environment-driven settings.

    settings = Settings.from_env()
    settings = Settings.from_env({"PUBLIC_BASE_URL": "https://shop.example"})
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace


def _split(raw: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Everything the core consumes from its environment."""

    stripe_secret_key: str = ""
    public_base_url: str = "http://localhost:3000"
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "ecommerce"
    admin_emails: frozenset[str] = field(default_factory=frozenset)
    admin_identity_header: str = "x-user-email"
    currency: str = "usd"
    allowed_shipping_countries: tuple[str, ...] = ("US",)
    gateway_page_size: int = 100
    lookup_timeout_seconds: float = 5.0
    reconcile_concurrency: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", defaults.stripe_secret_key),
            public_base_url=env.get("PUBLIC_BASE_URL", defaults.public_base_url).rstrip("/"),
            mongodb_url=env.get("MONGODB_URL", defaults.mongodb_url),
            mongodb_database=env.get("MONGODB_DATABASE", defaults.mongodb_database),
            admin_emails=_split(env.get("ADMIN_EMAILS", "")),
            admin_identity_header=env.get(
                "ADMIN_IDENTITY_HEADER", defaults.admin_identity_header
            ).lower(),
            currency=env.get("CURRENCY", defaults.currency).lower(),
            allowed_shipping_countries=tuple(
                sorted(c.upper() for c in _split(env.get("ALLOWED_SHIPPING_COUNTRIES", "US")))
            ) or defaults.allowed_shipping_countries,
            gateway_page_size=int(env.get("GATEWAY_PAGE_SIZE", defaults.gateway_page_size)),
            lookup_timeout_seconds=float(
                env.get("LOOKUP_TIMEOUT_SECONDS", defaults.lookup_timeout_seconds)
            ),
            reconcile_concurrency=int(
                env.get("RECONCILE_CONCURRENCY", defaults.reconcile_concurrency)
            ),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )

    def with_admins(self, *emails: str) -> Settings:
        return replace(self, admin_emails=frozenset(e.lower() for e in emails))


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ("Settings", "configure_logging")
