"""
Auth — who may call the admin operations.

Identity comes from a trusted upstream proxy as a request header; the core
only decides whether that identity is on the allow-list.

    policy = AllowListPolicy.from_settings(settings)
    caller = Caller.from_headers({"x-user-email": "owner@shop.example"})
    authorize(policy, caller)    # Ok(caller) or Error(AuthorizationError)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from kungfu import Error, Ok, Result

from storefront._errors import AuthorizationError
from storefront.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Caller:
    """Forwarded request headers, lower-cased names."""

    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> Caller:
        return cls(tuple(sorted((k.lower(), v) for k, v in headers.items())))

    def header(self, name: str) -> str | None:
        name = name.lower()
        return next((v for k, v in self.headers if k == name), None)


class AdminPolicy(Protocol):
    def is_admin(self, caller: Caller) -> bool: ...


@dataclass(frozen=True, slots=True)
class AllowListPolicy:
    emails: frozenset[str]
    header: str = "x-user-email"

    @classmethod
    def from_settings(cls, settings: Settings) -> AllowListPolicy:
        return cls(settings.admin_emails, settings.admin_identity_header)

    def is_admin(self, caller: Caller) -> bool:
        identity = (caller.header(self.header) or "").strip().lower()
        return bool(identity) and identity in self.emails


def authorize(policy: AdminPolicy, caller: Caller) -> Result[Caller, AuthorizationError]:
    if policy.is_admin(caller):
        return Ok(caller)
    logger.warning("admin operation refused (%d forwarded headers)", len(caller.headers))
    return Error(AuthorizationError())


__all__ = ("Caller", "AdminPolicy", "AllowListPolicy", "authorize")
