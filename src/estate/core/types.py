"""Core type definitions shared across all estate modules."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

Principal = str
PropertyId = int


class RegistryError(StrEnum):
    """Closed set of failure tags returned by registry operations."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_VALUE = "invalid_value"


# Stable numeric tags used on the ledger
ERR_OWNER_ONLY = 100
ERR_NOT_FOUND = 101
ERR_UNAUTHORIZED = 102
ERR_INVALID_VALUE = 104

_ERROR_CODES: dict[RegistryError, int] = {
    RegistryError.NOT_FOUND: ERR_NOT_FOUND,
    RegistryError.UNAUTHORIZED: ERR_UNAUTHORIZED,
    RegistryError.INVALID_VALUE: ERR_INVALID_VALUE,
}


class RegistryResult(BaseModel):
    """Tagged outcome of a registry operation.

    Exactly one of ``value`` (on success) or ``error`` (on failure) is
    meaningful. ``admin_only`` marks an ``UNAUTHORIZED`` failure raised by
    an administrator gate rather than an ownership gate.
    """

    model_config = {"frozen": True}

    ok: bool
    value: int | bool | None = None
    error: RegistryError | None = None
    admin_only: bool = False
    detail: str = ""

    @classmethod
    def success(cls, value: int | bool = True) -> RegistryResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        error: RegistryError,
        detail: str = "",
        admin_only: bool = False,
    ) -> RegistryResult:
        return cls(ok=False, error=error, detail=detail, admin_only=admin_only)

    @property
    def code(self) -> int | None:
        """Numeric ledger tag for a failure, ``None`` on success."""
        if self.error is None:
            return None
        if self.admin_only:
            return ERR_OWNER_ONLY
        return _ERROR_CODES[self.error]


class AuditEvent(BaseModel):
    """Immutable audit log entry for a successful registry mutation."""

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    tick: int
    actor: Principal
    action: str
    resource: str
    details: dict[str, Any] = Field(default_factory=dict)
