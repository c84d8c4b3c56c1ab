"""Registry configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_ADMIN = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


class RegistryConfig(BaseSettings):
    """Zone and property registry configuration."""

    model_config = {"env_prefix": "ESTATE_REGISTRY_"}

    admin: str = DEFAULT_ADMIN
    zones_path: str | None = None
    genesis_tick: int = Field(default=0, ge=0)


class AuditConfig(BaseSettings):
    """Audit logging configuration."""

    model_config = {"env_prefix": "ESTATE_AUDIT_"}

    enabled: bool = True
    log_dir: str = "data/audit"
    log_file: str = "estate-audit.jsonl"


class Settings(BaseSettings):
    """Root settings."""

    model_config = {"env_prefix": "ESTATE_"}

    environment: str = "development"
    log_level: str = "INFO"

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
