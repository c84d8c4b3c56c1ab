"""Ledger factory wiring settings, clock, audit trail and both registries."""

from __future__ import annotations

import logging

from estate.core.clock import ManualClock, TickSource
from estate.core.config import Settings
from estate.governance.audit import AuditLogger
from estate.parcels.registry import PropertyRegistry
from estate.state import RegistryState
from estate.zoning.registry import ZoneRegistry

logger = logging.getLogger(__name__)


class EstateLedger:
    """One in-process ledger: a shared state aggregate behind two registries.

    Operations are expected to arrive strictly one at a time; the host
    serializes callers.

    Args:
        settings: Settings. Defaults to Settings() which reads from
            environment variables.
        clock: Tick source. Defaults to a ManualClock starting at
            ``settings.registry.genesis_tick``.
        audit_logger: Optional pre-built AuditLogger. When omitted one is
            created from ``settings.audit`` if auditing is enabled.
        state: Optional pre-existing state, e.g. restored by the host.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: TickSource | None = None,
        audit_logger: AuditLogger | None = None,
        state: RegistryState | None = None,
    ) -> None:
        self.settings = settings or Settings()
        logging.getLogger("estate").setLevel(self.settings.log_level.upper())

        self.clock = clock or ManualClock(self.settings.registry.genesis_tick)

        if audit_logger is None and self.settings.audit.enabled:
            audit_logger = AuditLogger(config=self.settings.audit)
        self.audit_logger = audit_logger

        self.state = state if state is not None else RegistryState()
        self.zones = ZoneRegistry(
            admin=self.settings.registry.admin,
            state=self.state,
            clock=self.clock,
            audit_logger=self.audit_logger,
        )
        self.properties = PropertyRegistry(
            zones=self.zones,
            clock=self.clock,
            audit_logger=self.audit_logger,
        )

        if self.settings.registry.zones_path:
            self.zones.load_zones(self.settings.registry.zones_path)

        logger.info(
            "Ledger ready (environment=%s, zones=%d, properties=%d)",
            self.settings.environment,
            len(self.state.zones),
            len(self.state.properties),
        )
