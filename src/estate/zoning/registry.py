"""Administrator-controlled zone registry."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from estate.core.clock import ManualClock, TickSource
from estate.core.types import AuditEvent, Principal, RegistryError, RegistryResult
from estate.governance.audit import AuditLogger
from estate.state import RegistryState
from estate.zoning.models import Zone

logger = logging.getLogger(__name__)


class ZoneRegistry:
    """Holds zoning rules keyed by zone name.

    Only the configured administrator may define or redefine zones.
    Zones are never deleted.
    """

    def __init__(
        self,
        admin: Principal,
        state: RegistryState | None = None,
        clock: TickSource | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._admin = admin
        self._state = state if state is not None else RegistryState()
        self._clock = clock or ManualClock()
        self._audit = audit_logger

    @property
    def admin(self) -> Principal:
        return self._admin

    @property
    def state(self) -> RegistryState:
        return self._state

    def set_zone(
        self,
        caller: Principal,
        zone_name: str,
        max_improvements: int,
        tax_rate: int,
    ) -> RegistryResult:
        """Insert or overwrite a zone. Redefinition is not an error."""
        if caller != self._admin:
            logger.warning("Rejected set_zone %r by non-admin %s", zone_name, caller)
            return RegistryResult.failure(
                RegistryError.UNAUTHORIZED,
                "Only the registry administrator may configure zones",
                admin_only=True,
            )

        try:
            zone = Zone(
                name=zone_name,
                max_improvements=max_improvements,
                tax_rate=tax_rate,
            )
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            logger.warning("Rejected set_zone %r: %s: %s", zone_name, field, error["msg"])
            return RegistryResult.failure(
                RegistryError.INVALID_VALUE,
                f"Invalid zone {zone_name!r}: {field}: {error['msg']}",
            )

        previous = self._state.zones.get(zone_name)
        if self._audit:
            self._audit.log(AuditEvent(
                tick=self._clock.current_tick(),
                actor=caller,
                action="zone_set",
                resource=f"zone:{zone_name}",
                details={
                    "max_improvements": zone.max_improvements,
                    "tax_rate": zone.tax_rate,
                    "replaced": previous is not None,
                },
            ))

        self._state.zones[zone_name] = zone
        logger.info(
            "Zone %r %s (max_improvements=%d, tax_rate=%d)",
            zone_name,
            "redefined" if previous is not None else "created",
            zone.max_improvements,
            zone.tax_rate,
        )
        return RegistryResult.success()

    def get_zone(self, zone_name: str) -> Zone | None:
        zone = self._state.zones.get(zone_name)
        return zone.model_copy() if zone else None

    def has_zone(self, zone_name: str) -> bool:
        return zone_name in self._state.zones

    def list_zones(self) -> list[Zone]:
        return [z.model_copy() for z in self._state.zones.values()]

    def load_zones(self, path: str | Path) -> list[str]:
        """Seed zones from a YAML file as the administrator.

        Expected layout::

            zones:
              - name: residential
                max_improvements: 100
                tax_rate: 5

        Raises:
            FileNotFoundError: If the file does not exist.
            KeyError: If an entry lacks a required key.
            ValueError: If an entry is rejected by ``set_zone``.
        """
        with open(path) as fh:
            data = yaml.safe_load(fh) or {}

        loaded: list[str] = []
        for entry in data.get("zones", []):
            name = str(entry["name"])  # YAML may parse numeric names as int
            result = self.set_zone(
                self._admin,
                name,
                entry["max_improvements"],
                entry["tax_rate"],
            )
            if not result.ok:
                raise ValueError(f"Zone seed {name!r} in {path}: {result.detail}")
            loaded.append(name)

        logger.info("Loaded %d zone(s) from %s", len(loaded), path)
        return loaded
