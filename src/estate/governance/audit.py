"""Immutable audit logger for registry mutations.

Writes append-only, hash-chained log entries to JSONL files.
Each entry's SHA-256 hash includes the previous entry's hash, forming a
tamper-evident chain. Altering any entry breaks the chain for all
subsequent entries.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from estate.core.config import AuditConfig
from estate.core.types import AuditEvent


class AuditEntry:
    """Wrapper around an AuditEvent with chain hash metadata."""

    def __init__(self, event: AuditEvent, previous_hash: str, entry_hash: str) -> None:
        self.event = event
        self.previous_hash = previous_hash
        self.entry_hash = entry_hash

    def to_dict(self) -> dict[str, Any]:
        return {
            "previous_hash": self.previous_hash,
            "entry_hash": self.entry_hash,
            "event": json.loads(self.event.model_dump_json()),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditEntry:
        return cls(
            event=AuditEvent(**data["event"]),
            previous_hash=data["previous_hash"],
            entry_hash=data["entry_hash"],
        )


class AuditLogger:
    """Append-only, hash-chained audit logger.

    Each entry's hash = SHA-256(previous_hash + event_json). Entries are
    written one per line to ``<log_dir>/<log_file>``.

    Args:
        config: AuditConfig instance. Defaults to AuditConfig() which reads
            from environment variables.
    """

    def __init__(self, config: AuditConfig | None = None) -> None:
        self._config = config or AuditConfig()
        self._log_dir = Path(self._config.log_dir)
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._log_path = self._log_dir / self._config.log_file
        self._last_hash: str = self._compute_genesis_hash()

        if self._log_path.exists():
            self._recover_last_hash()

    @staticmethod
    def _compute_genesis_hash() -> str:
        return hashlib.sha256(b"estate-genesis").hexdigest()

    @staticmethod
    def _compute_hash(previous_hash: str, event_json: str) -> str:
        return hashlib.sha256((previous_hash + event_json).encode("utf-8")).hexdigest()

    def _recover_last_hash(self) -> None:
        """Pick up the chain tail from an existing log file."""
        for data in self._iter_raw():
            self._last_hash = data["entry_hash"]

    def _iter_raw(self):
        if not self._log_path.exists():
            return
        with open(self._log_path) as fh:
            for line in fh:
                stripped = line.strip()
                if stripped:
                    yield json.loads(stripped)

    def log(self, event: AuditEvent) -> AuditEntry:
        """Append an event to the chain and return its entry."""
        event_json = event.model_dump_json()
        entry = AuditEntry(
            event=event,
            previous_hash=self._last_hash,
            entry_hash=self._compute_hash(self._last_hash, event_json),
        )

        with open(self._log_path, "a") as fh:
            fh.write(json.dumps(entry.to_dict()) + "\n")

        self._last_hash = entry.entry_hash
        return entry

    def verify_chain(self) -> bool:
        """Recompute every hash in the log.

        Returns True if the chain is intact (an empty log is trivially
        intact), False if any entry has been altered, removed or reordered.
        """
        previous_hash = self._compute_genesis_hash()

        for data in self._iter_raw():
            if data["previous_hash"] != previous_hash:
                return False

            event_json = AuditEvent(**data["event"]).model_dump_json()
            if data["entry_hash"] != self._compute_hash(previous_hash, event_json):
                return False

            previous_hash = data["entry_hash"]

        return True

    def query(self, filters: dict[str, Any] | None = None) -> list[AuditEvent]:
        """Query audit events with optional filters.

        Supported filter keys:
            - ``actor``: exact match on the acting principal
            - ``action``: exact match, e.g. ``property_bought``
            - ``resource``: exact match, e.g. ``property:1`` or ``zone:residential``
            - ``min_tick``: only events at or after this tick
            - ``max_tick``: only events at or before this tick
        """
        filters = filters or {}
        results: list[AuditEvent] = []

        for data in self._iter_raw():
            event = AuditEvent(**data["event"])

            if "actor" in filters and event.actor != filters["actor"]:
                continue
            if "action" in filters and event.action != filters["action"]:
                continue
            if "resource" in filters and event.resource != filters["resource"]:
                continue
            if "min_tick" in filters and event.tick < filters["min_tick"]:
                continue
            if "max_tick" in filters and event.tick > filters["max_tick"]:
                continue

            results.append(event)

        return results

    @property
    def log_path(self) -> Path:
        return self._log_path

    @property
    def last_hash(self) -> str:
        """The hash of the most recent entry (or genesis hash if empty)."""
        return self._last_hash
