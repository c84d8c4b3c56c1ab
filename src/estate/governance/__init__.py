"""Governance module for the estate ledger.

Provides the tamper-evident audit trail of registry mutations.
"""

from estate.governance.audit import AuditEntry, AuditLogger

__all__ = ["AuditEntry", "AuditLogger"]
