"""Virtual Estate: zoned parcel ownership, pricing and taxation on a shared ledger."""

from estate.core.types import RegistryError, RegistryResult
from estate.ledger import EstateLedger
from estate.parcels.registry import PropertyRegistry
from estate.zoning.registry import ZoneRegistry

__all__ = [
    "EstateLedger",
    "PropertyRegistry",
    "RegistryError",
    "RegistryResult",
    "ZoneRegistry",
]
