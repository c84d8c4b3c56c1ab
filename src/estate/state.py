"""Single owned aggregate holding every zone and parcel record."""

from __future__ import annotations

from pydantic import BaseModel, Field, NonNegativeInt

from estate.parcels.models import Property
from estate.zoning.models import Zone


class RegistryState(BaseModel):
    """Mutable registry state shared by ZoneRegistry and PropertyRegistry.

    Only the registries mutate it. Hosts that persist the ledger can dump
    it with ``model_dump_json()`` and rebuild it with
    ``model_validate_json()``; the storage itself is theirs.
    """

    zones: dict[str, Zone] = Field(default_factory=dict)
    properties: dict[int, Property] = Field(default_factory=dict)
    last_property_id: NonNegativeInt = 0
