"""Zone data models."""

from __future__ import annotations

from pydantic import BaseModel, NonNegativeInt


class Zone(BaseModel):
    """Zoning rule applied to every parcel created in it.

    ``tax_rate`` is carried for hosts that bill tax; the registry itself
    never applies it.
    """

    name: str
    max_improvements: NonNegativeInt
    tax_rate: NonNegativeInt
