"""Parcel data models."""

from __future__ import annotations

from pydantic import BaseModel, NonNegativeInt, PositiveInt


class Property(BaseModel):
    model_config = {"validate_assignment": True}

    id: PositiveInt
    owner: str
    zone: str
    price: NonNegativeInt = 0
    last_tax_payment: NonNegativeInt
    improvements: NonNegativeInt = 0

    @property
    def for_sale(self) -> bool:
        return self.price > 0
