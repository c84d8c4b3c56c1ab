"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from estate.core.clock import ManualClock
from estate.parcels.registry import PropertyRegistry
from estate.state import RegistryState
from estate.zoning.registry import ZoneRegistry

ADMIN = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
ALICE = "ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5"
BOB = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
CAROL = "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0"


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def state() -> RegistryState:
    return RegistryState()


@pytest.fixture
def zones(state: RegistryState, clock: ManualClock) -> ZoneRegistry:
    """Zone registry seeded with the residential and commercial zones."""
    registry = ZoneRegistry(admin=ADMIN, state=state, clock=clock)
    registry.set_zone(ADMIN, "residential", 100, 5)
    registry.set_zone(ADMIN, "commercial", 200, 10)
    return registry


@pytest.fixture
def registry(zones: ZoneRegistry, clock: ManualClock) -> PropertyRegistry:
    return PropertyRegistry(zones=zones, clock=clock)
