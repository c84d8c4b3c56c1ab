"""Tests for the administrator-controlled zone registry."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from estate.core.types import ERR_OWNER_ONLY, RegistryError
from estate.zoning.registry import ZoneRegistry

from tests.conftest import ADMIN, ALICE


class TestSetZone:
    def test_admin_creates_zone(self, zones: ZoneRegistry) -> None:
        result = zones.set_zone(ADMIN, "industrial", 300, 7)
        assert result.ok
        assert result.value is True
        zone = zones.get_zone("industrial")
        assert zone is not None
        assert zone.max_improvements == 300
        assert zone.tax_rate == 7

    def test_non_admin_is_rejected(self, zones: ZoneRegistry) -> None:
        result = zones.set_zone(ALICE, "industrial", 300, 7)
        assert not result.ok
        assert result.error == RegistryError.UNAUTHORIZED
        assert result.admin_only
        assert result.code == ERR_OWNER_ONLY
        assert not zones.has_zone("industrial")

    def test_non_admin_cannot_overwrite(self, zones: ZoneRegistry) -> None:
        zones.set_zone(ALICE, "residential", 1, 1)
        assert zones.get_zone("residential").max_improvements == 100

    def test_redefinition_overwrites(self, zones: ZoneRegistry) -> None:
        result = zones.set_zone(ADMIN, "residential", 50, 2)
        assert result.ok
        zone = zones.get_zone("residential")
        assert zone.max_improvements == 50
        assert zone.tax_rate == 2
        assert len(zones.list_zones()) == 2

    def test_names_are_case_sensitive(self, zones: ZoneRegistry) -> None:
        zones.set_zone(ADMIN, "Residential", 10, 1)
        assert zones.get_zone("Residential").max_improvements == 10
        assert zones.get_zone("residential").max_improvements == 100

    @pytest.mark.parametrize("max_improvements,tax_rate", [(-1, 5), (100, -5)])
    def test_negative_limits_are_invalid(
        self, zones: ZoneRegistry, max_improvements: int, tax_rate: int
    ) -> None:
        result = zones.set_zone(ADMIN, "residential", max_improvements, tax_rate)
        assert result.error == RegistryError.INVALID_VALUE
        assert zones.get_zone("residential").max_improvements == 100

    def test_non_string_name_is_invalid(self, zones: ZoneRegistry) -> None:
        result = zones.set_zone(ADMIN, 42, 10, 1)
        assert result.error == RegistryError.INVALID_VALUE
        assert "name" in result.detail
        assert "non-negative" not in result.detail

    def test_negative_limit_detail_names_field(self, zones: ZoneRegistry) -> None:
        result = zones.set_zone(ADMIN, "residential", 100, -1)
        assert "tax_rate" in result.detail

    def test_zero_ceiling_allowed(self, zones: ZoneRegistry) -> None:
        assert zones.set_zone(ADMIN, "park", 0, 0).ok


class TestZoneQueries:
    def test_unknown_zone(self, zones: ZoneRegistry) -> None:
        assert zones.get_zone("nonexistent") is None
        assert not zones.has_zone("nonexistent")

    def test_returned_zone_is_a_copy(self, zones: ZoneRegistry) -> None:
        zone = zones.get_zone("residential")
        zone.max_improvements = 10_000
        assert zones.get_zone("residential").max_improvements == 100

    def test_list_zones(self, zones: ZoneRegistry) -> None:
        assert sorted(z.name for z in zones.list_zones()) == ["commercial", "residential"]

    def test_admin_property(self, zones: ZoneRegistry) -> None:
        assert zones.admin == ADMIN


# ---------------------------------------------------------------------------
# YAML seeding
# ---------------------------------------------------------------------------


class TestLoadZones:
    def test_load_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "zones.yml"
        path.write_text(yaml.dump({"zones": [
            {"name": "harbour", "max_improvements": 40, "tax_rate": 3},
            {"name": 7, "max_improvements": 1, "tax_rate": 0},
        ]}))
        registry = ZoneRegistry(admin=ADMIN)
        assert registry.load_zones(path) == ["harbour", "7"]
        assert registry.get_zone("harbour").max_improvements == 40
        assert registry.has_zone("7")

    def test_invalid_seed_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "zones.yml"
        path.write_text(yaml.dump({"zones": [
            {"name": "bad", "max_improvements": -1, "tax_rate": 0},
        ]}))
        with pytest.raises(ValueError, match="bad"):
            ZoneRegistry(admin=ADMIN).load_zones(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "zones.yml"
        path.write_text("")
        assert ZoneRegistry(admin=ADMIN).load_zones(path) == []

    def test_bundled_seed(self) -> None:
        path = Path(__file__).resolve().parents[1] / "config" / "zones.yml"
        registry = ZoneRegistry(admin=ADMIN)
        assert registry.load_zones(path) == ["residential", "commercial"]
        assert registry.get_zone("commercial").tax_rate == 10

    def test_missing_key_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "zones.yml"
        path.write_text(yaml.dump({"zones": [{"name": "harbour", "tax_rate": 3}]}))
        registry = ZoneRegistry(admin=ADMIN)
        with pytest.raises(KeyError, match="max_improvements"):
            registry.load_zones(path)
        assert not registry.has_zone("harbour")
