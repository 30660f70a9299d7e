"""
Tests for the zone parameter model and override handling.
"""

import threading

import pytest

from text2world.procgen import OVERRIDE_SPEC, OverrideResolver, ParameterSpec, ZoneOverrides, ZoneParameters


class TestParameterSpec:

    @pytest.fixture
    def spec(self):
        return ParameterSpec({"height": (0.0, 10.0, 2.0), "width": (0.0, 1.0, 0.1)})

    def test_extract_clamps_and_defaults(self, spec):
        assert spec.extract_params({"height": 25.0}) == {"height": 10.0, "width": 0.1}
        assert spec.extract_params({}) == {"height": 2.0, "width": 0.1}

    def test_validate(self, spec):
        assert spec.validate({"height": 3.0, "width": 0.5})
        assert not spec.validate({"height": 3.0})
        assert not spec.validate({"height": -1.0, "width": 0.5})

    def test_coerce_rejects_non_numbers(self, spec):
        assert spec.coerce("height", "4.5") == 4.5
        assert spec.coerce("height", "abc") is None
        assert spec.coerce("height", None) is None
        assert spec.coerce("height", float("nan")) is None
        assert spec.coerce("height", float("inf")) is None
        assert spec.coerce("height", True) is None
        assert spec.coerce("height", 99) == 10.0

    def test_ranges(self, spec):
        assert spec.get_param_ranges() == {"height": (0.0, 10.0), "width": (0.0, 1.0)}
        assert spec.get_param_names() == ["height", "width"]


def test_override_defaults_match_ranges():
    assert ZoneOverrides().to_dict() == OVERRIDE_SPEC.defaults()


def test_override_from_mapping_clamps():
    overrides = ZoneOverrides.from_mapping({"mountain_height": 1000.0, "lake_depth": 5.0})
    assert overrides.mountain_height == 32.0
    assert overrides.lake_depth == 0.0


class TestOverrideResolver:

    def test_malformed_value_keeps_previous(self):
        resolver = OverrideResolver()
        assert resolver.update({"mountain_height": "12"}).mountain_height == 12.0
        assert resolver.update({"mountain_height": "not a number"}).mountain_height == 12.0
        assert resolver.update({"mountain_height": float("nan")}).mountain_height == 12.0
        assert resolver.update({"mountain_height": None}).mountain_height == 12.0

    def test_fields_update_independently(self):
        resolver = OverrideResolver()
        result = resolver.update({"river_width": "0.2", "lake_radius": "oops"})
        assert result.river_width == 0.2
        assert result.lake_radius == 0.25

    def test_unknown_keys_and_empty_input(self):
        resolver = OverrideResolver()
        before = resolver.current
        assert resolver.update({"sea_level": 3}) == before
        assert resolver.update(None) == before
        assert resolver.update({}) == before

    def test_out_of_range_is_clamped(self):
        resolver = OverrideResolver()
        assert resolver.update({"noise_scale": -5}).noise_scale == 0.5


class TestZoneParameters:

    def test_band_scale(self):
        zones = ZoneParameters(north=8.0)
        assert zones.band_scale("north") == 8.0
        assert zones.band_scale("center") == 2.0
        with pytest.raises(ValueError):
            zones.band_scale("east")

    def test_with_band_returns_new_value(self):
        zones = ZoneParameters()
        updated = zones.with_band("south", 0.5)
        assert zones.south == 2.0
        assert updated.south == 0.5

    def test_immutable(self):
        zones = ZoneParameters()
        with pytest.raises(Exception):
            zones.north = 5.0


def test_concurrent_updates_keep_every_field():
    resolver = OverrideResolver()
    updates = [
        {"mountain_height": 12},
        {"plain_height": 1.5},
        {"noise_scale": 6},
        {"river_width": 0.2},
        {"lake_radius": 0.3},
        {"lake_depth": -4},
    ]
    threads = [threading.Thread(target=resolver.update, args=(raw,)) for raw in updates]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert resolver.current == ZoneOverrides(
        mountain_height=12.0, plain_height=1.5, noise_scale=6.0,
        river_width=0.2, lake_radius=0.3, lake_depth=-4.0,
    )
