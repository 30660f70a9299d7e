"""
Tests for prompt parsing into zone parameters.
"""

import pytest

from text2world.inference.text2param import PromptParser
from text2world.procgen import ZoneOverrides, ZoneParameters, tokenize


@pytest.fixture
def parser():
    return PromptParser()


def test_tokenize_lowercases_and_strips_punctuation():
    assert tokenize("  Mountain, NORTH!  river.  ") == ["mountain", "north", "river"]
    assert tokenize("") == []
    assert tokenize("-- ...") == []


def test_empty_prompt_gives_defaults(parser):
    zones = parser.parse("")
    assert zones == ZoneParameters()
    assert zones.north == zones.center == zones.south == 2.0
    assert zones.river is None
    assert zones.lake is None


def test_unknown_tokens_are_ignored(parser):
    assert parser.parse("banana spaceship quantum") == ZoneParameters()


def test_mountain_north_scales_only_north_band(parser):
    zones = parser.parse("mountain north")
    assert zones.north == 8.0
    assert zones.center == 2.0
    assert zones.south == 2.0


def test_direction_before_height_keyword(parser):
    zones = parser.parse("southern mountains")
    assert zones.south == 8.0
    assert zones.north == 2.0
    assert zones.center == 2.0


def test_height_without_direction_applies_to_center(parser):
    zones = parser.parse("plains")
    assert zones.center == 0.5
    assert zones.north == 2.0
    assert zones.south == 2.0


def test_direction_without_height_does_nothing(parser):
    assert parser.parse("north south") == ZoneParameters()


def test_two_paired_regions(parser):
    zones = parser.parse("mountain north plain south")
    assert zones.north == 8.0
    assert zones.south == 0.5
    assert zones.center == 2.0


def test_scalar_fields_last_match_wins(parser):
    zones = parser.parse("mountain plain")
    assert zones.center == 0.5

    zones = parser.parse("north plain north mountain")
    assert zones.north == 8.0


def test_hills_sit_between_mountain_and_plain(parser):
    zones = parser.parse("hills")
    assert zones.center == pytest.approx((8.0 + 0.5) / 2.0)


def test_river_flag_is_or_combined(parser):
    zones = parser.parse("river and somethingelse river")
    assert zones.river is not None

    zones = parser.parse("river mountain desert")
    assert zones.river is not None


def test_lake_flag(parser):
    zones = parser.parse("a quiet Lake.")
    assert zones.lake is not None
    assert zones.lake.radius == 0.25
    assert zones.lake.depth == -1.5
    assert zones.river is None


def test_case_insensitive(parser):
    assert parser.parse("MOUNTAIN North") == parser.parse("mountain north")


def test_roughness_keywords_scale_noise(parser):
    assert parser.parse("rugged").noise_scale == 8.0
    assert parser.parse("gentle").noise_scale == 2.0
    assert parser.parse("rugged gentle").noise_scale == 2.0


def test_overrides_supply_magnitudes(parser):
    overrides = ZoneOverrides(mountain_height=12.0, river_width=0.2, noise_scale=6.0)
    zones = parser.parse("mountain river", overrides)
    assert zones.center == 12.0
    assert zones.river.width == 0.2
    assert zones.noise_scale == 6.0


def test_overrides_do_not_add_water_features(parser):
    zones = parser.parse("mountain", ZoneOverrides(river_width=0.3, lake_radius=0.4))
    assert zones.river is None
    assert zones.lake is None


def test_explain_reports_roles_in_order(parser):
    matches = parser.explain("Mountain north with a river near the village")
    assert [m["token"] for m in matches] == ["mountain", "north", "river"]
    assert [m["role"] for m in matches] == ["height", "direction", "river"]
