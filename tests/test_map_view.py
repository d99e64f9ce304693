import datetime

import folium
import pytest

from cases import join_cases
from interaction import MapInteraction
from map_view import ZoomTransition, build_map, region_at, state_style, to_leaflet
from topology import interior_borders
from zoom import ZoomTransform


@pytest.fixture
def joined(sample_counties, sample_cases):
    return join_cases(sample_counties, sample_cases, datetime.date(2020, 4, 5))


def test_to_leaflet_flips_y(sample_states):
    geojson = to_leaflet(sample_states)
    ring = geojson["features"][0]["geometry"]["coordinates"][0]
    ys = {point[1] for point in ring}
    assert ys == {0, -10}
    assert geojson["features"][0]["properties"]["id"] == "01"


def test_region_at_finds_state_under_click(sample_states):
    # latitude is the negated topology y
    assert region_at(sample_states, -5, 15) == ("02", (10.0, 0.0, 20.0, 10.0))


def test_region_at_background(sample_states):
    assert region_at(sample_states, -50, 15) is None


def test_state_style_highlights_active():
    feature = {"properties": {"id": "01"}}
    assert state_style(feature, "01")["fillColor"] == "orange"
    assert state_style(feature, "02")["fillColor"] == "#cccccc"
    assert state_style(feature, None)["fillColor"] == "#cccccc"


def test_build_map_renders_layers(joined, sample_states):
    interaction = MapInteraction(960, 600)
    m = build_map(joined, sample_states, interior_borders(sample_states), interaction)

    assert isinstance(m, folium.Map)
    html = m.get_root().render()
    assert "L.CRS.Simple" in html
    assert "Autauga, Alabama" in html
    assert "Cases: 2,500" in html
    assert "10k" in html
    assert "flyTo" not in html


def test_build_map_sets_fractional_zoom_options_on_construction(joined, sample_states):
    """A fractional start zoom is only kept when zoomSnap is part of the L.map options."""
    interaction = MapInteraction(960, 600)
    interaction.zoomed(ZoomTransform(-700, -400, 2.5))

    html = build_map(joined, sample_states, interior_borders(sample_states), interaction).get_root().render()
    i_map = html.index("L.map(")
    options = html[i_map:html.index(");", i_map)]

    assert "\"zoomSnap\": 0" in options
    assert "\"zoomDelta\": 0.5" in options
    assert "\"minZoom\": 0.0" in options
    assert "\"maxZoom\": 3.0" in options
    assert "\"zoom\": 1.32" in options


def test_build_map_skips_counties_without_cases(joined, sample_states):
    m = build_map(joined, sample_states, interior_borders(sample_states), MapInteraction(960, 600))
    html = m.get_root().render()
    assert "01003" not in html
    assert "02013" in html


def test_build_map_with_transition_flies_to_target(joined, sample_states):
    interaction = MapInteraction(960, 600)
    transition = interaction.click("01", (0, 0, 480, 300))

    m = build_map(joined, sample_states, interior_borders(sample_states), interaction, transition)

    transitions = [child for child in m._children.values() if isinstance(child, ZoomTransition)]
    assert len(transitions) == 1
    assert transitions[0].duration == pytest.approx(0.75)
    assert transitions[0].center == pytest.approx([-150, 240])
    assert "flyTo" in m.get_root().render()
    # the map opens where the transition starts
    assert m.location == pytest.approx([-300, 480])
