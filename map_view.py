import json
import math
from typing import Any, Dict, Optional, Tuple

import folium
import geopandas as gpd
from branca.element import MacroElement
from folium.features import GeoJson, GeoJsonTooltip
from jinja2 import Template
from shapely.geometry import MultiLineString, Point

from cases import county_title
from config import (
    ACTIVE_FILL,
    BUBBLE_STYLE,
    FEATURE_STYLE,
    LEGEND_OFFSET,
    LEGEND_SAMPLE_SIZES,
    LEGEND_STROKE,
    LEGEND_TEXT_COLOR,
    MESH_STYLE,
)
from interaction import MapInteraction, Transition
from scales import SqrtScale, format_si, radius_scale
from zoom import Bounds, transform_to_view


class ZoomTransition(MacroElement):
    """Flies the parent map to a view once it has loaded."""

    _template = Template(
        """
        {% macro script(this, kwargs) %}
            {{ this._parent.get_name() }}.whenReady(function() {
                {{ this._parent.get_name() }}.flyTo(
                    {{ this.center|tojson }}, {{ this.zoom }}, {duration: {{ this.duration }}}
                );
            });
        {% endmacro %}
        """
    )

    def __init__(self, center: Tuple[float, float], zoom: float, duration_ms: int):
        super().__init__()
        self._name = "ZoomTransition"
        self.center = list(center)
        self.zoom = zoom
        self.duration = duration_ms / 1000


# --- Helper Functions ---

def to_leaflet(gdf: gpd.GeoDataFrame) -> Dict[str, Any]:
    """
    Serializes a frame in topology units to GeoJSON for a CRS.Simple map.
    Topology y grows downwards while latitude grows upwards, so y is negated.
    """
    flipped = gdf.copy()
    flipped["geometry"] = flipped.geometry.scale(xfact=1, yfact=-1, origin=(0, 0))
    return json.loads(flipped.to_json())


def state_style(feature: Dict[str, Any], active: Optional[str]) -> Dict[str, Any]:
    """Grey state fill, highlighted when the state is the active region."""
    style = dict(FEATURE_STYLE)
    if active is not None and feature["properties"].get("id") == active:
        style["fillColor"] = ACTIVE_FILL
    return style


def bubble_style(feature: Dict[str, Any]) -> Dict[str, Any]:
    return {**BUBBLE_STYLE, "radius": feature["properties"]["radius"]}


def region_at(states: gpd.GeoDataFrame, lat: float, lng: float) -> Optional[Tuple[str, Bounds]]:
    """Returns the id and bounds of the state under a map click, or None for the background."""
    hits = states[states.contains(Point(lng, -lat))]
    if hits.empty:
        return None
    row = hits.iloc[0]
    return row["id"], tuple(row.geometry.bounds)


def add_legend(m: folium.Map, scale: SqrtScale, width: float, height: float) -> None:
    """Sample bubbles sharing a baseline in the lower-right corner, labelled with their case count."""
    x, baseline = width - LEGEND_OFFSET[0], height - LEGEND_OFFSET[1]
    for size in LEGEND_SAMPLE_SIZES:
        r = scale(size)
        folium.Circle(
            location=[-(baseline - r), x],
            radius=r,
            color=LEGEND_STROKE,
            weight=1,
            fill=False,
            interactive=False,
        ).add_to(m)
        folium.Marker(
            location=[-(baseline - 2 * r), x],
            icon=folium.DivIcon(
                html=(
                    f'<div style="color: {LEGEND_TEXT_COLOR}; font: 10px sans-serif; '
                    f'text-align: center;">{format_si(size)}</div>'
                ),
                icon_size=(40, 12),
                icon_anchor=(20, 0),
            ),
            interactive=False,
        ).add_to(m)


# --- Main Map Creation Function ---

def build_map(
    counties: gpd.GeoDataFrame,
    states: gpd.GeoDataFrame,
    borders: MultiLineString,
    interaction: MapInteraction,
    transition: Optional[Transition] = None,
) -> folium.Map:
    """
    Creates the bubble map in topology units.

    Args:
        counties: County polygons joined with ``covid_cases``, ``county`` and ``state``.
        states: State polygons with an ``id`` column.
        borders: Interior state borders.
        interaction: Current active region and viewport.
        transition: When given, the map opens at its start view and flies to its end view.

    Returns:
        A folium Map ready to hand to ``st_folium``.
    """
    width, height = interaction.width, interaction.height
    start = transition.start if transition else interaction.transform
    center, zoom = transform_to_view(start, width, height)

    m = folium.Map(
        location=list(center),
        zoom_start=zoom,
        crs="Simple",
        tiles=None,
        width=width,
        height=height,
        zoom_snap=0,
        zoom_delta=0.5,
    )
    # folium hands min_zoom/max_zoom to the tile layer only, and there is none
    m.options.update(
        min_zoom=math.log2(interaction.scale_extent[0]),
        max_zoom=math.log2(interaction.scale_extent[1]),
    )

    print("[renderStates]")
    active = interaction.active
    GeoJson(
        to_leaflet(states[["id", "geometry"]]),
        name="states",
        style_function=lambda feature: state_style(feature, active),
    ).add_to(m)

    if not borders.is_empty:
        GeoJson(
            to_leaflet(gpd.GeoDataFrame(geometry=[borders])),
            name="borders",
            style_function=lambda feature: dict(MESH_STYLE),
        ).add_to(m)

    print("[renderBubbles]")
    scale = radius_scale()
    bubbles = counties[counties["covid_cases"] > 0].copy()
    if not bubbles.empty:
        bubbles["geometry"] = bubbles.geometry.centroid
        bubbles["radius"] = scale(bubbles["covid_cases"].to_numpy())
        bubbles["title"] = [county_title(row).replace("\n", "<br>") for _, row in bubbles.iterrows()]
        GeoJson(
            to_leaflet(bubbles[["id", "covid_cases", "radius", "title", "geometry"]]),
            name="bubbles",
            marker=folium.Circle(),
            style_function=bubble_style,
            tooltip=GeoJsonTooltip(fields=["title"], labels=False, sticky=False),
        ).add_to(m)

    print("[renderLegend]")
    add_legend(m, scale, width, height)

    if transition is not None:
        end_center, end_zoom = transform_to_view(transition.end, width, height)
        ZoomTransition(end_center, end_zoom, transition.duration_ms).add_to(m)

    return m
