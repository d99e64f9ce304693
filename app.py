# -*- coding: utf-8 -*-
from typing import Any, Dict, Optional

import geopandas as gpd
import streamlit as st
from streamlit_folium import st_folium

# --- Custom Modules ---
from cases import active_date, available_dates, join_cases
from config import MAP_HEIGHT, MAP_WIDTH
from data_loader import get_geometries, get_map_inputs
from interaction import MapInteraction, Transition
from map_view import build_map, region_at
from ui import (
    display_current_date,
    display_download_button,
    display_header_and_about,
    display_region_summary,
    display_sidebar,
    setup_page_config,
)
from zoom import view_to_transform

MAP_KEY = "covid_map"
# Pan distance, in screen pixels, below which a reported view counts as unchanged
VIEW_TOLERANCE = 0.5


def get_interaction() -> MapInteraction:
    """Returns the session's interaction state, creating it on first run."""
    if "interaction" not in st.session_state:
        st.session_state["interaction"] = MapInteraction(MAP_WIDTH, MAP_HEIGHT)
        st.session_state["transition"] = None
        st.session_state["last_click"] = None
        st.session_state["rendered_date"] = None
    return st.session_state["interaction"]


def apply_map_events(
    interaction: MapInteraction,
    map_output: Optional[Dict[str, Any]],
    last_click: Optional[Dict[str, float]],
    states: gpd.GeoDataFrame,
) -> Optional[Transition]:
    """
    Replays the latest st_folium payload onto the interaction state.

    A view that moved without a new click is a free pan/zoom. A view that
    moved together with a new click means the click ended a drag, so it is
    suppressed. Any other new click zooms to the state under it, or resets
    when it landed on the background.
    """
    if not map_output:
        return None

    click = map_output.get("last_clicked")
    new_click = click is not None and click != last_click

    view_changed = False
    center, zoom = map_output.get("center"), map_output.get("zoom")
    if center is not None and zoom is not None:
        reported = view_to_transform((center["lat"], center["lng"]), zoom, interaction.width, interaction.height)
        view_changed = not reported.isclose(interaction.transform, VIEW_TOLERANCE)
        if view_changed:
            interaction.zoomed(reported)

    if not new_click:
        return None
    if view_changed:
        interaction.pointer_dragged()

    region = region_at(states, click["lat"], click["lng"])
    if region is None:
        return interaction.click()
    return interaction.click(*region)


def main() -> None:
    """Main function to run the Streamlit application."""
    setup_page_config()
    display_header_and_about()

    topology, cases = get_map_inputs()
    counties, states, borders = get_geometries(topology)

    end_date = active_date(cases)
    selected_date = display_sidebar(available_dates(cases), end_date)
    display_current_date(selected_date)
    joined = join_cases(counties, cases, selected_date)

    interaction = get_interaction()
    map_output = st.session_state.get(MAP_KEY)
    transition = apply_map_events(interaction, map_output, st.session_state["last_click"], states)
    if map_output:
        st.session_state["last_click"] = map_output.get("last_clicked")
    if transition is not None:
        st.session_state["transition"] = transition
    elif st.session_state["rendered_date"] not in (None, selected_date):
        # a new date redraws the bubbles in place instead of replaying the last zoom
        st.session_state["transition"] = None
    st.session_state["rendered_date"] = selected_date

    m = build_map(joined, states, borders, interaction, st.session_state["transition"])
    st_folium(
        m,
        key=MAP_KEY,
        width=MAP_WIDTH,
        height=MAP_HEIGHT,
        returned_objects=["last_clicked", "center", "zoom"],
    )

    display_region_summary(joined, interaction.active)
    display_download_button(joined, selected_date)
    st.markdown("---")
    st.markdown("Data Source: [The New York Times](https://github.com/nytimes/covid-19-data)")


if __name__ == "__main__":
    main()
