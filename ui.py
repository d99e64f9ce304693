# -*- coding: utf-8 -*-
"""
This module contains the UI components for the Streamlit application.
"""
import datetime
from typing import List, Optional

import geopandas as gpd
import streamlit as st

from cases import format_date
from scales import format_number


def setup_page_config():
    """Sets the Streamlit page configuration."""
    st.set_page_config(
        page_title="U.S. County COVID-19 Cases",
        page_icon="🦠",
        layout="wide",
    )


def display_header_and_about():
    """Displays the main title and the 'About' expander."""
    st.title("U.S. County COVID-19 Cases")
    st.markdown(
        "Cumulative confirmed COVID-19 cases for every U.S. county. "
        "Bubble area is proportional to the number of cases."
    )
    with st.expander("About the Data"):
        st.markdown(
            """
            - **Cases:** cumulative county-level counts published by the
              [New York Times](https://github.com/nytimes/covid-19-data).
            - **Map:** the U.S. Atlas TopoJSON (counties and states, pre-projected to 960×600).
            - **Interaction:** drag or scroll to pan and zoom, click a state to zoom to it,
              click it again or click outside the states to zoom back out.
            """
        )


def display_sidebar(dates: List[datetime.date], default_date: datetime.date) -> datetime.date:
    """
    Renders the sidebar controls.

    Args:
        dates (list): Dates present in the case table, oldest first.
        default_date (datetime.date): The date shown when the page opens.

    Returns:
        datetime.date: The selected date.
    """
    with st.sidebar:
        st.header("Map Controls")
        if len(dates) < 2:
            return default_date
        return st.select_slider(
            "Show cases as of:",
            options=dates,
            value=default_date,
            format_func=format_date,
            key="date_slider",
        )


def display_current_date(selected_date: datetime.date):
    """Shows the date the bubbles are drawn for."""
    st.markdown(f"**Cases as of:** `{format_date(selected_date)}`")


def display_download_button(counties: gpd.GeoDataFrame, selected_date: datetime.date):
    """
    Renders the download button in the sidebar.

    Args:
        counties (gpd.GeoDataFrame): Counties joined with case counts.
        selected_date (datetime.date): The date the counts belong to.
    """
    table = counties[counties["covid_cases"] > 0][["id", "county", "state", "covid_cases"]]
    if not table.empty:
        st.sidebar.download_button(
            label="Download County Cases (CSV)",
            data=table.rename(columns={"id": "fips", "covid_cases": "cases"}).to_csv(index=False).encode("utf-8"),
            file_name=f"county_cases_{format_date(selected_date)}.csv",
            mime="text/csv",
            key="download_button",
        )


def display_region_summary(counties: gpd.GeoDataFrame, state_id: Optional[str]):
    """Shows case totals for the state the map is zoomed to."""
    if state_id is None:
        st.caption("Click a state to zoom in.")
        return

    in_state = counties[counties["id"].str[:2] == state_id]
    names = in_state.loc[in_state["state"] != "", "state"]
    state_name = names.iloc[0] if not names.empty else f"State {state_id}"

    st.subheader(state_name)
    col1, col2 = st.columns(2)
    with col1:
        st.metric(label="Total Cases", value=format_number(in_state["covid_cases"].sum()))
    with col2:
        st.metric(label="Counties Reporting", value=int((in_state["covid_cases"] > 0).sum()))
