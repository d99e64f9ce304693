import json
import os
from concurrent.futures import ThreadPoolExecutor
from io import StringIO
from typing import Tuple

import geopandas as gpd
import pandas as pd
import requests
import streamlit as st
from shapely.geometry import MultiLineString

from config import (
    CASES_PATH,
    CASES_URL,
    COUNTIES_OBJECT,
    REQUEST_TIMEOUT_SECONDS,
    STATES_OBJECT,
    TOPOLOGY_PATH,
    TOPOLOGY_URL,
)
from schemas import CaseRecordSchema
from topology import interior_borders, read_layer


def resolve_source(path: str, url: str) -> str:
    """Prefers a local copy of a data file and falls back to its URL."""
    return path if os.path.exists(path) else url


def read_source(source: str) -> str:
    """
    Returns the text of a local file or an http(s) URL.
    Download and file errors propagate to the caller.
    """
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text
    with open(source, encoding="utf-8") as f:
        return f.read()


def load_topology(source: str) -> str:
    """
    Loads the TopoJSON document describing US counties and states.
    Raises ValueError when the document is not a topology.
    """
    print(f"[load_topology] {source}")
    text = read_source(source)
    if json.loads(text).get("type") != "Topology":
        raise ValueError(f"{source} is not a TopoJSON topology")
    return text


def load_case_records(source: str) -> pd.DataFrame:
    """
    Loads the county case-count table (date, fips, county, state, cases).
    FIPS codes are kept as strings so leading zeros survive the join.
    """
    print(f"[load_case_records] {source}")
    df = pd.read_csv(StringIO(read_source(source)), dtype={"fips": str})
    return CaseRecordSchema.validate(df)


def load_map_inputs(topology_source: str, cases_source: str) -> Tuple[str, pd.DataFrame]:
    """
    Loads the topology and the case table in parallel.

    Returns only once both loads have succeeded. If either fails its
    exception is raised here and no partial result is returned.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        topology_future = executor.submit(load_topology, topology_source)
        cases_future = executor.submit(load_case_records, cases_source)
        topology = topology_future.result()
        cases = cases_future.result()

    print("[ready] data ready")
    return topology, cases


@st.cache_data(show_spinner="Loading map and case data...")
def get_map_inputs(
    topology_source: str = "", cases_source: str = ""
) -> Tuple[str, pd.DataFrame]:
    """
    Cached entry point for the app. Empty sources resolve to the local
    data files when present, otherwise to the published URLs.
    """
    topology_source = topology_source or resolve_source(TOPOLOGY_PATH, TOPOLOGY_URL)
    cases_source = cases_source or resolve_source(CASES_PATH, CASES_URL)
    return load_map_inputs(topology_source, cases_source)


@st.cache_data(show_spinner="Decoding map geometry...")
def get_geometries(_topology: str) -> Tuple[gpd.GeoDataFrame, gpd.GeoDataFrame, MultiLineString]:
    """
    Reads county polygons, state polygons and interior state borders.
    The topology is loaded once per app, so it is left out of the cache key.
    """
    counties = read_layer(_topology, COUNTIES_OBJECT)
    states = read_layer(_topology, STATES_OBJECT)
    borders = interior_borders(states)
    return counties, states, borders
