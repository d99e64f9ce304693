# config.py

"""
Central configuration file for the U.S. County COVID-19 bubble map.
This file stores constants and settings to make the application more maintainable.
"""

from typing import Dict, Final, List, Tuple

# Remote data sources: the pre-projected US atlas and the NYT county time series
TOPOLOGY_URL: Final[str] = "https://d3js.org/us-10m.v1.json"
CASES_URL: Final[str] = (
    "https://raw.githubusercontent.com/nytimes/covid-19-data/master/us-counties.csv"
)

# File paths for local copies (written by fetch_data.py)
TOPOLOGY_PATH: Final[str] = "us-10m.v1.json"
CASES_PATH: Final[str] = "covid-19-data/us-counties.csv"

# Object names inside the topology document
COUNTIES_OBJECT: Final[str] = "counties"
STATES_OBJECT: Final[str] = "states"

# Map viewport in topology units (the atlas is projected to 960x600)
MAP_WIDTH: Final[int] = 960
MAP_HEIGHT: Final[int] = 600

# Bubble radius: square-root scale so bubble area tracks case count
RADIUS_DOMAIN: Final[Tuple[float, float]] = (0, 1000)
RADIUS_RANGE: Final[Tuple[float, float]] = (0, 8)

# Zoom behaviour
SCALE_EXTENT: Final[Tuple[float, float]] = (1, 8)
ZOOM_PADDING: Final[float] = 0.9
TRANSITION_MS: Final[int] = 750
BORDER_WIDTH: Final[float] = 1.5

# Legend: sample case counts drawn through the radius scale
LEGEND_SAMPLE_SIZES: Final[List[int]] = [100, 1000, 10000]
LEGEND_OFFSET: Final[Tuple[int, int]] = (50, 20)

# Layer styles
FEATURE_STYLE: Final[Dict[str, object]] = {
    "fillColor": "#cccccc",
    "color": "#cccccc",
    "weight": 0,
    "fillOpacity": 1,
}
ACTIVE_FILL: Final[str] = "orange"
MESH_STYLE: Final[Dict[str, object]] = {
    "color": "#ffffff",
    "weight": BORDER_WIDTH,
    "fill": False,
    "lineJoin": "round",
}
BUBBLE_STYLE: Final[Dict[str, object]] = {
    "fillColor": "brown",
    "fillOpacity": 0.5,
    "color": "#ffffff",
    "weight": 0.5,
}
LEGEND_STROKE: Final[str] = "#cccccc"
LEGEND_TEXT_COLOR: Final[str] = "#777777"

# Networking
REQUEST_TIMEOUT_SECONDS: Final[int] = 60
DOWNLOAD_ATTEMPTS: Final[int] = 3
RETRY_DELAY_SECONDS: Final[int] = 30
