import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box


@pytest.fixture
def sample_topology():
    """
    Two 10x10 states side by side, sharing the border x=10.
    Arc 0 is the shared border, arcs 1 and 2 the outer edges. Arcs are
    delta-encoded under an identity quantization transform.
    """
    return {
        "type": "Topology",
        "transform": {"scale": [1, 1], "translate": [0, 0]},
        "arcs": [
            [[10, 0], [0, 10]],
            [[10, 10], [-10, 0], [0, -10], [10, 0]],
            [[10, 0], [10, 0], [0, 10], [-10, 0]],
        ],
        "objects": {
            "states": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "id": "01", "arcs": [[0, 1]], "properties": {"name": "Alpha"}},
                    {"type": "Polygon", "id": "02", "arcs": [[-1, 2]], "properties": {"name": "Beta"}},
                ],
            },
            "counties": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "id": "01001", "arcs": [[0, 1]]},
                    {"type": "Polygon", "id": "02013", "arcs": [[-1, 2]]},
                ],
            },
        },
    }


@pytest.fixture
def sample_counties():
    return gpd.GeoDataFrame(
        {
            "id": ["01001", "01003", "02013"],
            "geometry": [box(0, 0, 5, 10), box(5, 0, 10, 10), box(10, 0, 20, 10)],
        },
        geometry="geometry",
    )


@pytest.fixture
def sample_states():
    return gpd.GeoDataFrame(
        {"id": ["01", "02"], "geometry": [box(0, 0, 10, 10), box(10, 0, 20, 10)]},
        geometry="geometry",
    )


@pytest.fixture
def sample_cases():
    return pd.DataFrame(
        {
            "date": pd.to_datetime(["2020-04-04", "2020-04-04", "2020-04-05", "2020-04-05", "2020-04-05"]),
            "fips": ["01001", "02013", "01001", "02013", None],
            "county": ["Autauga", "Bethel", "Autauga", "Bethel", "Unknown"],
            "state": ["Alabama", "Alaska", "Alabama", "Alaska", "Alabama"],
            "cases": [3, 1, 12, 2500, 7],
        }
    )
