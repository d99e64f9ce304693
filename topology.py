# topology.py
"""
Reading the U.S. Atlas TopoJSON into GeoDataFrames.

GDAL's TopoJSON driver exposes every object of the topology (``counties``,
``states``) as a layer, so geopandas does the arc decoding. Coordinates are
the atlas' pre-projected pixel units and carry no real CRS.
"""

from io import BytesIO
from typing import List

import geopandas as gpd
import shapely
from shapely.geometry import LineString, MultiLineString
from shapely.ops import linemerge


def read_layer(topology: str, layer: str) -> gpd.GeoDataFrame:
    """
    Reads one object of a TopoJSON document as a GeoDataFrame.

    Args:
        topology: The TopoJSON document text.
        layer: Name of the topology object, e.g. ``"states"``.

    Returns:
        One row per geometry with a string ``id`` column, the object's
        properties and a planar ``geometry`` column.
    """
    gdf = gpd.read_file(BytesIO(topology.encode("utf-8")), layer=layer)
    gdf["id"] = gdf["id"].astype(str)
    # The driver tags TopoJSON as WGS84; the atlas is already projected.
    return gpd.GeoDataFrame(
        gdf.drop(columns="geometry"),
        geometry=gdf.geometry.to_numpy(),
        crs=None,
    )


def interior_borders(regions: gpd.GeoDataFrame) -> MultiLineString:
    """
    Borders shared by two neighbouring regions, without the outer coastline.

    Each touching pair contributes the intersection of the two boundaries;
    point contacts are dropped and the pieces are merged into lines.
    """
    geoms = regions.geometry.to_numpy()
    left, right = regions.sindex.query(regions.geometry, predicate="touches")

    lines: List[LineString] = []
    for i, j in zip(left, right):
        if i >= j:
            continue
        shared = geoms[i].boundary.intersection(geoms[j].boundary)
        lines.extend(part for part in shapely.get_parts(shared) if isinstance(part, LineString))

    if not lines:
        return MultiLineString()
    merged = linemerge(lines)
    if isinstance(merged, LineString):
        return MultiLineString([merged])
    return merged
