# zoom.py
"""
Zoom transforms for the map viewport.

A transform maps a point in topology units to the screen as
``(x * k + tx, y * k + ty)``. The same transform can be expressed as a
Leaflet ``CRS.Simple`` view, where one unit is ``2 ** zoom`` pixels and
latitude grows upwards (the negated y coordinate).
"""

import math
from dataclasses import dataclass
from typing import Tuple

from config import SCALE_EXTENT, ZOOM_PADDING

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ZoomTransform:
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def apply(self, point: Point) -> Point:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def invert(self, point: Point) -> Point:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def translate(self, x: float, y: float) -> "ZoomTransform":
        return ZoomTransform(self.x + self.k * x, self.y + self.k * y, self.k)

    def scale(self, k: float) -> "ZoomTransform":
        return ZoomTransform(self.x, self.y, self.k * k)

    def isclose(self, other: "ZoomTransform", tolerance: float = 1e-6) -> bool:
        """Translations within ``tolerance`` pixels and scales within 0.1%."""
        return (
            math.isclose(self.x, other.x, abs_tol=tolerance)
            and math.isclose(self.y, other.y, abs_tol=tolerance)
            and math.isclose(self.k, other.k, rel_tol=1e-3)
        )


IDENTITY = ZoomTransform()


def zoom_to_bounds(
    bounds: Bounds,
    width: float,
    height: float,
    scale_extent: Tuple[float, float] = SCALE_EXTENT,
    padding: float = ZOOM_PADDING,
) -> ZoomTransform:
    """
    Transform that centres a bounding box in the viewport and scales it to fit.

    ``bounds`` is ``(minx, miny, maxx, maxy)`` as returned by shapely. The box
    fills ``padding`` of the limiting viewport dimension, and the scale is
    clamped to ``scale_extent``. A zero-size box zooms to the maximum scale.
    """
    x0, y0, x1, y1 = bounds
    dx, dy = x1 - x0, y1 - y0
    x, y = (x0 + x1) / 2, (y0 + y1) / 2
    extent = max(dx / width, dy / height)
    fit = padding / extent if extent > 0 else math.inf
    scale = max(scale_extent[0], min(scale_extent[1], fit))
    return IDENTITY.translate(width / 2 - scale * x, height / 2 - scale * y).scale(scale)


def constrain(transform: ZoomTransform, scale_extent: Tuple[float, float] = SCALE_EXTENT) -> ZoomTransform:
    """Clamps the scale of a free zoom, keeping the transform's translation."""
    k = max(scale_extent[0], min(scale_extent[1], transform.k))
    return ZoomTransform(transform.x, transform.y, k)


def transform_to_view(transform: ZoomTransform, width: float, height: float) -> Tuple[Point, float]:
    """Returns the Leaflet ``((lat, lng), zoom)`` showing the same area as ``transform``."""
    cx, cy = transform.invert((width / 2, height / 2))
    return (-cy, cx), math.log2(transform.k)


def view_to_transform(center: Point, zoom: float, width: float, height: float) -> ZoomTransform:
    """Inverse of :func:`transform_to_view`."""
    k = 2 ** zoom
    lat, lng = center
    cx, cy = lng, -lat
    return ZoomTransform(width / 2 - k * cx, height / 2 - k * cy, k)
