# interaction.py
"""Click-to-zoom, reset and free-zoom handling for the map."""

from dataclasses import dataclass
from typing import Optional, Tuple

from config import MAP_HEIGHT, MAP_WIDTH, SCALE_EXTENT, TRANSITION_MS, ZOOM_PADDING
from zoom import IDENTITY, Bounds, ZoomTransform, constrain, zoom_to_bounds


@dataclass(frozen=True)
class Transition:
    """An animated move of the viewport from ``start`` to ``end``."""
    start: ZoomTransform
    end: ZoomTransform
    duration_ms: int = TRANSITION_MS


class MapInteraction:
    """
    Tracks the active region and viewport transform across user events.

    At most one region is active at a time. Clicking a region zooms to it,
    clicking it again (or clicking the background) zooms back out. A click
    that ends a pointer drag is treated as part of the drag and ignored.
    """

    def __init__(
        self,
        width: float = MAP_WIDTH,
        height: float = MAP_HEIGHT,
        scale_extent: Tuple[float, float] = SCALE_EXTENT,
        padding: float = ZOOM_PADDING,
        duration_ms: int = TRANSITION_MS,
    ):
        self.width = width
        self.height = height
        self.scale_extent = scale_extent
        self.padding = padding
        self.duration_ms = duration_ms
        self.active: Optional[str] = None
        self.transform: ZoomTransform = IDENTITY
        self._drag_pending = False

    def pointer_dragged(self) -> None:
        """Marks the upcoming click as the tail of a drag gesture."""
        self._drag_pending = True

    def click(self, region_id: Optional[str] = None, bounds: Optional[Bounds] = None) -> Optional[Transition]:
        """
        Entry point for every click on the map.

        Args:
            region_id: Id of the clicked region, or None for the background.
            bounds: ``(minx, miny, maxx, maxy)`` of the clicked region.

        Returns:
            The transition to animate, or None when the click was suppressed.
        """
        if self._drag_pending:
            self._drag_pending = False
            return None
        if region_id is None:
            return self.reset()
        return self.clicked(region_id, bounds)

    def clicked(self, region_id: str, bounds: Bounds) -> Transition:
        print(f"[clicked] {region_id}")
        if self.active == region_id:
            return self.reset()
        self.active = region_id
        target = zoom_to_bounds(bounds, self.width, self.height, self.scale_extent, self.padding)
        return self._move_to(target)

    def reset(self) -> Transition:
        self.active = None
        return self._move_to(IDENTITY)

    def zoomed(self, transform: ZoomTransform) -> None:
        """Records a free pan/zoom, clamped to the scale extent."""
        self.transform = constrain(transform, self.scale_extent)

    def _move_to(self, target: ZoomTransform) -> Transition:
        transition = Transition(self.transform, target, self.duration_ms)
        self.transform = target
        return transition
