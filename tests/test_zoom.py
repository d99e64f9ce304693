import math

import pytest

from zoom import (
    IDENTITY,
    ZoomTransform,
    constrain,
    transform_to_view,
    view_to_transform,
    zoom_to_bounds,
)


def test_transform_apply_and_invert():
    t = ZoomTransform(10, 20, 2)
    assert t.apply((5, 5)) == (20, 30)
    assert t.invert((20, 30)) == (5, 5)


def test_translate_then_scale_matches_zoom_identity_chain():
    t = IDENTITY.translate(48, 30).scale(1.8)
    assert t == ZoomTransform(48, 30, 1.8)
    # translating an already scaled transform moves by k units
    assert ZoomTransform(0, 0, 2).translate(3, 4) == ZoomTransform(6, 8, 2)


def test_zoom_to_bounds_centres_and_scales():
    t = zoom_to_bounds((0, 0, 480, 300), 960, 600)
    assert t.k == pytest.approx(1.8)
    assert t.x == pytest.approx(48)
    assert t.y == pytest.approx(30)
    # the box centre lands in the middle of the viewport
    assert t.apply((240, 150)) == pytest.approx((480, 300))


def test_zoom_to_bounds_clamps_to_scale_extent():
    small = zoom_to_bounds((0, 0, 10, 10), 960, 600)
    assert small == ZoomTransform(440, 260, 8)

    large = zoom_to_bounds((0, 0, 1920, 1200), 960, 600)
    assert large.k == 1


def test_zoom_to_bounds_degenerate_box_uses_max_scale():
    t = zoom_to_bounds((100, 100, 100, 100), 960, 600)
    assert t.k == 8
    assert t.apply((100, 100)) == pytest.approx((480, 300))


def test_constrain():
    assert constrain(ZoomTransform(1, 2, 20)) == ZoomTransform(1, 2, 8)
    assert constrain(ZoomTransform(1, 2, 0.5)) == ZoomTransform(1, 2, 1)
    assert constrain(ZoomTransform(1, 2, 3)) == ZoomTransform(1, 2, 3)


def test_identity_view_centres_the_viewport():
    center, zoom = transform_to_view(IDENTITY, 960, 600)
    assert center == (-300, 480)
    assert zoom == 0


def test_view_round_trip():
    t = ZoomTransform(-500, -200, 4)
    center, zoom = transform_to_view(t, 960, 600)
    assert zoom == pytest.approx(2)
    assert view_to_transform(center, zoom, 960, 600).isclose(t)


def test_isclose_tolerance():
    t = ZoomTransform(10, 10, 2)
    assert t.isclose(ZoomTransform(10.3, 9.8, 2.0001), tolerance=0.5)
    assert not t.isclose(ZoomTransform(12, 10, 2), tolerance=0.5)
    assert not t.isclose(ZoomTransform(10, 10, math.sqrt(5)), tolerance=0.5)
