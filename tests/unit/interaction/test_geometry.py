"""
Unit Tests for Interaction Geometry.
"""

import pytest

from toodooist.interaction.geometry import Point, TrashZone, Viewport


class TestPoint:
    """Tests for point arithmetic."""

    def test_minus(self):
        assert Point(130, 160).minus(Point(100, 100)) == Point(30, 60)


class TestTrashZone:
    """Tests for the bottom-left trash hit test."""

    @pytest.fixture
    def zone(self):
        return TrashZone(120, 120)

    @pytest.fixture
    def viewport(self):
        return Viewport(1280, 800)

    def test_pointer_in_corner_is_inside(self, zone, viewport):
        assert zone.contains(Point(50, 750), viewport)

    @pytest.mark.parametrize("point", [
        Point(0, 680), Point(120, 680), Point(0, 800), Point(120, 800),
    ])
    def test_edges_are_inclusive(self, zone, viewport, point):
        assert zone.contains(point, viewport)

    @pytest.mark.parametrize("point", [
        Point(121, 750), Point(50, 679), Point(-1, 750), Point(50, 801), Point(600, 400),
    ])
    def test_outside_points(self, zone, viewport, point):
        assert not zone.contains(point, viewport)

    def test_zone_follows_viewport_height(self, zone):
        assert not zone.contains(Point(50, 750), Viewport(1280, 1000))
        assert zone.contains(Point(50, 950), Viewport(1280, 1000))
