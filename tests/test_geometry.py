"""
Tests for toroidal geometry helpers
"""
import itertools

import pytest
from zoobot.geometry import (
    diamond,
    manhattan_distance,
    toroidal_distance,
    wrap,
    wrapped_delta,
)


def test_wrap_keeps_coordinates_on_grid():
    """Negative and overflowing coordinates come back into range"""
    assert wrap(-1, 0, 9, 9) == (9, 0)
    assert wrap(10, 10, 9, 9) == (0, 0)
    assert wrap(3, -12, 9, 4) == (3, 3)


def test_toroidal_distance_examples():
    """Direct path vs. through the portal, per axis"""
    assert toroidal_distance((0, 0), (4, 4), 4, 4) == 2
    assert toroidal_distance((0, 0), (2, 2), 4, 4) == 4
    assert toroidal_distance((1, 1), (8, 1), 9, 9) == 3
    assert toroidal_distance((3, 3), (3, 3), 9, 9) == 0


def test_toroidal_distance_properties():
    """Symmetric, bounded by plain Manhattan, per-axis min of direct / wrapped"""
    max_x, max_y = 6, 4
    cells = list(itertools.product(range(max_x + 1), range(max_y + 1)))

    for a, b in itertools.product(cells, repeat=2):
        dist = toroidal_distance(a, b, max_x, max_y)
        assert dist == toroidal_distance(b, a, max_x, max_y)
        assert dist <= manhattan_distance(a, b)

        dx = abs(a[0] - b[0])
        dy = abs(a[1] - b[1])
        assert dist == min(dx, max_x + 1 - dx) + min(dy, max_y + 1 - dy)


def test_wrapped_delta_through_portal():
    """Deltas larger than half an axis are flipped"""
    assert wrapped_delta((0, 0), (4, 0), 4, 4) == (-1, 0)
    assert wrapped_delta((4, 0), (0, 0), 4, 4) == (1, 0)
    assert wrapped_delta((0, 0), (0, 4), 4, 4) == (0, -1)
    assert wrapped_delta((2, 2), (3, 2), 4, 4) == (1, 0)


def test_diamond_covers_radius():
    """Every yielded cell is within the radius and all such cells appear"""
    cells = set(diamond((5, 5), 3, 19, 19))

    assert len(cells) == 25  # 2r^2 + 2r + 1
    for x in range(20):
        for y in range(20):
            inside = toroidal_distance((x, y), (5, 5), 19, 19) <= 3
            assert ((x, y) in cells) == inside


def test_diamond_wraps():
    """Diamond centered on the corner spills onto the opposite edges"""
    cells = set(diamond((0, 0), 1, 9, 9))
    assert cells == {(0, 0), (9, 0), (1, 0), (0, 9), (0, 1)}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
