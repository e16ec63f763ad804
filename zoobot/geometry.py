"""
Toroidal grid geometry

The grid spans [0, max_x] x [0, max_y] and wraps on both axes, so every
coordinate is taken modulo (max_x + 1, max_y + 1).
"""
from typing import Iterator, Tuple

Coord = Tuple[int, int]

# Fixed neighbour order; BFS and the escape planners break ties by it.
DIRECTION_DELTAS: Tuple[Tuple[str, int, int], ...] = (
    ("Up", 0, -1),
    ("Down", 0, 1),
    ("Left", -1, 0),
    ("Right", 1, 0),
)


def wrap(x: int, y: int, max_x: int, max_y: int) -> Coord:
    """Reduce a coordinate onto the torus"""
    return (x % (max_x + 1), y % (max_y + 1))


def manhattan_distance(a: Coord, b: Coord) -> int:
    """Plain Manhattan distance, no wraparound"""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def toroidal_distance(a: Coord, b: Coord, max_x: int, max_y: int) -> int:
    """Manhattan distance where each axis may go through the portal"""
    width = max_x + 1
    height = max_y + 1
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return min(dx, width - dx) + min(dy, height - dy)


def wrapped_delta(start: Coord, end: Coord, max_x: int, max_y: int) -> Coord:
    """
    Step delta from start to end, corrected for portal crossings.

    A raw delta larger than half an axis means the move went through the
    edge, so it is shifted by one axis length.
    """
    width = max_x + 1
    height = max_y + 1
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if dx > width // 2:
        dx -= width
    elif dx < -(width // 2):
        dx += width
    if dy > height // 2:
        dy -= height
    elif dy < -(height // 2):
        dy += height

    return (dx, dy)


def diamond(center: Coord, radius: int, max_x: int, max_y: int) -> Iterator[Coord]:
    """Yield every wrapped cell within Manhattan radius of center"""
    cx, cy = center
    for dx in range(-radius, radius + 1):
        span = radius - abs(dx)
        for dy in range(-span, span + 1):
            yield wrap(cx + dx, cy + dy, max_x, max_y)
