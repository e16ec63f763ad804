"""
World model: per-tick grid view over a snapshot

Tracks:
- Grid bounds (max x / max y over all cells)
- Cell content lookup by coordinate
- Walls (missing cells are treated as walls)
- Zookeeper distances on the torus
"""
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from zoobot.config import NO_ZOOKEEPER_DISTANCE
from zoobot.geometry import DIRECTION_DELTAS, toroidal_distance, wrap
from zoobot.models import Cell, CellContent, WorldSnapshot

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class WorldModel:
    """
    Read-only view of one snapshot's grid.

    Built fresh every tick; nothing here persists between ticks.
    """

    def __init__(self, snapshot: WorldSnapshot):
        self.tiles: Dict[Coord, CellContent] = {}
        self.max_x: int = -1
        self.max_y: int = -1

        for cell in snapshot.cells:
            self.tiles[cell.pos] = cell.content
            if cell.x > self.max_x:
                self.max_x = cell.x
            if cell.y > self.max_y:
                self.max_y = cell.y

        self.cells: List[Cell] = list(snapshot.cells)
        self.zookeepers: List[Coord] = [zk.pos for zk in snapshot.zookeepers]

    @property
    def is_empty(self) -> bool:
        return not self.tiles

    @property
    def width(self) -> int:
        return self.max_x + 1

    @property
    def height(self) -> int:
        return self.max_y + 1

    def wrap(self, x: int, y: int) -> Coord:
        return wrap(x, y, self.max_x, self.max_y)

    def distance(self, a: Coord, b: Coord) -> int:
        """Toroidal Manhattan distance on this grid"""
        return toroidal_distance(a, b, self.max_x, self.max_y)

    def content_at(self, pos: Coord) -> Optional[CellContent]:
        return self.tiles.get(pos)

    def is_wall(self, pos: Coord) -> bool:
        """Walls and cells absent from the snapshot both block movement."""
        content = self.tiles.get(pos)
        return content is None or content == CellContent.WALL

    def neighbors(self, pos: Coord) -> List[Tuple[str, Coord]]:
        """(direction name, wrapped cell) pairs in Up, Down, Left, Right order"""
        return [
            (name, self.wrap(pos[0] + dx, pos[1] + dy))
            for name, dx, dy in DIRECTION_DELTAS
        ]

    def cells_with(self, contents: Iterable[CellContent]) -> List[Cell]:
        """Cells holding any of the given contents, in snapshot order"""
        wanted = set(contents)
        return [cell for cell in self.cells if cell.content in wanted]

    def min_zookeeper_distance(self, pos: Coord) -> int:
        if not self.zookeepers:
            return NO_ZOOKEEPER_DISTANCE
        return min(self.distance(zk, pos) for zk in self.zookeepers)

    def avg_zookeeper_distance(self, pos: Coord) -> float:
        if not self.zookeepers:
            return float(NO_ZOOKEEPER_DISTANCE)
        total = sum(self.distance(zk, pos) for zk in self.zookeepers)
        return total / len(self.zookeepers)

    def zookeepers_within(self, pos: Coord, radius: int) -> List[Coord]:
        return [zk for zk in self.zookeepers if self.distance(zk, pos) <= radius]
