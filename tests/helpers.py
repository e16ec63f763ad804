"""
Snapshot builders shared by the tests
"""
from typing import Dict, Iterable, Optional, Tuple

from zoobot.models import Animal, Cell, CellContent, WorldSnapshot, Zookeeper

BOT_ID = "bot-1"


def make_snapshot(
    width: int,
    height: int,
    bot: Optional[Tuple[int, int]] = (0, 0),
    held: Optional[str] = None,
    walls: Iterable[Tuple[int, int]] = (),
    items: Optional[Dict[Tuple[int, int], CellContent]] = None,
    zookeepers: Iterable[Tuple[int, int]] = (),
    tick: int = 1,
) -> WorldSnapshot:
    """Dense width x height grid with our bot, walls, items and zookeepers"""
    walls = set(walls)
    items = items or {}

    cells = []
    for y in range(height):
        for x in range(width):
            if (x, y) in walls:
                content = CellContent.WALL
            else:
                content = items.get((x, y), CellContent.EMPTY)
            cells.append(Cell(x=x, y=y, content=content))

    animals = []
    if bot is not None:
        animals.append(Animal(id=BOT_ID, x=bot[0], y=bot[1], held_power_up=held))

    return WorldSnapshot(
        tick=tick,
        cells=cells,
        animals=animals,
        zookeepers=[Zookeeper(x=x, y=y) for x, y in zookeepers],
    )
