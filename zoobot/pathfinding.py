"""
Pathfinding: BFS for shortest safe paths on the torus

Handles:
- Walls (and cells missing from the snapshot) as blocked
- Hazard cells from the danger map as blocked
- Recently visited cells as blocked, unless the bot is stuck or looping
- Cells too close to a zookeeper as blocked
"""
from dataclasses import dataclass, field
from typing import AbstractSet, List, Tuple
from collections import deque
import logging

from zoobot.geometry import wrapped_delta
from zoobot.models import BotAction
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

_DELTA_TO_ACTION = {
    (0, -1): BotAction.UP,
    (0, 1): BotAction.DOWN,
    (-1, 0): BotAction.LEFT,
    (1, 0): BotAction.RIGHT,
}


@dataclass
class PathConstraints:
    """Per-tick pruning rules for the search"""
    unsafe_cells: AbstractSet[Coord] = field(default_factory=frozenset)
    avoid_cells: AbstractSet[Coord] = field(default_factory=frozenset)
    safe_distance: int = 0


def bfs_path(
    start: Coord,
    goal: Coord,
    world: WorldModel,
    constraints: PathConstraints
) -> List[Coord]:
    """
    Find the shortest safe path using BFS.

    Neighbours are expanded in Up, Down, Left, Right order, which decides
    between equally short paths.

    Args:
        start: Starting cell
        goal: Goal cell
        world: Grid view for this tick
        constraints: Hazard / memory / distance pruning

    Returns:
        Cells from start to goal inclusive, or [] if no safe path exists
    """
    queue = deque([(start, [start])])
    visited = {start}

    while queue:
        current, path = queue.popleft()

        if current == goal:
            return path

        for _, neighbor in world.neighbors(current):
            if neighbor in visited:
                continue
            if world.is_wall(neighbor):
                continue
            if neighbor in constraints.unsafe_cells:
                continue
            if neighbor in constraints.avoid_cells:
                continue
            if world.min_zookeeper_distance(neighbor) < constraints.safe_distance:
                continue

            visited.add(neighbor)
            queue.append((neighbor, path + [neighbor]))

    return []


def step_action(start: Coord, step: Coord, world: WorldModel) -> BotAction:
    """
    Command that moves from start onto the adjacent cell step.

    Portal crossings are undone by wrapped_delta. A delta that is not a
    unit step falls back to the dominant axis.
    """
    dx, dy = wrapped_delta(start, step, world.max_x, world.max_y)
    action = _DELTA_TO_ACTION.get((dx, dy))
    if action is not None:
        return action

    logger.warning(f"Unexpected movement delta dx={dx}, dy={dy}")
    if abs(dx) > abs(dy):
        return BotAction.RIGHT if dx > 0 else BotAction.LEFT
    return BotAction.DOWN if dy > 0 else BotAction.UP
