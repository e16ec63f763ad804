"""
Greedy single-step fallback used when BFS finds no safe path
"""
from typing import AbstractSet, Optional, Tuple
import logging

from zoobot.models import BotAction
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def greedy_step(
    world: WorldModel,
    bot_pos: Coord,
    target_pos: Optional[Coord],
    unsafe_cells: AbstractSet[Coord],
    min_zookeeper_distance: int,
    ignore_zookeeper_distance: bool = False
) -> Optional[BotAction]:
    """
    Pick one step toward the target without a full search.

    Per direction (Up, Down, Left, Right):
    - skip hazard cells
    - skip cells closer than min_zookeeper_distance to a zookeeper, unless
      ignore_zookeeper_distance is set
    - skip walls
    The first move that shortens the distance to the target wins; otherwise
    the first move that passed all checks. None if every move was skipped.
    """
    fallback: Optional[BotAction] = None
    current_distance = world.distance(bot_pos, target_pos) if target_pos is not None else None

    for name, pos in world.neighbors(bot_pos):
        if pos in unsafe_cells:
            continue

        zk_dist = world.min_zookeeper_distance(pos)
        if zk_dist < min_zookeeper_distance and not ignore_zookeeper_distance:
            continue

        if world.is_wall(pos):
            continue

        action = BotAction(name)
        if current_distance is not None and world.distance(pos, target_pos) < current_distance:
            logger.debug(f"Greedy {name} toward target, zk dist {zk_dist}")
            return action

        if fallback is None:
            fallback = action

    return fallback
