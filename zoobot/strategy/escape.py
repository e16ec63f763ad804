"""
Escape planners for a bot that is stuck or looping

- Emergency escape (deterministic): novel cell first, then farthest from
  the nearest zookeeper, then farthest on average
- Random escape: random novel cell, else the move farthest from the
  nearest zookeeper
"""
from dataclasses import dataclass
from typing import Collection, List, Optional, Tuple
import logging
import random

from zoobot.models import BotAction
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class EscapeCandidate:
    """One cardinal move considered by an escape planner"""
    action: BotAction
    pos: Coord
    min_zookeeper_distance: int
    avg_zookeeper_distance: float
    is_recent: bool


def escape_candidates(
    world: WorldModel,
    bot_pos: Coord,
    history: Collection[Coord]
) -> List[EscapeCandidate]:
    """Non-wall moves from bot_pos, in Up, Down, Left, Right order"""
    candidates = []
    for name, pos in world.neighbors(bot_pos):
        if world.is_wall(pos):
            continue
        candidates.append(EscapeCandidate(
            action=BotAction(name),
            pos=pos,
            min_zookeeper_distance=world.min_zookeeper_distance(pos),
            avg_zookeeper_distance=world.avg_zookeeper_distance(pos),
            is_recent=pos in history,
        ))
    return candidates


def emergency_escape(
    world: WorldModel,
    bot_pos: Coord,
    history: Collection[Coord]
) -> Optional[EscapeCandidate]:
    """Best deterministic move away from zookeepers, or None if boxed in"""
    candidates = escape_candidates(world, bot_pos, history)
    if not candidates:
        return None

    # Stable sort: direction order decides full ties
    candidates.sort(key=lambda c: (
        c.is_recent,
        -c.min_zookeeper_distance,
        -c.avg_zookeeper_distance,
    ))
    best = candidates[0]
    logger.debug(f"Emergency escape {best.action.value}, min zk dist {best.min_zookeeper_distance}")
    return best


def random_escape(
    world: WorldModel,
    bot_pos: Coord,
    history: Collection[Coord],
    rng: Optional[random.Random] = None
) -> Optional[EscapeCandidate]:
    """Random move to a cell outside history, or None if boxed in"""
    candidates = escape_candidates(world, bot_pos, history)
    if not candidates:
        return None

    fresh = [c for c in candidates if not c.is_recent]
    if fresh:
        return (rng or random).choice(fresh)

    # max() keeps the first of equal candidates
    return max(candidates, key=lambda c: c.min_zookeeper_distance)
