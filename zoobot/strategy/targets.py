"""
Target selection: held-item usage and destination choice

Held items:
- PowerPellet, Scavenger, BigMooseJuice: use immediately
- ChameleonCloak: use only when a zookeeper is close
- anything else: keep

Destination rules (first match wins):
1) Nearest power-up within nearby_power_up_distance
2) Nearest power-up anywhere, unless a pellet is pellet_preference_ratio
   times closer
3) Nearest pellet
4) Last known power-up location (virtual target)
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging

from zoobot.config import Tunables
from zoobot.models import Cell, CellContent, POWER_UP_CONTENTS
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Target:
    """Destination cell chosen for this tick"""
    pos: Coord
    content: CellContent
    distance: int
    rule: str
    virtual: bool = False

    @property
    def is_pellet(self) -> bool:
        return self.content == CellContent.PELLET


def _always(world: WorldModel, bot_pos: Coord, tunables: Tunables) -> bool:
    return True


def _zookeeper_close(world: WorldModel, bot_pos: Coord, tunables: Tunables) -> bool:
    return bool(world.zookeepers_within(bot_pos, tunables.cloak_trigger_distance))


ITEM_POLICIES: Dict[str, Callable[[WorldModel, Coord, Tunables], bool]] = {
    CellContent.POWER_PELLET.value: _always,
    CellContent.CHAMELEON_CLOAK.value: _zookeeper_close,
    CellContent.SCAVENGER.value: _always,
    CellContent.BIG_MOOSE_JUICE.value: _always,
}


def should_use_item(
    held: Optional[str],
    world: WorldModel,
    bot_pos: Coord,
    tunables: Optional[Tunables] = None
) -> bool:
    """Whether the held power-up should be activated this tick"""
    if held is None:
        return False
    policy = ITEM_POLICIES.get(held)
    if policy is None:
        logger.debug(f"Unknown power-up {held!r}, keeping it")
        return False
    return policy(world, bot_pos, tunables or Tunables())


class TargetSelector:
    """Ranks power-ups and pellets by toroidal distance from the bot"""

    def __init__(self, tunables: Optional[Tunables] = None):
        self.tunables = tunables or Tunables()
        self.rules: List[Tuple[str, Callable]] = [
            ("nearby_power_up", self._nearby_power_up),
            ("power_up_vs_pellet", self._power_up_vs_pellet),
            ("closest_pellet", self._closest_pellet),
            ("remembered_power_up", self._remembered_power_up),
        ]

    def select(
        self,
        world: WorldModel,
        bot_pos: Coord,
        last_known_power_up: Optional[Coord] = None
    ) -> Optional[Target]:
        """
        Pick the destination for this tick.

        Args:
            world: Grid view for this tick
            bot_pos: Bot position
            last_known_power_up: Remembered power-up cell, if any

        Returns:
            Target, or None when there is nothing to head for
        """
        power_ups = self._ranked(world, bot_pos, POWER_UP_CONTENTS)
        pellets = self._ranked(world, bot_pos, [CellContent.PELLET])

        for name, rule in self.rules:
            target = rule(power_ups, pellets, last_known_power_up, world, bot_pos)
            if target is not None:
                logger.debug(f"Target via {name}: {target.content.value} at {target.pos}")
                return target
        return None

    def _ranked(self, world: WorldModel, bot_pos: Coord, contents) -> List[Tuple[int, Cell]]:
        # sorted() is stable, so snapshot order breaks distance ties
        cells = world.cells_with(contents)
        ranked = [(world.distance(cell.pos, bot_pos), cell) for cell in cells]
        return sorted(ranked, key=lambda item: item[0])

    def _nearby_power_up(self, power_ups, pellets, last_known, world, bot_pos):
        if power_ups and power_ups[0][0] <= self.tunables.nearby_power_up_distance:
            dist, cell = power_ups[0]
            return Target(cell.pos, cell.content, dist, "nearby_power_up")
        return None

    def _power_up_vs_pellet(self, power_ups, pellets, last_known, world, bot_pos):
        if not power_ups:
            return None
        power_dist, power_cell = power_ups[0]
        if pellets:
            pellet_dist, pellet_cell = pellets[0]
            if pellet_dist * self.tunables.pellet_preference_ratio < power_dist:
                return Target(pellet_cell.pos, pellet_cell.content, pellet_dist, "power_up_vs_pellet")
        return Target(power_cell.pos, power_cell.content, power_dist, "power_up_vs_pellet")

    def _closest_pellet(self, power_ups, pellets, last_known, world, bot_pos):
        if pellets:
            dist, cell = pellets[0]
            return Target(cell.pos, cell.content, dist, "closest_pellet")
        return None

    def _remembered_power_up(self, power_ups, pellets, last_known, world, bot_pos):
        if last_known is None:
            return None
        return Target(
            last_known,
            CellContent.POWER_PELLET,
            world.distance(last_known, bot_pos),
            "remembered_power_up",
            virtual=True,
        )
