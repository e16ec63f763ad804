"""
Danger map: zookeeper avoidance zones

Computes:
- Danger radius for this tick (depends on target type and nearby threats)
- Unsafe cells around each zookeeper's current position
- Unsafe cells around each zookeeper's projected positions 1-2 steps ahead
"""
from typing import List, Optional, Set, Tuple
import logging

from zoobot.config import Tunables
from zoobot.geometry import DIRECTION_DELTAS, diamond
from zoobot.models import CellContent
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def danger_radius_for(
    target_content: Optional[CellContent],
    threatened: bool,
    tunables: Tunables
) -> int:
    """
    Danger radius for the current tick.

    Power-up targets use the smaller radius; pellets and "no target" use
    the larger one. Any zookeeper within immediate_threat_distance raises it
    to at least danger_radius_threatened.
    """
    if target_content is not None and target_content != CellContent.PELLET:
        radius = tunables.danger_radius_power_up
    else:
        radius = tunables.danger_radius_pellet

    if threatened:
        radius = max(radius, tunables.danger_radius_threatened)
    return radius


class DangerMap:
    """
    Hazard field for a single tick.

    For each zookeeper:
    - Every cell within danger_radius (wrapped Manhattan) is unsafe
    - For steps 1..prediction_steps in each cardinal direction, the projected
      cell (unless it is a wall) adds a diamond of
      max(min_prediction_radius, danger_radius - decay * step)
    """

    def __init__(self, tunables: Optional[Tunables] = None):
        self.tunables = tunables or Tunables()
        self.unsafe_cells: Set[Coord] = set()
        self.danger_radius: int = 0
        self.immediate_threats: List[Coord] = []

    def update(
        self,
        world: WorldModel,
        bot_pos: Coord,
        target_content: Optional[CellContent]
    ) -> "DangerMap":
        """Rebuild the field from scratch for this tick"""
        self.unsafe_cells = set()
        self.immediate_threats = world.zookeepers_within(
            bot_pos, self.tunables.immediate_threat_distance
        )
        self.danger_radius = danger_radius_for(
            target_content, bool(self.immediate_threats), self.tunables
        )

        for zk in world.zookeepers:
            self._mark_zone(zk, self.danger_radius, world)
            self._mark_predicted(zk, world)

        logger.debug(
            f"Danger map: {len(self.unsafe_cells)} unsafe cells, "
            f"radius={self.danger_radius}, threats={len(self.immediate_threats)}"
        )
        return self

    def _mark_zone(self, center: Coord, radius: int, world: WorldModel):
        self.unsafe_cells.update(diamond(center, radius, world.max_x, world.max_y))

    def _mark_predicted(self, zk: Coord, world: WorldModel):
        """Mark smaller zones where the zookeeper could be in 1-2 ticks"""
        for step in range(1, self.tunables.prediction_steps + 1):
            pred_radius = max(
                self.tunables.min_prediction_radius,
                self.danger_radius - step * self.tunables.prediction_radius_decay,
            )
            for _, dx, dy in DIRECTION_DELTAS:
                predicted = world.wrap(zk[0] + dx * step, zk[1] + dy * step)
                if world.is_wall(predicted):
                    continue
                self._mark_zone(predicted, pred_radius, world)

    def is_safe(self, pos: Coord) -> bool:
        return pos not in self.unsafe_cells
