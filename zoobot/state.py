"""
Engine memory and stall / loop detection
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Sequence, Tuple
import logging

from zoobot.config import POSITION_HISTORY_SIZE, RECENT_POSITIONS_SIZE, Tunables

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class EngineState:
    """
    Everything the engine remembers between ticks for one bot.

    position_history feeds loop detection; recent_positions feeds path search.
    Both are bounded FIFOs.
    """
    last_position: Optional[Coord] = None
    stuck_counter: int = 0
    oscillation_counter: int = 0
    position_history: Deque[Coord] = field(
        default_factory=lambda: deque(maxlen=POSITION_HISTORY_SIZE)
    )
    recent_positions: Deque[Coord] = field(
        default_factory=lambda: deque(maxlen=RECENT_POSITIONS_SIZE)
    )
    last_known_power_up: Optional[Coord] = None
    power_ups_used: int = 0

    @classmethod
    def from_tunables(cls, tunables: Tunables) -> "EngineState":
        return cls(
            position_history=deque(maxlen=tunables.position_history_size),
            recent_positions=deque(maxlen=tunables.recent_positions_size),
        )


def detect_loop(positions: Sequence[Coord]) -> Optional[int]:
    """
    Length of the cycle the tail of positions is repeating, if any.

    2-cycle: A B A B (needs 4 entries)
    3-cycle: A B C A B C (needs 6 entries)
    """
    if len(positions) >= 4:
        if positions[-1] == positions[-3] and positions[-2] == positions[-4]:
            return 2
    if len(positions) >= 6:
        if (positions[-1] == positions[-4]
                and positions[-2] == positions[-5]
                and positions[-3] == positions[-6]):
            return 3
    return None


class MotionTracker:
    """Updates stuck / oscillation counters from the bot's position each tick"""

    def __init__(self, tunables: Optional[Tunables] = None):
        self.tunables = tunables or Tunables()

    def observe(self, state: EngineState, pos: Coord) -> Optional[int]:
        """
        Record this tick's position.

        Returns the detected cycle length (2 or 3), or None.
        """
        if state.last_position == pos:
            state.stuck_counter += 1
        else:
            state.stuck_counter = 0
            state.last_position = pos

        state.position_history.append(pos)

        # Too little history to judge: counter left as is
        if len(state.position_history) < 4:
            return None

        cycle = detect_loop(list(state.position_history))
        if cycle is not None:
            state.oscillation_counter += 1
            logger.debug(f"{cycle}-position loop, counter={state.oscillation_counter}")
        else:
            state.oscillation_counter = 0
        return cycle

    def is_stuck(self, state: EngineState) -> bool:
        return state.stuck_counter >= self.tunables.stuck_threshold

    def is_oscillating(self, state: EngineState) -> bool:
        return state.oscillation_counter >= self.tunables.oscillation_threshold

    def is_relaxed(self, state: EngineState) -> bool:
        """Stuck or looping enough that path search loosens its rules"""
        threshold = self.tunables.relax_threshold
        return state.stuck_counter >= threshold or state.oscillation_counter >= threshold

    def reset_oscillation(self, state: EngineState):
        state.oscillation_counter = 0
        state.position_history.clear()

    def reset_stuck(self, state: EngineState):
        state.stuck_counter = 0
        state.position_history.clear()
