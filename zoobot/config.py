"""
Configuration for the zoobot decision engine

Game facts (Zooscape starter bot):
- Grid is toroidal: walking off one edge re-enters on the opposite edge
- Movement: Up / Down / Left / Right, one cell per tick (y grows downward)
- Power-ups: PowerPellet, ChameleonCloak, Scavenger, BigMooseJuice
- One command per tick, no retries

Every tunable below can be overridden through a ZOOBOT_* environment variable
or per engine through Tunables. The radii and ratios are uncalibrated.
"""
import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_choice(name: str, default: str, choices) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() not in choices:
        return default
    return raw.strip()


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


# Engine defaults
ACTION_NAMES = ("Up", "Down", "Left", "Right", "UseItem")
DEFAULT_ACTION: str = _env_choice("ZOOBOT_DEFAULT_ACTION", "Right", ACTION_NAMES)
TRACE_ENABLED: bool = os.getenv("ZOOBOT_TRACE", "false").lower() == "true"
RANDOM_SEED: Optional[int] = _env_optional_int("ZOOBOT_RANDOM_SEED")

# History sizes
POSITION_HISTORY_SIZE: int = _env_int("ZOOBOT_POSITION_HISTORY_SIZE", 6)
RECENT_POSITIONS_SIZE: int = _env_int("ZOOBOT_RECENT_POSITIONS_SIZE", 5)

# Hazard field
DANGER_RADIUS_POWER_UP: int = _env_int("ZOOBOT_DANGER_RADIUS_POWER_UP", 8)
DANGER_RADIUS_PELLET: int = _env_int("ZOOBOT_DANGER_RADIUS_PELLET", 12)
DANGER_RADIUS_THREATENED: int = _env_int("ZOOBOT_DANGER_RADIUS_THREATENED", 15)
IMMEDIATE_THREAT_DISTANCE: int = _env_int("ZOOBOT_IMMEDIATE_THREAT_DISTANCE", 4)
PREDICTION_STEPS: int = _env_int("ZOOBOT_PREDICTION_STEPS", 2)
PREDICTION_RADIUS_DECAY: int = 2  # radius shrinks by this much per projected step
MIN_PREDICTION_RADIUS: int = 2

# Target selection
NEARBY_POWER_UP_DISTANCE: int = _env_int("ZOOBOT_NEARBY_POWER_UP_DISTANCE", 10)
PELLET_PREFERENCE_RATIO: float = _env_float("ZOOBOT_PELLET_PREFERENCE_RATIO", 30.0)
CLOAK_TRIGGER_DISTANCE: int = _env_int("ZOOBOT_CLOAK_TRIGGER_DISTANCE", 5)

# Path search
SAFE_DISTANCE: int = _env_int("ZOOBOT_SAFE_DISTANCE", 6)
SAFE_DISTANCE_RELAXED: int = _env_int("ZOOBOT_SAFE_DISTANCE_RELAXED", 3)
RELAX_THRESHOLD: int = 2  # stuck/oscillation count that loosens path constraints

# Greedy fallback
GREEDY_MIN_ZOOKEEPER_DISTANCE: int = _env_int("ZOOBOT_GREEDY_MIN_ZOOKEEPER_DISTANCE", 5)

# Stall / loop triggers
STUCK_THRESHOLD: int = _env_int("ZOOBOT_STUCK_THRESHOLD", 3)
OSCILLATION_THRESHOLD: int = _env_int("ZOOBOT_OSCILLATION_THRESHOLD", 3)

# Distance reported when there are no zookeepers at all
NO_ZOOKEEPER_DISTANCE: int = 999


@dataclass(frozen=True)
class Tunables:
    """Per-engine overrides for the heuristic constants"""
    position_history_size: int = POSITION_HISTORY_SIZE
    recent_positions_size: int = RECENT_POSITIONS_SIZE
    danger_radius_power_up: int = DANGER_RADIUS_POWER_UP
    danger_radius_pellet: int = DANGER_RADIUS_PELLET
    danger_radius_threatened: int = DANGER_RADIUS_THREATENED
    immediate_threat_distance: int = IMMEDIATE_THREAT_DISTANCE
    prediction_steps: int = PREDICTION_STEPS
    prediction_radius_decay: int = PREDICTION_RADIUS_DECAY
    min_prediction_radius: int = MIN_PREDICTION_RADIUS
    nearby_power_up_distance: int = NEARBY_POWER_UP_DISTANCE
    pellet_preference_ratio: float = PELLET_PREFERENCE_RATIO
    cloak_trigger_distance: int = CLOAK_TRIGGER_DISTANCE
    safe_distance: int = SAFE_DISTANCE
    safe_distance_relaxed: int = SAFE_DISTANCE_RELAXED
    relax_threshold: int = RELAX_THRESHOLD
    greedy_min_zookeeper_distance: int = GREEDY_MIN_ZOOKEEPER_DISTANCE
    stuck_threshold: int = STUCK_THRESHOLD
    oscillation_threshold: int = OSCILLATION_THRESHOLD
