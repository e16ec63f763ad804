"""
Decision engine: one command per tick for one bot

Rules, evaluated top to bottom; the first one that returns an action wins:
1) break_oscillation - random escape after repeated 2/3-cycles
2) break_stall       - emergency escape after repeated zero movement
3) use_held_item     - activate the held power-up
4) follow_path       - first step of the BFS path to the target
5) greedy_step       - single-step scorer
If none fires, the default action is sent, unless it would land on a
zookeeper; then the emergency escape ranking picks the move.
"""
from functools import cached_property
from typing import Callable, Dict, List, Optional, Tuple
import logging
import random

from zoobot.config import DEFAULT_ACTION, RANDOM_SEED, TRACE_ENABLED, Tunables
from zoobot.danger_map import DangerMap
from zoobot.geometry import manhattan_distance
from zoobot.logger import DecisionTrace
from zoobot.models import POWER_UP_CONTENTS, Animal, BotAction, BotCommand, WorldSnapshot
from zoobot.pathfinding import PathConstraints, bfs_path, step_action
from zoobot.state import EngineState, MotionTracker
from zoobot.strategy.escape import emergency_escape, random_escape
from zoobot.strategy.greedy import greedy_step
from zoobot.strategy.targets import Target, TargetSelector, should_use_item
from zoobot.world_model import WorldModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class TickContext:
    """Inputs for one tick; target and hazard field are built on first use"""

    def __init__(self, engine: "DecisionEngine", world: WorldModel, bot: Animal):
        self.engine = engine
        self.world = world
        self.bot = bot
        self.bot_pos: Coord = bot.pos

    @cached_property
    def target(self) -> Optional[Target]:
        return self.engine.selector.select(
            self.world, self.bot_pos, self.engine.state.last_known_power_up
        )

    @cached_property
    def danger(self) -> DangerMap:
        content = self.target.content if self.target is not None else None
        return DangerMap(self.engine.tunables).update(self.world, self.bot_pos, content)


class DecisionEngine:
    """
    Turns a WorldSnapshot into a BotCommand.

    Not re-entrant: one engine per bot identity, one call per tick.
    """

    def __init__(
        self,
        bot_id: Optional[str] = None,
        tunables: Optional[Tunables] = None,
        rng: Optional[random.Random] = None,
        trace: Optional[DecisionTrace] = None
    ):
        self.bot_id: Optional[str] = str(bot_id) if bot_id is not None else None
        self.tunables = tunables or Tunables()
        self.rng = rng or random.Random(RANDOM_SEED)
        self.trace = trace or DecisionTrace(enabled=TRACE_ENABLED)
        self.default_action = BotAction(DEFAULT_ACTION)

        self.state = EngineState.from_tunables(self.tunables)
        self.motion = MotionTracker(self.tunables)
        self.selector = TargetSelector(self.tunables)

        self.rules: List[Tuple[str, Callable[[TickContext], Optional[BotAction]]]] = [
            ("break_oscillation", self._break_oscillation),
            ("break_stall", self._break_stall),
            ("use_held_item", self._use_held_item),
            ("follow_path", self._follow_path),
            ("greedy_step", self._greedy_step),
        ]

    def set_bot_id(self, bot_id: str):
        self.bot_id = str(bot_id)

    def process_state(self, snapshot: WorldSnapshot) -> BotCommand:
        """Decide this tick's command"""
        bot = snapshot.find_animal(self.bot_id)
        if bot is None:
            logger.debug(f"Bot {self.bot_id} not in snapshot for tick {snapshot.tick}")
            return BotCommand(self.default_action)

        world = WorldModel(snapshot)
        if world.is_empty:
            logger.warning(f"Tick {snapshot.tick}: snapshot has no cells")
            return BotCommand(self.default_action)

        ctx = TickContext(self, world, bot)
        self.trace.tick(f"Tick {snapshot.tick} | bot at {ctx.bot_pos}")

        if self.state.last_known_power_up == ctx.bot_pos:
            self.trace.target(f"Reached remembered power-up cell {ctx.bot_pos}, forgetting it")
            self.state.last_known_power_up = None

        cycle = self.motion.observe(self.state, ctx.bot_pos)
        if cycle is not None:
            self.trace.state(
                f"{cycle}-position loop detected, counter={self.state.oscillation_counter}"
            )

        action = None
        for name, rule in self.rules:
            action = rule(ctx)
            if action is not None:
                self.trace.movement(f"{action.value} via {name}")
                break

        if action is None:
            action = self._fallback_action(ctx)

        if action.is_move:
            self._record_move(ctx)

        self.trace.state(
            f"stuck={self.state.stuck_counter} oscillation={self.state.oscillation_counter} "
            f"history={list(self.state.position_history)}"
        )
        return BotCommand(action)

    def _break_oscillation(self, ctx: TickContext) -> Optional[BotAction]:
        if not self.motion.is_oscillating(self.state):
            return None

        self.trace.escape("Stuck in a loop, forcing random move")
        move = random_escape(ctx.world, ctx.bot_pos, self.state.position_history, self.rng)
        if move is None:
            return None

        self.motion.reset_oscillation(self.state)
        return move.action

    def _break_stall(self, ctx: TickContext) -> Optional[BotAction]:
        if not self.motion.is_stuck(self.state):
            return None

        self.trace.escape("Stuck in place, forcing move away from zookeepers")
        move = emergency_escape(ctx.world, ctx.bot_pos, self.state.position_history)
        if move is None:
            return None

        self.trace.escape(
            f"Emergency {move.action.value}, min zookeeper dist {move.min_zookeeper_distance}"
        )
        self.motion.reset_stuck(self.state)
        return move.action

    def _use_held_item(self, ctx: TickContext) -> Optional[BotAction]:
        held = ctx.bot.held_power_up
        if not should_use_item(held, ctx.world, ctx.bot_pos, self.tunables):
            if held is not None:
                self.trace.item(f"Holding {held}, not using it yet")
            return None

        self.state.power_ups_used += 1
        self.trace.item(f"Using {held} at {ctx.bot_pos} (total used: {self.state.power_ups_used})")
        return BotAction.USE_ITEM

    def _follow_path(self, ctx: TickContext) -> Optional[BotAction]:
        target = ctx.target
        if target is None:
            self.trace.target("No target")
            return None

        self.trace.target(
            f"{target.content.value} at {target.pos}, dist {target.distance} ({target.rule})"
        )
        danger = ctx.danger
        if danger.immediate_threats:
            self.trace.threat(
                f"{len(danger.immediate_threats)} zookeeper(s) within "
                f"{self.tunables.immediate_threat_distance}, radius {danger.danger_radius}"
            )

        path = bfs_path(ctx.bot_pos, target.pos, ctx.world, self._path_constraints(danger))
        if len(path) < 2:
            return None
        return step_action(ctx.bot_pos, path[1], ctx.world)

    def _path_constraints(self, danger: DangerMap) -> PathConstraints:
        relaxed = self.motion.is_relaxed(self.state)
        return PathConstraints(
            unsafe_cells=danger.unsafe_cells,
            avoid_cells=frozenset() if relaxed else frozenset(self.state.recent_positions),
            safe_distance=(
                self.tunables.safe_distance_relaxed if relaxed else self.tunables.safe_distance
            ),
        )

    def _greedy_step(self, ctx: TickContext) -> Optional[BotAction]:
        target_pos = ctx.target.pos if ctx.target is not None else None
        return greedy_step(
            ctx.world,
            ctx.bot_pos,
            target_pos,
            ctx.danger.unsafe_cells,
            self.tunables.greedy_min_zookeeper_distance,
            ignore_zookeeper_distance=self.state.stuck_counter >= self.tunables.stuck_threshold,
        )

    def _fallback_action(self, ctx: TickContext) -> BotAction:
        """Default action, unless it walks straight onto a zookeeper"""
        action = self.default_action
        landing = dict(ctx.world.neighbors(ctx.bot_pos)).get(action.value)
        if landing is None or landing not in ctx.world.zookeepers:
            self.trace.movement(f"{action.value} (default)")
            return action

        move = emergency_escape(ctx.world, ctx.bot_pos, self.state.position_history)
        if move is None or move.min_zookeeper_distance == 0:
            self.trace.movement(f"{action.value} (default, no way off the zookeepers)")
            return action

        self.trace.escape(f"Default {action.value} lands on a zookeeper, taking {move.action.value}")
        return move.action

    def _record_move(self, ctx: TickContext):
        """Post-move bookkeeping: short-term memory and power-up memory"""
        self.state.recent_positions.append(ctx.bot_pos)

        power_ups = ctx.world.cells_with(POWER_UP_CONTENTS)
        if power_ups:
            nearest = min(power_ups, key=lambda c: manhattan_distance(c.pos, ctx.bot_pos))
            self.state.last_known_power_up = nearest.pos


class EnginePool:
    """One independent DecisionEngine per controlled bot identity"""

    def __init__(self, tunables: Optional[Tunables] = None, seed: Optional[int] = RANDOM_SEED):
        self.tunables = tunables
        self.seed = seed
        self.engines: Dict[str, DecisionEngine] = {}

    def engine_for(self, bot_id: str) -> DecisionEngine:
        key = str(bot_id)
        if key not in self.engines:
            self.engines[key] = DecisionEngine(
                bot_id=key,
                tunables=self.tunables,
                rng=random.Random(self.seed),
            )
            logger.info(f"Created engine for bot {key[:8]}")
        return self.engines[key]

    def process_state(self, bot_id: str, snapshot: WorldSnapshot) -> BotCommand:
        return self.engine_for(bot_id).process_state(snapshot)
