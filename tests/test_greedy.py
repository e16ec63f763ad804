"""
Tests for the greedy single-step fallback
"""
import pytest
from zoobot.models import BotAction
from zoobot.strategy.greedy import greedy_step
from zoobot.world_model import WorldModel

from helpers import make_snapshot


def test_greedy_moves_toward_target():
    """First distance-reducing move wins"""
    world = WorldModel(make_snapshot(20, 20))

    action = greedy_step(world, (5, 5), (9, 5), set(), 5)

    assert action == BotAction.RIGHT


def test_greedy_skips_hazard_cells():
    """Improving move inside the hazard field is skipped"""
    world = WorldModel(make_snapshot(20, 20))

    action = greedy_step(world, (5, 5), (9, 9), {(5, 6)}, 5)

    assert action == BotAction.RIGHT


def test_greedy_skips_walls():
    """Walls are never chosen"""
    world = WorldModel(make_snapshot(20, 20, walls=[(6, 5)]))

    action = greedy_step(world, (5, 5), (9, 5), set(), 5)

    assert action == BotAction.UP


def test_greedy_falls_back_to_first_clear_move():
    """No improving move: first clear direction"""
    world = WorldModel(make_snapshot(20, 20, walls=[(5, 4)]))

    # Target straight up behind a wall; Down, Left, Right do not improve
    action = greedy_step(world, (5, 5), (5, 4), set(), 5)

    assert action == BotAction.DOWN


def test_greedy_without_target_takes_first_clear_move():
    """No target at all still yields a safe move"""
    world = WorldModel(make_snapshot(20, 20))
    assert greedy_step(world, (5, 5), None, {(5, 4)}, 5) == BotAction.DOWN


def test_greedy_keeps_distance_from_zookeepers():
    """Moves ending closer than the minimum distance are skipped"""
    world = WorldModel(make_snapshot(30, 30, zookeepers=[(10, 5)]))

    # Right lands at distance 4, Up/Down at 6, Left at 6
    action = greedy_step(world, (5, 5), (15, 5), set(), 5)

    assert action == BotAction.UP


def test_greedy_ignores_distance_when_stuck():
    """Stuck bots may approach zookeepers"""
    world = WorldModel(make_snapshot(30, 30, zookeepers=[(10, 5)]))

    action = greedy_step(world, (5, 5), (15, 5), set(), 5, ignore_zookeeper_distance=True)

    assert action == BotAction.RIGHT


def test_greedy_no_move():
    """Every direction unsafe gives None"""
    world = WorldModel(make_snapshot(10, 10))
    unsafe = {(5, 4), (5, 6), (4, 5), (6, 5)}

    assert greedy_step(world, (5, 5), (9, 9), unsafe, 5) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
