import math
from collections import deque

import pytest

from alacod.animation import FacingDirection
from alacod.collider import Collider, Rectangle
from alacod.input import FIXED_TIMESTEP
from alacod.pathing import (
    EnemyAgent,
    EnemyPath,
    PathfindingConfig,
    PathStatus,
    calculate_path,
    check_direct_path,
    move_enemies,
    update_enemy_target,
)


class FixedRng:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def next_f32(self):
        self.calls += 1
        return self.value


def wall(x, y, w, h):
    return ((x, y), Collider(Rectangle(w, h)))


def test_update_target_picks_closest_player():
    path = EnemyPath()
    config = PathfindingConfig()
    players = [(500.0, 0.0), (10.0, 10.0), (-300.0, 0.0)]
    assert update_enemy_target(path, (0.0, 0.0), players, 60, config) is True
    assert path.target_position == (10.0, 10.0)
    assert path.recalculate_ticks == 60


def test_update_target_only_on_interval_frames():
    path = EnemyPath(target_position=(1.0, 2.0))
    config = PathfindingConfig()
    assert update_enemy_target(path, (0.0, 0.0), [(50.0, 0.0)], 31, config) is False
    assert path.target_position == (1.0, 2.0)


def test_update_target_without_players_keeps_target():
    path = EnemyPath(target_position=(1.0, 2.0))
    assert update_enemy_target(path, (0.0, 0.0), [], 0, PathfindingConfig()) is False
    assert path.target_position == (1.0, 2.0)


def test_direct_path_when_close_and_clear():
    path = EnemyPath(target_position=(100.0, 0.0), waypoints=deque([(5.0, 5.0)]))
    status = check_direct_path(path, (0.0, 0.0), [], PathfindingConfig())
    assert status is PathStatus.DIRECT_PATH
    assert path.path_status is PathStatus.DIRECT_PATH
    assert len(path.waypoints) == 0


def test_far_target_needs_calculation():
    path = EnemyPath(target_position=(1000.0, 0.0))
    assert check_direct_path(path, (0.0, 0.0), [], PathfindingConfig()) is PathStatus.CALCULATING_PATH


def test_wall_in_the_way_needs_calculation():
    path = EnemyPath(target_position=(150.0, 0.0))
    walls = [wall(75.0, 0.0, 20.0, 200.0)]
    assert check_direct_path(path, (0.0, 0.0), walls, PathfindingConfig()) is PathStatus.CALCULATING_PATH


def test_following_path_kept_when_blocked():
    path = EnemyPath(target_position=(150.0, 0.0), path_status=PathStatus.FOLLOWING_PATH)
    walls = [wall(75.0, 0.0, 20.0, 200.0)]
    assert check_direct_path(path, (0.0, 0.0), walls, PathfindingConfig()) is PathStatus.FOLLOWING_PATH


def test_zero_distance_is_direct():
    path = EnemyPath(target_position=(0.0, 0.0))
    assert check_direct_path(path, (0.0, 0.0), [], PathfindingConfig()) is PathStatus.DIRECT_PATH


def test_calculate_path_ignores_other_statuses():
    path = EnemyPath(target_position=(1000.0, 0.0), path_status=PathStatus.DIRECT_PATH)
    rng = FixedRng(0.5)
    assert calculate_path(path, (0.0, 0.0), [], rng, PathfindingConfig()) is False
    assert rng.calls == 0
    assert path.path_status is PathStatus.DIRECT_PATH


def test_calculate_path_open_field_heads_straight():
    path = EnemyPath(target_position=(1000.0, 0.0), path_status=PathStatus.CALCULATING_PATH)
    assert calculate_path(path, (0.0, 0.0), [], FixedRng(0.5), PathfindingConfig()) is True
    assert path.path_status is PathStatus.FOLLOWING_PATH
    assert len(path.waypoints) == 2
    first, last = path.waypoints
    assert first[1] == pytest.approx(0.0, abs=1e-9)
    assert 0.0 < first[0] <= 100.0
    assert last == (1000.0, 0.0)


def test_calculate_path_respects_max_path_length():
    path = EnemyPath(target_position=(1000.0, 0.0), path_status=PathStatus.CALCULATING_PATH)
    config = PathfindingConfig(max_path_length=1)
    calculate_path(path, (0.0, 0.0), [], FixedRng(0.5), config)
    assert len(path.waypoints) == 1


def test_calculate_path_waypoint_stays_within_limit_near_wall():
    path = EnemyPath(target_position=(1000.0, 0.0), path_status=PathStatus.CALCULATING_PATH)
    walls = [wall(60.0, 0.0, 20.0, 80.0)]
    calculate_path(path, (0.0, 0.0), walls, FixedRng(0.9), PathfindingConfig())
    first = path.waypoints[0]
    assert math.hypot(*first) <= 100.0 + 1e-9


def test_move_enemy_full_speed_toward_target():
    agent = EnemyAgent(
        position=(0.0, 0.0, 2.0),
        path=EnemyPath(target_position=(1000.0, 0.0), path_status=PathStatus.DIRECT_PATH),
        facing=FacingDirection.LEFT,
        movement_speed=60.0,
    )
    move_enemies([agent], [(1000.0, 0.0)], PathfindingConfig())
    assert agent.velocity == pytest.approx((60.0, 0.0))
    assert agent.position == pytest.approx((60.0 * FIXED_TIMESTEP, 0.0, 2.0))
    assert agent.facing is FacingDirection.RIGHT


def test_move_enemy_uses_config_speed_fallback():
    config = PathfindingConfig()
    agent = EnemyAgent(path=EnemyPath(target_position=(0.0, 500.0), path_status=PathStatus.DIRECT_PATH))
    move_enemies([agent], [], config)
    assert agent.velocity == pytest.approx((0.0, config.movement_speed))


def test_move_enemy_backs_off_when_too_close():
    agent = EnemyAgent(
        path=EnemyPath(target_position=(50.0, 0.0), path_status=PathStatus.DIRECT_PATH),
        movement_speed=100.0,
    )
    move_enemies([agent], [(50.0, 0.0)], PathfindingConfig())
    assert agent.velocity == pytest.approx((-30.0, 0.0))
    assert agent.facing is FacingDirection.LEFT


def test_idle_enemy_does_not_move():
    agent = EnemyAgent(position=(1.0, 2.0, 0.0), path=EnemyPath(target_position=(500.0, 0.0)))
    move_enemies([agent], [(500.0, 0.0)], PathfindingConfig())
    assert agent.velocity == (0.0, 0.0)
    assert agent.position == (1.0, 2.0, 0.0)


def test_separation_pushes_enemies_apart_symmetrically():
    left = EnemyAgent(position=(-1.0, 0.0, 0.0))
    right = EnemyAgent(position=(1.0, 0.0, 0.0))
    move_enemies([left, right], [], PathfindingConfig())
    assert left.velocity[0] < 0.0 < right.velocity[0]
    assert left.velocity[0] == pytest.approx(-right.velocity[0])
    assert left.position[0] < -1.0 and right.position[0] > 1.0


def test_reaching_last_waypoint_switches_to_direct():
    path = EnemyPath(
        target_position=(500.0, 0.0),
        waypoints=deque([(5.0, 0.0)]),
        path_status=PathStatus.FOLLOWING_PATH,
    )
    agent = EnemyAgent(path=path)
    move_enemies([agent], [], PathfindingConfig())
    assert len(path.waypoints) == 0
    assert path.path_status is PathStatus.DIRECT_PATH


def test_following_without_waypoints_switches_to_direct():
    path = EnemyPath(target_position=(500.0, 0.0), path_status=PathStatus.FOLLOWING_PATH)
    agent = EnemyAgent(path=path)
    move_enemies([agent], [], PathfindingConfig())
    assert path.path_status is PathStatus.DIRECT_PATH