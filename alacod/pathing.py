"""Enemy steering: target selection, path checks, detours and movement."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence

from alacod.animation import FacingDirection
from alacod.collider import Circle, Collider, is_colliding
from alacod.input import FIXED_TIMESTEP

Vec2 = tuple[float, float]

_PROBE_COLLIDER = Collider(Circle(15.0))
_DIRECT_STEP = 20.0
_DETOUR_STEP = 20.0
_DETOUR_STEPS = 20
_DETOUR_ANGLES = (0.0, 0.5, -0.5, 1.0, -1.0, 1.5, -1.5)
_MAX_WAYPOINT_DISTANCE = 100.0


class PathRng(Protocol):
    """Deterministic random source shared by all peers."""

    def next_f32(self) -> float: ...


class PathStatus(Enum):
    IDLE = "Idle"
    DIRECT_PATH = "DirectPath"
    CALCULATING_PATH = "CalculatingPath"
    FOLLOWING_PATH = "FollowingPath"
    BLOCKED = "Blocked"


@dataclass
class PathfindingConfig:
    """Tuning of enemy navigation; intervals are in frames, distances in world units."""

    recalculation_interval: int = 30
    max_iterations: int = 1000
    max_path_length: int = 50
    direct_path_threshold: float = 200.0
    node_size: float = 20.0
    movement_speed: float = 20.0
    waypoint_reach_distance: float = 10.0
    optimal_attack_distance: float = 100.0
    slow_down_distance: float = 150.0
    enemy_separation_force: float = 2.0
    enemy_separation_distance: float = 80.0


@dataclass
class EnemyPath:
    """Where an enemy is heading and how it plans to get there."""

    target_position: Vec2 = (0.0, 0.0)
    waypoints: deque = field(default_factory=deque)
    recalculate_ticks: int = 0
    path_status: PathStatus = PathStatus.IDLE


@dataclass
class EnemyAgent:
    """The simulated state of one enemy.

    ``movement_speed`` is the enemy's configured top speed; None falls back
    to the pathfinding config's speed.
    """

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    path: EnemyPath = field(default_factory=EnemyPath)
    facing: FacingDirection = FacingDirection.RIGHT
    movement_speed: Optional[float] = None


def _xy(pos: Sequence[float]) -> Vec2:
    return (float(pos[0]), float(pos[1]))


def _distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _normalize_or_zero(x: float, y: float) -> Vec2:
    length = math.hypot(x, y)
    if length == 0.0 or not math.isfinite(length):
        return (0.0, 0.0)
    return (x / length, y / length)


def _blocked(point: Vec2, walls: Sequence[tuple[Sequence[float], Collider]]) -> bool:
    return any(
        is_colliding(point, _PROBE_COLLIDER, wall_pos, wall_collider)
        for wall_pos, wall_collider in walls
    )


def update_enemy_target(
    path: EnemyPath,
    enemy_pos: Sequence[float],
    player_positions: Sequence[Sequence[float]],
    frame: int,
    config: PathfindingConfig,
) -> bool:
    """Aim at the closest player on recalculation frames; return whether the target changed."""
    if not player_positions or frame % config.recalculation_interval != 0:
        return False
    enemy = _xy(enemy_pos)
    closest = min((_xy(p) for p in player_positions), key=lambda p: _distance(enemy, p))
    path.target_position = closest
    path.recalculate_ticks = frame
    return True


def check_direct_path(
    path: EnemyPath,
    enemy_pos: Sequence[float],
    walls: Iterable[tuple[Sequence[float], Collider]],
    config: PathfindingConfig,
) -> PathStatus:
    """Choose a direct path when the target is near and unobstructed; return the new status.

    ``walls`` holds (position, collider) pairs.
    """
    walls = list(walls)
    enemy = _xy(enemy_pos)
    target = path.target_position
    distance = _distance(enemy, target)
    if distance >= config.direct_path_threshold:
        path.path_status = PathStatus.CALCULATING_PATH
        return path.path_status

    dx, dy = _normalize_or_zero(target[0] - enemy[0], target[1] - enemy[1])
    steps = math.ceil(distance / _DIRECT_STEP)
    step_size = distance / steps if steps else 0.0
    blocked = any(
        _blocked((enemy[0] + dx * step_size * i, enemy[1] + dy * step_size * i), walls)
        for i in range(1, steps)
    )
    if not blocked:
        path.waypoints.clear()
        path.path_status = PathStatus.DIRECT_PATH
    elif path.path_status is not PathStatus.FOLLOWING_PATH:
        path.path_status = PathStatus.CALCULATING_PATH
    return path.path_status


def _clear_reach(origin: Vec2, direction: Vec2, walls: Sequence[tuple[Sequence[float], Collider]]) -> float:
    reach = 0.0
    for i in range(1, _DETOUR_STEPS):
        test_dist = i * _DETOUR_STEP
        point = (origin[0] + direction[0] * test_dist, origin[1] + direction[1] * test_dist)
        if _blocked(point, walls):
            return test_dist - _DETOUR_STEP
        reach = test_dist
    return reach


def calculate_path(
    path: EnemyPath,
    enemy_pos: Sequence[float],
    walls: Iterable[tuple[Sequence[float], Collider]],
    rng: PathRng,
    config: PathfindingConfig,
) -> bool:
    """Plan a detour for an enemy waiting on a path; return whether one was planned.

    Several headings around the direct one are probed; the one that gets
    furthest while staying close to the target wins, with a small random jitter.
    """
    if path.path_status is not PathStatus.CALCULATING_PATH:
        return False
    walls = list(walls)
    enemy = _xy(enemy_pos)
    target = path.target_position
    direct = _normalize_or_zero(target[0] - enemy[0], target[1] - enemy[1])
    base_angle = math.atan2(direct[1], direct[0])

    best_angle = 0.0
    best_clearance = 0.0
    for offset in _DETOUR_ANGLES:
        angle = base_angle + offset
        heading = (math.cos(angle), math.sin(angle))
        reach = _clear_reach(enemy, heading, walls)
        waypoint = (enemy[0] + heading[0] * reach, enemy[1] + heading[1] * reach)
        clearance = reach / (1.0 + _distance(target, waypoint) * 0.01)
        if clearance > best_clearance:
            best_clearance = clearance
            best_angle = angle

    distance = min(best_clearance * 0.8, _MAX_WAYPOINT_DISTANCE)
    jittered = best_angle + (rng.next_f32() - 0.5) * 0.2
    waypoints: deque = deque(
        [(enemy[0] + math.cos(jittered) * distance, enemy[1] + math.sin(jittered) * distance)]
    )
    if len(waypoints) < config.max_path_length:
        waypoints.append(target)
    path.waypoints = waypoints
    path.path_status = PathStatus.FOLLOWING_PATH
    return True


def _speed_factor(distance_to_player: float, config: PathfindingConfig) -> float:
    if distance_to_player < config.optimal_attack_distance:
        return -0.3
    if distance_to_player < config.slow_down_distance:
        t = (distance_to_player - config.optimal_attack_distance) / (
            config.slow_down_distance - config.optimal_attack_distance
        )
        return min(max(t, 0.0), 1.0)
    return 1.0


def move_enemies(
    enemies: Sequence[EnemyAgent],
    player_positions: Sequence[Sequence[float]],
    config: PathfindingConfig,
) -> None:
    """Steer and move every enemy by one frame, keeping them apart from each other."""
    snapshot = [(agent, _xy(agent.position)) for agent in enemies]
    players = [_xy(p) for p in player_positions]

    for agent, enemy in snapshot:
        path = agent.path
        speed = agent.movement_speed if agent.movement_speed is not None else config.movement_speed
        target = path.waypoints[0] if path.waypoints else path.target_position
        direction = _normalize_or_zero(target[0] - enemy[0], target[1] - enemy[1])
        nearest_player = min((_distance(enemy, p) for p in players), default=math.inf)

        sep_x = sep_y = 0.0
        neighbours = 0
        for other, other_pos in snapshot:
            if other is agent:
                continue
            distance = _distance(enemy, other_pos)
            if 0.1 < distance < config.enemy_separation_distance:
                away = _normalize_or_zero(enemy[0] - other_pos[0], enemy[1] - other_pos[1])
                weight = max(distance, 1.0)
                sep_x += away[0] / weight
                sep_y += away[1] / weight
                neighbours += 1
        if neighbours:
            sep_x = sep_x / neighbours * config.enemy_separation_force
            sep_y = sep_y / neighbours * config.enemy_separation_force

        move_x = move_y = 0.0
        if path.path_status in (PathStatus.DIRECT_PATH, PathStatus.FOLLOWING_PATH):
            factor = _speed_factor(nearest_player, config)
            move_x = direction[0] * speed * factor
            move_y = direction[1] * speed * factor
            if path.path_status is PathStatus.FOLLOWING_PATH:
                if path.waypoints:
                    if _distance(enemy, path.waypoints[0]) < config.waypoint_reach_distance:
                        path.waypoints.popleft()
                        if not path.waypoints:
                            path.path_status = PathStatus.DIRECT_PATH
                else:
                    path.path_status = PathStatus.DIRECT_PATH

        vx, vy = move_x + sep_x, move_y + sep_y
        agent.velocity = (vx, vy)
        if vx * vx + vy * vy > 0.01:
            x, y, z = agent.position
            agent.position = (x + vx * FIXED_TIMESTEP, y + vy * FIXED_TIMESTEP, z)
            if vx > 0.1:
                agent.facing = FacingDirection.RIGHT
            elif vx < -0.1:
                agent.facing = FacingDirection.LEFT