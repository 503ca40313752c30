"""Deterministic enemy spawning from spawner points."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

GLOBAL_MAX_ENEMIES = 20


class SpawnRng(Protocol):
    """Deterministic random source shared by all peers."""

    def next_f32(self) -> float: ...

    def next_u32(self) -> int: ...


@dataclass(frozen=True)
class SpawnerSettings:
    """How a spawner point behaves."""

    enemy_types: tuple[str, ...]
    min_spawn_distance: float
    spawn_radius: float
    max_cooldown: int


@dataclass
class EnemySpawnerState:
    """Changing state of a spawner, counted in frames."""

    cooldown_remaining: int = 0
    last_spawn_frame: int = 0
    active: bool = True


@dataclass(frozen=True)
class SpawnRequest:
    """An enemy to create this frame."""

    enemy_type: str
    position: tuple[float, float, float]


def spawn_from_spawners(
    spawners: Iterable[tuple[Sequence[float], SpawnerSettings, EnemySpawnerState]],
    player_positions: Sequence[Sequence[float]],
    enemy_count: int,
    frame: int,
    rng: SpawnRng,
) -> Optional[SpawnRequest]:
    """Run one frame of spawning and return at most one enemy to create.

    ``spawners`` holds (position, settings, state) triples, visited in order.
    Spawners on cooldown count it down; the first ready spawner far enough
    from every player spawns and starts its cooldown.
    """
    if not player_positions or enemy_count >= GLOBAL_MAX_ENEMIES:
        return None

    for position, settings, state in spawners:
        if not state.active or state.cooldown_remaining > 0:
            if state.cooldown_remaining > 0:
                state.cooldown_remaining -= 1
            continue

        sx, sy = float(position[0]), float(position[1])
        nearest = min(math.hypot(sx - p[0], sy - p[1]) for p in player_positions)
        if nearest < settings.min_spawn_distance:
            continue

        if settings.spawn_radius > 0.0:
            angle = rng.next_f32() * math.tau
            distance = rng.next_f32() * settings.spawn_radius
            spawn_pos = (sx + math.cos(angle) * distance, sy + math.sin(angle) * distance, 0.0)
        else:
            z = float(position[2]) if len(position) > 2 else 0.0
            spawn_pos = (sx, sy, z)

        if not settings.enemy_types:
            raise ValueError("spawner has no enemy types")
        enemy_type = settings.enemy_types[rng.next_u32() % len(settings.enemy_types)]

        state.cooldown_remaining = settings.max_cooldown
        state.last_spawn_frame = frame
        return SpawnRequest(enemy_type=enemy_type, position=spawn_pos)
    return None