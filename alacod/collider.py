"""Collision shapes, layer settings and overlap tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence, Union

Vec2 = tuple[float, float]

LAYER_COUNT = 8


@dataclass(frozen=True)
class Circle:
    radius: float


@dataclass(frozen=True)
class Rectangle:
    width: float
    height: float


ColliderShape = Union[Circle, Rectangle]


@dataclass(frozen=True)
class Collider:
    """A shape placed at an offset from its entity's position."""

    shape: ColliderShape
    offset: Vec2 = (0.0, 0.0)


@dataclass(frozen=True)
class ColliderConfig:
    """Collider as described in a character configuration."""

    shape: ColliderShape
    offset: Vec2 = (0.0, 0.0)

    def to_collider(self) -> Collider:
        return Collider(shape=self.shape, offset=(float(self.offset[0]), float(self.offset[1])))


def _default_matrix() -> list[list[bool]]:
    matrix = [[False] * LAYER_COUNT for _ in range(LAYER_COUNT)]
    enemy, player, wall = 1, 3, 4
    for a, b in ((enemy, wall), (enemy, player), (wall, player)):
        matrix[a][b] = True
        matrix[b][a] = True
    return matrix


@dataclass
class CollisionSettings:
    """Layer numbers and which pairs of layers collide."""

    enemy_layer: int = 1
    environment_layer: int = 2
    player_layer: int = 3
    wall_layer: int = 4
    layer_matrix: list[list[bool]] = field(default_factory=_default_matrix)

    def collides(self, layer_a: int, layer_b: int) -> bool:
        """Return whether objects on ``layer_a`` are stopped by ``layer_b``."""
        for layer in (layer_a, layer_b):
            if not 0 <= layer < LAYER_COUNT:
                raise IndexError(f"collision layer {layer} out of range")
        return self.layer_matrix[layer_a][layer_b]


def _round(value: float) -> float:
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


def _placed(pos: Sequence[float], collider: Collider) -> Vec2:
    return (_round(pos[0] + collider.offset[0]), _round(pos[1] + collider.offset[1]))


def is_colliding(
    pos_a: Sequence[float], collider_a: Collider, pos_b: Sequence[float], collider_b: Collider
) -> bool:
    """Return whether two colliders at the given positions overlap.

    Positions may carry a third coordinate, which is ignored; centres are
    rounded to whole units before testing.
    """
    ax, ay = _placed(pos_a, collider_a)
    bx, by = _placed(pos_b, collider_b)
    shape_a, shape_b = collider_a.shape, collider_b.shape

    if isinstance(shape_a, Circle) and isinstance(shape_b, Circle):
        return math.hypot(ax - bx, ay - by) < shape_a.radius + shape_b.radius
    if isinstance(shape_a, Rectangle) and isinstance(shape_b, Rectangle):
        half_aw, half_ah = shape_a.width / 2.0, shape_a.height / 2.0
        half_bw, half_bh = shape_b.width / 2.0, shape_b.height / 2.0
        return (
            ax - half_aw <= bx + half_bw
            and ax + half_aw >= bx - half_bw
            and ay - half_ah <= by + half_bh
            and ay + half_ah >= by - half_bh
        )
    if isinstance(shape_a, Circle):
        return circle_rect_collision((ax, ay), shape_a.radius, (bx, by), shape_b.width, shape_b.height)
    return circle_rect_collision((bx, by), shape_b.radius, (ax, ay), shape_a.width, shape_a.height)


def circle_rect_collision(
    circle_pos: Sequence[float],
    circle_radius: float,
    rect_pos: Sequence[float],
    rect_width: float,
    rect_height: float,
) -> bool:
    """Return whether a circle overlaps an axis-aligned rectangle centred at ``rect_pos``."""
    half_w, half_h = rect_width / 2.0, rect_height / 2.0
    closest_x = min(max(circle_pos[0], rect_pos[0] - half_w), rect_pos[0] + half_w)
    closest_y = min(max(circle_pos[1], rect_pos[1] - half_h), rect_pos[1] + half_h)
    return math.hypot(circle_pos[0] - closest_x, circle_pos[1] - closest_y) < circle_radius