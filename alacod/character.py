"""Character configuration, movement tuning and health bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from alacod.collider import Circle, ColliderConfig, ColliderShape, Rectangle

HEALTH_BAR_WIDTH = 30.0
HEALTH_BAR_HEIGHT = 3.0


@dataclass(frozen=True)
class MovementConfig:
    """Movement tuning of a character; frame counts are in simulation frames."""

    acceleration: float
    max_speed: float
    friction: float
    sprint_multiplier: float
    sprint_acceleration_per_frame: float
    sprint_deceleration_per_frame: float
    dash_distance: float
    dash_duration_frames: int
    dash_cooldown_frames: int


@dataclass
class SprintState:
    """Whether a character sprints and how far the sprint has ramped up (0 to 1)."""

    is_sprinting: bool = False
    sprint_factor: float = 0.0


@dataclass(frozen=True)
class HealthConfig:
    max: float


@dataclass
class Health:
    current: float = 0.0
    max: float = 0.0
    invulnerable_until_frame: Optional[int] = None

    @classmethod
    def from_config(cls, config: HealthConfig) -> "Health":
        """Return full health for the configured maximum."""
        return cls(current=config.max, max=config.max, invulnerable_until_frame=None)


class HitSource(Enum):
    ENTITY = "Entity"
    PLAYER = "Player"


@dataclass(frozen=True)
class HitBy:
    """What dealt a hit: an entity id or a player handle."""

    source: HitSource
    id: int


@dataclass
class DamageAccumulator:
    """Damage gathered during one frame, applied all at once."""

    total_damage: float = 0.0
    hit_count: int = 0
    last_hit_by: Optional[HitBy] = None


@dataclass(frozen=True)
class Death:
    last_hit_by: Optional[HitBy] = None


@dataclass(frozen=True)
class CharacterSkin:
    layers: dict[str, str] = field(default_factory=dict)


def _shape_from_data(data: Any) -> ColliderShape:
    if not isinstance(data, Mapping) or len(data) != 1:
        raise ValueError(f"collider shape must name exactly one kind: {data!r}")
    ((kind, params),) = data.items()
    if kind == "Circle":
        return Circle(radius=float(params["radius"]))
    if kind == "Rectangle":
        return Rectangle(width=float(params["width"]), height=float(params["height"]))
    raise ValueError(f"unknown collider shape {kind!r}")


@dataclass(frozen=True)
class CharacterConfig:
    """Everything needed to create one kind of character."""

    movement: MovementConfig
    asset_name_ref: str
    base_health: HealthConfig
    collider: ColliderConfig
    scale: float
    starting_skin: str
    skins: dict[str, CharacterSkin] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CharacterConfig":
        """Build a config from parsed data; raise ValueError when it is incomplete."""
        try:
            move = data["movement"]
            movement = MovementConfig(
                acceleration=float(move["acceleration"]),
                max_speed=float(move["max_speed"]),
                friction=float(move["friction"]),
                sprint_multiplier=float(move["sprint_multiplier"]),
                sprint_acceleration_per_frame=float(move["sprint_acceleration_per_frame"]),
                sprint_deceleration_per_frame=float(move["sprint_deceleration_per_frame"]),
                dash_distance=float(move["dash_distance"]),
                dash_duration_frames=int(move["dash_duration_frames"]),
                dash_cooldown_frames=int(move["dash_cooldown_frames"]),
            )
            collider_data = data["collider"]
            offset_x, offset_y = collider_data["offset"]
            collider = ColliderConfig(
                shape=_shape_from_data(collider_data["shape"]),
                offset=(float(offset_x), float(offset_y)),
            )
            skins = {
                str(name): CharacterSkin(
                    layers={str(k): str(v) for k, v in skin["layers"].items()}
                )
                for name, skin in data["skins"].items()
            }
            return cls(
                movement=movement,
                asset_name_ref=str(data["asset_name_ref"]),
                base_health=HealthConfig(max=float(data["base_health"]["max"])),
                collider=collider,
                scale=float(data["scale"]),
                starting_skin=str(data["starting_skin"]),
                skins=skins,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"invalid character config: {exc}") from exc


def apply_accumulated_damage(health: Health, accumulator: DamageAccumulator) -> Optional[Death]:
    """Subtract accumulated damage from ``health``.

    Returns a Death when health drops to zero or below, otherwise None.
    Nothing happens when no damage was accumulated.
    """
    if accumulator.total_damage <= 0.0:
        return None
    health.current -= accumulator.total_damage
    if health.current <= 0.0:
        return Death(last_hit_by=accumulator.last_hit_by)
    return None


def health_bar_size(health: Health) -> tuple[float, float]:
    """Return the health bar's width and height for the current health ratio."""
    if health.max <= 0.0:
        raise ValueError("maximum health must be positive")
    ratio = health.current / health.max
    return (HEALTH_BAR_WIDTH * ratio, HEALTH_BAR_HEIGHT)