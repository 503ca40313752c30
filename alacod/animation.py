"""Sprite-sheet animation: configuration, frame stepping and timing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

DEFAULT_FRAME_DURATION_MS = 1000
IDLE_STATE = "Idle"


class ConfigurableAnchor(Enum):
    """Sprite anchor as named in configuration files."""

    CENTER = "Center"
    BOTTOM_LEFT = "BottomLeft"
    BOTTOM_CENTER = "BottomCenter"
    BOTTOM_RIGHT = "BottomRight"
    CENTER_LEFT = "CenterLeft"
    CENTER_RIGHT = "CenterRight"
    TOP_LEFT = "TopLeft"
    TOP_CENTER = "TopCenter"
    TOP_RIGHT = "TopRight"

    def to_anchor(self) -> tuple[float, float]:
        """Return the anchor as a point relative to the sprite centre, in sprite units."""
        return _ANCHOR_POINTS[self]


_ANCHOR_POINTS = {
    ConfigurableAnchor.CENTER: (0.0, 0.0),
    ConfigurableAnchor.BOTTOM_LEFT: (-0.5, -0.5),
    ConfigurableAnchor.BOTTOM_CENTER: (0.0, -0.5),
    ConfigurableAnchor.BOTTOM_RIGHT: (0.5, -0.5),
    ConfigurableAnchor.CENTER_LEFT: (-0.5, 0.0),
    ConfigurableAnchor.CENTER_RIGHT: (0.5, 0.0),
    ConfigurableAnchor.TOP_LEFT: (-0.5, 0.5),
    ConfigurableAnchor.TOP_CENTER: (0.0, 0.5),
    ConfigurableAnchor.TOP_RIGHT: (0.5, 0.5),
}


@dataclass(frozen=True)
class SpriteSheetConfig:
    """Layout and placement of one sprite-sheet layer."""

    path: str
    tile_size: tuple[int, int]
    columns: int
    rows: int
    name: str
    scale: float
    offset_x: float
    offset_y: float
    offset_z: float
    animated: bool
    anchor: ConfigurableAnchor

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpriteSheetConfig":
        """Build a config from parsed data; raise ValueError when it is incomplete."""
        try:
            width, height = data["tile_size"]
            return cls(
                path=str(data["path"]),
                tile_size=(int(width), int(height)),
                columns=int(data["columns"]),
                rows=int(data["rows"]),
                name=str(data["name"]),
                scale=float(data["scale"]),
                offset_x=float(data["offset_x"]),
                offset_y=float(data["offset_y"]),
                offset_z=float(data["offset_z"]),
                animated=bool(data["animated"]),
                anchor=ConfigurableAnchor(data["anchor"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid sprite sheet config: {exc}") from exc


@dataclass(frozen=True)
class AnimationIndices:
    """Frame range of one animation; both ends inclusive."""

    start: int
    end: int


@dataclass(frozen=True)
class AnimationMapConfig:
    """Named animations sharing one frame duration."""

    frame_duration: int
    animations: dict[str, AnimationIndices] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnimationMapConfig":
        """Build a config from parsed data; raise ValueError when it is incomplete."""
        try:
            animations = {
                str(name): AnimationIndices(int(spec["start"]), int(spec["end"]))
                for name, spec in data["animations"].items()
            }
            return cls(frame_duration=int(data["frame_duration"]), animations=animations)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"invalid animation config: {exc}") from exc


class FacingDirection(Enum):
    """Horizontal direction a character faces."""

    LEFT = "Left"
    RIGHT = "Right"

    def to_int(self) -> int:
        """Return -1 for left and 1 for right."""
        return -1 if self is FacingDirection.LEFT else 1


def next_frame_index(config: AnimationMapConfig, state: str, index: int) -> int:
    """Return the frame following ``index`` for the animation named ``state``.

    An index outside the animation's range jumps to its start; an unknown
    state falls back to the start of the idle animation, or frame 0.
    """
    indices = config.animations.get(state)
    if indices is None:
        idle = config.animations.get(IDLE_STATE)
        return idle.start if idle is not None else 0
    if index < indices.start or index > indices.end:
        return indices.start
    span = indices.end - indices.start + 1
    return (index + 1 - indices.start) % span + indices.start


@dataclass
class AnimationTimer:
    """Repeating frame timer measured in milliseconds."""

    duration_ms: int = DEFAULT_FRAME_DURATION_MS
    elapsed_ms: int = 0

    def tick(self, elapsed_ms: int) -> bool:
        """Advance the timer; return True if it completed at least once."""
        if elapsed_ms < 0:
            raise ValueError("elapsed time cannot be negative")
        if self.duration_ms <= 0:
            self.elapsed_ms = 0
            return True
        self.elapsed_ms += elapsed_ms
        if self.elapsed_ms < self.duration_ms:
            return False
        self.elapsed_ms %= self.duration_ms
        return True

    def set_duration(self, duration_ms: int) -> None:
        """Change the duration and restart the timer."""
        if duration_ms < 0:
            raise ValueError("duration cannot be negative")
        self.duration_ms = duration_ms
        self.elapsed_ms = 0


@dataclass
class AnimatedCharacter:
    """Animation state of one character: its animated layers' frames, state and facing."""

    frames: dict[str, int] = field(default_factory=dict)
    state: str = IDLE_STATE
    facing: FacingDirection = FacingDirection.RIGHT
    timer: AnimationTimer = field(default_factory=AnimationTimer)

    def update(self, elapsed_ms: int, config: AnimationMapConfig) -> bool:
        """Advance time; step every layer's frame when the timer completes.

        A timer still at its default duration takes the config's frame
        duration. Returns whether the frames advanced.
        """
        finished = self.timer.tick(elapsed_ms)
        if finished:
            self.frames = {
                name: next_frame_index(config, self.state, index)
                for name, index in self.frames.items()
            }
        if (
            self.timer.duration_ms == DEFAULT_FRAME_DURATION_MS
            and config.frame_duration != DEFAULT_FRAME_DURATION_MS
        ):
            self.timer.set_duration(config.frame_duration)
        return finished

    def flip_x(self) -> bool:
        """Return whether sprites are drawn mirrored horizontally."""
        return self.facing is FacingDirection.LEFT