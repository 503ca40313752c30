"""Game camera: follow modes, smoothing, off-screen indicators and debug text."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Collection, Hashable, Iterable, Mapping, Optional, Sequence

from alacod.input import PlayerAction

Vec2 = tuple[float, float]

INDICATOR_Z = 10.0
_PLAYERS_LOCK_MARGIN = 1.1

_CAMERA_MOVES = {
    PlayerAction.MOVE_CAMERA_UP: (0.0, 1.0),
    PlayerAction.MOVE_CAMERA_DOWN: (0.0, -1.0),
    PlayerAction.MOVE_CAMERA_LEFT: (-1.0, 0.0),
    PlayerAction.MOVE_CAMERA_RIGHT: (1.0, 0.0),
}


@dataclass
class CameraSettings:
    """Tuning of the camera; speeds are per second, zoom is the projection scale."""

    free_move_speed: float = 500.0
    edge_margin: float = 0.05
    lerp_speed: float = 5.0
    max_zoom_out: float = 15.0
    min_zoom: float = 5.0
    default_player_zoom: float = 5.0
    player_padding: float = 100.0
    indicator_size: float = 20.0
    indicator_edge_distance: float = 20.0
    use_edge_detection: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CameraSettings":
        """Build settings from parsed data; every field is required."""
        values: dict[str, Any] = {}
        try:
            for spec in fields(cls):
                raw = data[spec.name]
                if spec.name == "use_edge_detection":
                    if not isinstance(raw, bool):
                        raise TypeError(f"{spec.name} must be a boolean")
                    values[spec.name] = raw
                else:
                    values[spec.name] = float(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid camera settings: {exc}") from exc
        return cls(**values)


class CameraMode(Enum):
    PLAYER_LOCK = "PlayerLock"
    PLAYERS_LOCK = "PlayersLock"
    UNLOCK = "Unlock"


@dataclass
class GameCamera:
    """What the camera is following and where it is heading."""

    mode: CameraMode = CameraMode.PLAYER_LOCK
    target_player_id: Optional[Hashable] = None
    target_position: Vec2 = (0.0, 0.0)
    target_zoom: float = 0.0

    def switch_lock_mode(self) -> None:
        """Toggle between following one player and framing all players."""
        if self.mode is CameraMode.PLAYER_LOCK:
            self.mode = CameraMode.PLAYERS_LOCK
        else:
            self.mode = CameraMode.PLAYER_LOCK

    def switch_unlock_mode(self) -> None:
        """Toggle between free movement and following one player."""
        if self.mode is CameraMode.UNLOCK:
            self.mode = CameraMode.PLAYER_LOCK
        else:
            self.mode = CameraMode.UNLOCK


@dataclass
class CameraView:
    """Where the camera currently is and its projection scale."""

    position: Vec2 = (0.0, 0.0)
    scale: float = 1.0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; both edges are inside."""

    min: Vec2
    max: Vec2

    def contains(self, point: Sequence[float]) -> bool:
        return (
            self.min[0] <= point[0] <= self.max[0]
            and self.min[1] <= point[1] <= self.max[1]
        )


def _clamp(value: float, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"empty clamp range [{low}, {high}]")
    return min(max(value, low), high)


def _normalized_cursor(cursor: Optional[Sequence[float]], window_size: Sequence[float]) -> Vec2:
    if cursor is None:
        return (0.0, 0.0)
    width, height = window_size
    return (
        (cursor[0] / width) * 2.0 - 1.0,
        ((height - cursor[1]) / height) * 2.0 - 1.0,
    )


def _free_move(
    settings: CameraSettings,
    pressed: Collection[PlayerAction],
    mouse: Vec2,
) -> Vec2:
    move_x = move_y = 0.0
    for action, (dx, dy) in _CAMERA_MOVES.items():
        if action in pressed:
            move_x += dx
            move_y += dy
    if settings.use_edge_detection:
        margin = settings.edge_margin
        if mouse[0] > 1.0 - margin:
            move_x += 1.0
        if mouse[0] < -1.0 + margin:
            move_x -= 1.0
        if mouse[1] > 1.0 - margin:
            move_y += 1.0
        if mouse[1] < -1.0 + margin:
            move_y -= 1.0
    length = math.hypot(move_x, move_y)
    if length > 0.0:
        move_x, move_y = move_x / length, move_y / length
    return (move_x, move_y)


def update_camera(
    camera: GameCamera,
    view: CameraView,
    settings: CameraSettings,
    dt: float,
    window_size: Sequence[float],
    players: Iterable[tuple[Hashable, Sequence[float], bool]],
    pressed: Collection[PlayerAction] = (),
    cursor: Optional[Sequence[float]] = None,
) -> None:
    """Advance the camera by ``dt`` seconds.

    ``players`` holds (player id, position, is local) triples; ``cursor`` is
    the pointer in window pixels with the origin at the top left, or None.
    The target follows the mode, then the view eases toward it.
    """
    if dt < 0.0:
        raise ValueError("time step cannot be negative")
    players = [(pid, (float(pos[0]), float(pos[1])), local) for pid, pos, local in players]

    if camera.target_player_id is None:
        camera.target_player_id = next((pid for pid, _, local in players if local), None)

    if camera.mode is CameraMode.PLAYER_LOCK:
        if camera.target_player_id is not None:
            target = next((pos for pid, pos, _ in players if pid == camera.target_player_id), None)
            if target is not None:
                camera.target_position = target
                camera.target_zoom = settings.min_zoom
    elif camera.mode is CameraMode.PLAYERS_LOCK:
        if players:
            pad = settings.player_padding
            min_x = min(pos[0] for _, pos, _ in players) - pad
            max_x = max(pos[0] for _, pos, _ in players) + pad
            min_y = min(pos[1] for _, pos, _ in players) - pad
            max_y = max(pos[1] for _, pos, _ in players) + pad
            required = max((max_x - min_x) / window_size[0], (max_y - min_y) / window_size[1])
            camera.target_zoom = _clamp(
                required * _PLAYERS_LOCK_MARGIN, settings.min_zoom, settings.max_zoom_out
            )
            camera.target_position = ((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)
    else:
        mouse = _normalized_cursor(cursor, window_size)
        move_x, move_y = _free_move(settings, pressed, mouse)
        step = settings.free_move_speed * dt
        tx, ty = camera.target_position
        camera.target_position = (tx + move_x * step, ty + move_y * step)
        camera.target_zoom = settings.min_zoom

    factor = settings.lerp_speed * dt
    cx, cy = view.position
    tx, ty = camera.target_position
    view.position = (cx + (tx - cx) * factor, cy + (ty - cy) * factor)
    view.scale = view.scale + (camera.target_zoom - view.scale) * factor


def _visible_rect(view: CameraView, window_size: Sequence[float]) -> Rect:
    half_w = window_size[0] * view.scale / 2.0
    half_h = window_size[1] * view.scale / 2.0
    cx, cy = view.position
    return Rect(min=(cx - half_w, cy - half_h), max=(cx + half_w, cy + half_h))


def indicator_placements(
    camera: GameCamera,
    view: CameraView,
    settings: CameraSettings,
    window_size: Sequence[float],
    players: Iterable[tuple[Hashable, Sequence[float], bool]],
) -> list[tuple[Hashable, tuple[float, float, float], float]]:
    """Place an arrow at the screen edge for every player out of view.

    Returns (player id, arrow position, arrow angle in radians) triples. The
    followed player in single-player lock never gets one.
    """
    rect = _visible_rect(view, window_size)
    cx, cy = view.position
    edge = settings.indicator_edge_distance
    placements = []
    for pid, pos, _local in players:
        if camera.mode is CameraMode.PLAYER_LOCK and camera.target_player_id == pid:
            continue
        px, py = float(pos[0]), float(pos[1])
        if rect.contains((px, py)):
            continue
        angle = math.atan2(py - cy, px - cx)
        tangent = math.tan(angle)
        if abs(angle) < math.pi / 4.0:
            x, y = rect.max[0] - edge, cy + (rect.max[0] - cx) * tangent
        elif abs(angle) > 3.0 * math.pi / 4.0:
            x, y = rect.min[0] + edge, cy + (cx - rect.min[0]) * tangent
        elif angle > 0.0:
            x, y = cx + (rect.max[1] - cy) / tangent, rect.max[1] - edge
        else:
            x, y = cx + (cy - rect.min[1]) / tangent, rect.min[1] + edge
        x = _clamp(x, rect.min[0] + edge, rect.max[0] - edge)
        y = _clamp(y, rect.min[1] + edge, rect.max[1] - edge)
        placements.append((pid, (x, y, INDICATOR_Z), angle))
    return placements


def debug_text(camera: GameCamera, view: CameraView) -> str:
    """Return the one-line camera status shown in the debug overlay."""
    return (
        f"Camera: {camera.mode.value} | Zoom: {view.scale:.2f} | "
        f"Target: {camera.target_zoom:.2f} | "
        f"Pos: ({camera.target_position[0]:.1f}, {camera.target_position[1]:.1f})"
    )