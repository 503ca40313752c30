"""Player input encoding and the per-frame movement that consumes it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Iterable, Optional, Sequence

from alacod.animation import FacingDirection
from alacod.character import MovementConfig, SprintState
from alacod.collider import Circle, Collider, CollisionSettings, is_colliding
from alacod.dash import DashState

FIXED_TIMESTEP = 1.0 / 60.0
PAN_FACING_THRESHOLD = 5
I16_MIN = -32768
I16_MAX = 32767


class InputButton(IntFlag):
    """Bits of the buttons field sent each frame."""

    NONE = 0
    UP = 1 << 0
    DOWN = 1 << 1
    LEFT = 1 << 2
    RIGHT = 1 << 3
    RELOAD = 1 << 4
    SWITCH_WEAPON_MODE = 1 << 5
    SPRINT = 1 << 6
    DASH = 1 << 7
    MODIFIER = 1 << 8


_MOVE_BUTTONS = InputButton.UP | InputButton.DOWN | InputButton.LEFT | InputButton.RIGHT


@dataclass(frozen=True)
class BoxInput:
    """One player's input for one frame; pan is the pointer offset from the player."""

    buttons: InputButton = InputButton.NONE
    pan_x: int = 0
    pan_y: int = 0
    fire: bool = False
    switch_weapon: bool = False


class PlayerAction(Enum):
    PAN = "Pan"
    MOVE_UP = "MoveUp"
    MOVE_DOWN = "MoveDown"
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    INTERACTION = "Interaction"
    SPRINT = "Sprint"
    DASH = "Dash"
    SWITCH_WEAPON = "SwitchWeapon"
    SWITCH_WEAPON_MODE = "SwitchWeaponMode"
    RELOAD = "Reload"
    MODIFIER = "Modifier"
    POINTER_POSITION = "PointerPosition"
    POINTER_CLICK = "PointerClick"
    SWITCH_LOCK_MODE = "SwitchLockMode"
    SWITCH_TO_UNLOCK_MODE = "SwitchToUnlockMode"
    SWITCH_TARGET_PLAYER = "SwitchTargetPlayer"
    MOVE_CAMERA_UP = "MoveCameraUp"
    MOVE_CAMERA_DOWN = "MoveCameraDown"
    MOVE_CAMERA_LEFT = "MoveCameraLeft"
    MOVE_CAMERA_RIGHT = "MoveCameraRight"


_BINDINGS: tuple[tuple[PlayerAction, str], ...] = (
    (PlayerAction.MOVE_UP, "KeyW"),
    (PlayerAction.MOVE_CAMERA_UP, "ArrowUp"),
    (PlayerAction.MOVE_DOWN, "KeyS"),
    (PlayerAction.MOVE_CAMERA_DOWN, "ArrowDown"),
    (PlayerAction.MOVE_LEFT, "KeyA"),
    (PlayerAction.MOVE_CAMERA_LEFT, "ArrowLeft"),
    (PlayerAction.MOVE_RIGHT, "KeyD"),
    (PlayerAction.MOVE_RIGHT, "ArrowRight"),
    (PlayerAction.INTERACTION, "KeyH"),
    (PlayerAction.SWITCH_WEAPON, "Tab"),
    (PlayerAction.SWITCH_WEAPON_MODE, "KeyZ"),
    (PlayerAction.RELOAD, "KeyR"),
    (PlayerAction.MOVE_CAMERA_RIGHT, "ArrowRight"),
    (PlayerAction.INTERACTION, "KeyH"),
    (PlayerAction.SPRINT, "ShiftLeft"),
    (PlayerAction.DASH, "KeyC"),
    (PlayerAction.MODIFIER, "ControlLeft"),
    (PlayerAction.MOVE_UP, "DPadUp"),
    (PlayerAction.MOVE_DOWN, "DPadDown"),
    (PlayerAction.MOVE_LEFT, "DPadLeft"),
    (PlayerAction.MOVE_RIGHT, "DPadRight"),
    (PlayerAction.INTERACTION, "North"),
    (PlayerAction.RELOAD, "West"),
    (PlayerAction.POINTER_CLICK, "MouseLeft"),
    (PlayerAction.SWITCH_LOCK_MODE, "KeyP"),
    (PlayerAction.SWITCH_TO_UNLOCK_MODE, "KeyO"),
    (PlayerAction.PAN, "GamepadLeftStick"),
)

_ACTION_BUTTONS = {
    PlayerAction.MOVE_UP: InputButton.UP,
    PlayerAction.MOVE_DOWN: InputButton.DOWN,
    PlayerAction.MOVE_LEFT: InputButton.LEFT,
    PlayerAction.MOVE_RIGHT: InputButton.RIGHT,
    PlayerAction.SWITCH_WEAPON_MODE: InputButton.SWITCH_WEAPON_MODE,
    PlayerAction.RELOAD: InputButton.RELOAD,
    PlayerAction.SPRINT: InputButton.SPRINT,
    PlayerAction.DASH: InputButton.DASH,
    PlayerAction.MODIFIER: InputButton.MODIFIER,
}


def default_bindings() -> dict[PlayerAction, tuple[str, ...]]:
    """Return the default inputs bound to each action, without duplicates, in binding order."""
    bindings: dict[PlayerAction, list[str]] = {}
    for action, key in _BINDINGS:
        keys = bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
    return {action: tuple(keys) for action, keys in bindings.items()}


def _round(value: float) -> float:
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


def _pan_component(value: float) -> int:
    return int(min(max(_round(value), I16_MIN), I16_MAX))


def encode_actions(
    pressed: Iterable[PlayerAction], pan: Optional[Sequence[float]] = None
) -> BoxInput:
    """Pack pressed actions and the pointer offset from the player into a BoxInput."""
    actions = set(pressed)
    buttons = InputButton.NONE
    for action in actions:
        buttons |= _ACTION_BUTTONS.get(action, InputButton.NONE)
    pan_x, pan_y = (0, 0) if pan is None else (_pan_component(pan[0]), _pan_component(pan[1]))
    return BoxInput(
        buttons=buttons,
        pan_x=pan_x,
        pan_y=pan_y,
        fire=PlayerAction.POINTER_CLICK in actions,
        switch_weapon=PlayerAction.SWITCH_WEAPON in actions,
    )


def facing_direction(box_input: BoxInput) -> FacingDirection:
    """Face the pointer when it is far enough sideways, else the movement direction."""
    if box_input.pan_x > PAN_FACING_THRESHOLD:
        return FacingDirection.RIGHT
    if box_input.pan_x < -PAN_FACING_THRESHOLD:
        return FacingDirection.LEFT
    if box_input.buttons & InputButton.RIGHT:
        return FacingDirection.RIGHT
    if box_input.buttons & InputButton.LEFT:
        return FacingDirection.LEFT
    return FacingDirection.RIGHT


@dataclass
class CharacterState:
    """The simulated state of one player character."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: tuple[float, float] = (0.0, 0.0)
    dash: DashState = field(default_factory=DashState)
    sprint: SprintState = field(default_factory=SprintState)
    facing: FacingDirection = FacingDirection.RIGHT
    cursor: tuple[int, int] = (0, 0)
    collider: Collider = field(default_factory=lambda: Collider(Circle(1.0)))
    layer: int = 3


def apply_input(state: CharacterState, box_input: BoxInput, config: MovementConfig) -> None:
    """Advance dash, sprint, facing and velocity of ``state`` by one frame of input."""
    dash = state.dash
    dash.update()

    if dash.is_dashing:
        completed = 1.0 - dash.dash_frames_remaining / config.dash_duration_frames
        dx, dy = dash.dash_direction
        sx, sy, sz = dash.dash_start_position
        reach = dash.dash_total_distance * completed
        state.position = (sx + dx * reach, sy + dy * reach, sz)
        state.velocity = (0.0, 0.0)
        return

    buttons = box_input.buttons
    if buttons & InputButton.DASH and dash.can_dash():
        look_x, look_y = float(box_input.pan_x), float(box_input.pan_y)
        if look_x * look_x + look_y * look_y > 1.0:
            direction = (look_x, look_y)
        else:
            direction = (float(state.facing.to_int()), 0.0)
        if buttons & InputButton.MODIFIER:
            direction = (-direction[0], -direction[1])
        dash.start_dash(direction, state.position, config.dash_distance, config.dash_duration_frames)
        dash.set_cooldown(config.dash_cooldown_frames)
        state.velocity = (0.0, 0.0)
        return

    sprint = state.sprint
    sprint.is_sprinting = bool(buttons & InputButton.SPRINT)
    if sprint.is_sprinting:
        sprint.sprint_factor = min(sprint.sprint_factor + config.sprint_acceleration_per_frame, 1.0)
    else:
        sprint.sprint_factor = max(sprint.sprint_factor - config.sprint_deceleration_per_frame, 0.0)

    dir_x = (1.0 if buttons & InputButton.RIGHT else 0.0) - (1.0 if buttons & InputButton.LEFT else 0.0)
    dir_y = (1.0 if buttons & InputButton.UP else 0.0) - (1.0 if buttons & InputButton.DOWN else 0.0)

    state.facing = facing_direction(box_input)
    state.cursor = (box_input.pan_x, box_input.pan_y)

    if dir_x == 0.0 and dir_y == 0.0:
        return
    multiplier = 1.0 + (config.sprint_multiplier - 1.0) * sprint.sprint_factor
    length = math.hypot(dir_x, dir_y)
    step = config.acceleration * multiplier * FIXED_TIMESTEP / length
    vx = state.velocity[0] + dir_x * step
    vy = state.velocity[1] + dir_y * step
    max_speed = config.max_speed * multiplier
    speed = math.hypot(vx, vy)
    if speed > max_speed:
        scale = max_speed / speed
        vx, vy = vx * scale, vy * scale
    state.velocity = (vx, vy)


def apply_friction(state: CharacterState, box_input: BoxInput, config: MovementConfig) -> None:
    """Slow a character that is not pressing any movement button."""
    if box_input.buttons & _MOVE_BUTTONS:
        return
    vx, vy = state.velocity
    if vx * vx + vy * vy <= 0.1:
        return
    factor = max(1.0 - config.friction * FIXED_TIMESTEP, 0.0)
    vx, vy = vx * factor, vy * factor
    if vx * vx + vy * vy < 1.0:
        vx, vy = 0.0, 0.0
    state.velocity = (vx, vy)


def move_character(
    state: CharacterState,
    walls: Iterable[tuple[Sequence[float], Collider, int]],
    settings: CollisionSettings,
) -> bool:
    """Move by one frame of velocity unless a colliding wall is in the way.

    ``walls`` holds (position, collider, layer) triples. A blocked move
    stops the character and returns False.
    """
    x, y, z = state.position
    vx, vy = state.velocity
    new_position = (_round(x + vx * FIXED_TIMESTEP), _round(y + vy * FIXED_TIMESTEP), _round(z))
    for wall_pos, wall_collider, wall_layer in walls:
        if not settings.collides(state.layer, wall_layer):
            continue
        if is_colliding(new_position, state.collider, wall_pos, wall_collider):
            state.velocity = (0.0, 0.0)
            return False
    state.position = new_position
    return True


def animation_state_for(velocity: Sequence[float]) -> str:
    """Return "Run" when the character moves noticeably, else "Idle"."""
    return "Run" if velocity[0] ** 2 + velocity[1] ** 2 > 0.5 else "Idle"