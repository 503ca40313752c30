import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from alacod.animation import FacingDirection
from alacod.character import MovementConfig
from alacod.collider import Circle, Collider, CollisionSettings, Rectangle
from alacod.input import (
    BoxInput,
    CharacterState,
    InputButton,
    PlayerAction,
    animation_state_for,
    apply_friction,
    apply_input,
    default_bindings,
    encode_actions,
    facing_direction,
    move_character,
)


def _config(**overrides):
    values = dict(
        acceleration=600.0,
        max_speed=120.0,
        friction=10.0,
        sprint_multiplier=2.0,
        sprint_acceleration_per_frame=0.5,
        sprint_deceleration_per_frame=0.5,
        dash_distance=40.0,
        dash_duration_frames=4,
        dash_cooldown_frames=20,
    )
    values.update(overrides)
    return MovementConfig(**values)


@pytest.mark.parametrize(
    "action, expected_bits",
    [
        (PlayerAction.MOVE_UP, 1),
        (PlayerAction.MOVE_RIGHT, 8),
        (PlayerAction.MODIFIER, 256),
    ],
)
def test_button_bits_match_wire_format(action, expected_bits):
    box = encode_actions([action], (0.0, 0.0))
    assert box.buttons == expected_bits


def test_default_bindings():
    bindings = default_bindings()
    assert bindings[PlayerAction.MOVE_RIGHT] == ("KeyD", "ArrowRight", "DPadRight")
    assert bindings[PlayerAction.INTERACTION] == ("KeyH", "North")
    assert bindings[PlayerAction.POINTER_CLICK] == ("MouseLeft",)
    assert PlayerAction.SWITCH_TARGET_PLAYER not in bindings


def test_encode_actions_sets_bits_and_flags():
    box = encode_actions(
        [PlayerAction.MOVE_UP, PlayerAction.DASH, PlayerAction.POINTER_CLICK], (3.4, -2.6)
    )
    assert box.buttons == InputButton.UP | InputButton.DASH
    assert box.fire is True
    assert box.switch_weapon is False
    assert (box.pan_x, box.pan_y) == (3, -3)


def test_encode_actions_clamps_pan_to_i16():
    box = encode_actions([], (1e9, -1e9))
    assert (box.pan_x, box.pan_y) == (32767, -32768)


def test_encode_actions_rounds_half_away_from_zero():
    box = encode_actions([PlayerAction.SWITCH_WEAPON], (0.5, -0.5))
    assert (box.pan_x, box.pan_y) == (1, -1)
    assert box.switch_weapon is True


def test_facing_prefers_pointer_then_buttons():
    assert facing_direction(BoxInput(pan_x=6, buttons=InputButton.LEFT)) is FacingDirection.RIGHT
    assert facing_direction(BoxInput(pan_x=-6)) is FacingDirection.LEFT
    assert facing_direction(BoxInput(pan_x=5, buttons=InputButton.LEFT)) is FacingDirection.LEFT
    assert facing_direction(BoxInput()) is FacingDirection.RIGHT


def test_dash_starts_in_facing_direction():
    state = CharacterState(facing=FacingDirection.LEFT, velocity=(50.0, 0.0))
    apply_input(state, BoxInput(buttons=InputButton.DASH), _config())
    assert state.dash.is_dashing
    assert state.dash.dash_direction == (-1.0, 0.0)
    assert state.dash.dash_cooldown_remaining == 20
    assert state.velocity == (0.0, 0.0)


def test_reverse_dash_with_modifier():
    state = CharacterState()
    apply_input(state, BoxInput(buttons=InputButton.DASH | InputButton.MODIFIER, pan_x=0, pan_y=10), _config())
    assert state.dash.dash_direction == (0.0, -1.0)


def test_dash_moves_monotonically_within_distance():
    config = _config()
    state = CharacterState()
    dash = BoxInput(buttons=InputButton.DASH)
    apply_input(state, dash, config)
    xs = []
    for _ in range(config.dash_duration_frames):
        apply_input(state, BoxInput(), config)
        xs.append(state.position[0])
    assert xs == sorted(xs)
    assert 0.0 < xs[-1] <= config.dash_distance
    assert not state.dash.is_dashing
    assert not state.dash.can_dash()


def test_sprint_factor_is_clamped():
    config = _config()
    state = CharacterState()
    for _ in range(5):
        apply_input(state, BoxInput(buttons=InputButton.SPRINT), config)
    assert state.sprint.sprint_factor == 1.0
    assert state.sprint.is_sprinting
    for _ in range(5):
        apply_input(state, BoxInput(), config)
    assert state.sprint.sprint_factor == 0.0


@given(
    st.lists(
        st.sampled_from(
            [InputButton.UP, InputButton.RIGHT | InputButton.DOWN, InputButton.LEFT | InputButton.SPRINT]
        ),
        min_size=1,
        max_size=60,
    )
)
def test_speed_never_exceeds_sprint_max(buttons):
    config = _config()
    state = CharacterState()
    for b in buttons:
        apply_input(state, BoxInput(buttons=b), config)
        assert math.hypot(*state.velocity) <= config.max_speed * config.sprint_multiplier + 1e-9


def test_apply_input_records_cursor_and_facing():
    state = CharacterState()
    apply_input(state, BoxInput(pan_x=-20, pan_y=7), _config())
    assert state.cursor == (-20, 7)
    assert state.facing is FacingDirection.LEFT


def test_friction_slows_and_stops():
    config = _config()
    state = CharacterState(velocity=(30.0, 0.0))
    apply_friction(state, BoxInput(), config)
    assert 0.0 < state.velocity[0] < 30.0
    for _ in range(200):
        apply_friction(state, BoxInput(), config)
    assert state.velocity == (0.0, 0.0)


def test_no_friction_while_moving():
    state = CharacterState(velocity=(30.0, 0.0))
    apply_friction(state, BoxInput(buttons=InputButton.UP), _config())
    assert state.velocity == (30.0, 0.0)


def test_wall_blocks_movement():
    settings = CollisionSettings()
    state = CharacterState(velocity=(600.0, 0.0), collider=Collider(Circle(5.0)), layer=settings.player_layer)
    wall = ((10.0, 0.0, 0.0), Collider(Rectangle(10.0, 100.0)), settings.wall_layer)
    assert move_character(state, [wall], settings) is False
    assert state.position == (0.0, 0.0, 0.0)
    assert state.velocity == (0.0, 0.0)


def test_non_colliding_layer_is_ignored():
    settings = CollisionSettings()
    state = CharacterState(velocity=(600.0, 0.0), collider=Collider(Circle(5.0)), layer=settings.environment_layer)
    wall = ((10.0, 0.0, 0.0), Collider(Rectangle(10.0, 100.0)), settings.wall_layer)
    assert move_character(state, [wall], settings) is True
    assert state.position[0] == pytest.approx(10.0)
    assert state.velocity == (600.0, 0.0)


@pytest.mark.parametrize(
    "velocity, expected",
    [((0.0, 0.0), "Idle"), ((0.5, 0.5), "Idle"), ((1.0, 0.0), "Run"), ((0.0, -3.0), "Run")],
)
def test_animation_state_for(velocity, expected):
    assert animation_state_for(velocity) == expected