# alacod

The simulation core of a top-down co-op zombie shooter. It is made of plain
Python state objects and the deterministic rules that advance them by one
frame at a time. The package has no dependencies outside the standard library.

## Modules

- `alacod.animation`: sprite and animation configuration
  (`SpriteSheetConfig.from_dict`, `AnimationMapConfig.from_dict`,
  `ConfigurableAnchor`). It also does frame stepping: `next_frame_index`
  moves one frame forward within an animation's inclusive range, and an
  unknown state falls back to the start of `"Idle"`. The module also holds
  the repeating millisecond `AnimationTimer` and `AnimatedCharacter`, which
  advances all of its layers and reports `flip_x()` from its
  `FacingDirection`.
- `alacod.collider`: the `Circle` and `Rectangle` shapes, `Collider`,
  `ColliderConfig.to_collider()`, `is_colliding` and
  `circle_rect_collision`. Centres are rounded to whole units before the
  test. `CollisionSettings.collides(layer_a, layer_b)` checks the 8×8 layer
  matrix. By default enemies collide with walls and players, and walls with
  players.
- `alacod.dash`: `DashState`, which counts dash frames and cooldown
  (`can_dash`, `start_dash`, `update`, `set_cooldown`).
- `alacod.character`: `MovementConfig`, `SprintState`, `Health`
  (`Health.from_config`), `HitBy`, `DamageAccumulator`, `Death` and
  `CharacterConfig.from_dict`. `apply_accumulated_damage` returns a `Death`
  when health reaches zero. `health_bar_size` gives the bar's width and
  height.
- `alacod.input`: the `InputButton` bit flags and the per-frame `BoxInput`.
  `PlayerAction` and `default_bindings()` cover key bindings.
  `encode_actions` turns pressed actions and a pointer offset into a
  `BoxInput`. `facing_direction` gives the side a character faces. The
  per-frame player rules act on a `CharacterState`: `apply_input` (dash,
  sprint, acceleration), `apply_friction`, `move_character` (blocked by
  colliding walls) and `animation_state_for`.
- `alacod.pathing`: `PathStatus`, `PathfindingConfig`, `EnemyPath` and
  `EnemyAgent`.
  - `update_enemy_target` aims at the closest player on recalculation
    frames.
  - `check_direct_path` chooses a straight line when the target is near and
    nothing blocks it.
  - `calculate_path` plans a detour by probing several headings.
  - `move_enemies` steers every enemy, slows it near players and keeps
    enemies apart.
- `alacod.spawning`: `SpawnerSettings`, `EnemySpawnerState` and
  `SpawnRequest`. `spawn_from_spawners` returns at most one enemy per frame.
  It returns nothing when there are no players or when 20 enemies already
  exist.
- `alacod.camera`: `CameraSettings` (with `from_dict`), `CameraMode`,
  `GameCamera` (`switch_lock_mode`, `switch_unlock_mode`), `CameraView` and
  `Rect`.
  - `update_camera` follows one player, frames all players or moves freely,
    then eases the view toward its target.
  - `indicator_placements` places edge arrows for players that are out of
    view.
  - `debug_text` formats the camera's status line.
- `alacod.game`: `AppState`, and `GameInfo`, whose version comes from the
  `APP_VERSION` environment variable (default `v0.0.0`). It also has the
  asset path catalogue `AssetCatalog.create()` with `all_paths()`.
  `loading_state` returns `LOBBY` once every asset is loaded. `FrameCount`
  wraps at 2³², and `frame_counter_text` formats the frame line.

## Install

```
pip install .
pip install ".[test]"   # with pytest and hypothesis
```

## Example

```python
from alacod.collider import Circle, Collider, Rectangle, is_colliding
from alacod.dash import DashState

wall = Collider(Rectangle(125.0, 500.0))
player = Collider(Circle(10.0))
print(is_colliding((0.0, 0.0), player, (60.0, 0.0), wall))  # True

dash = DashState()
if dash.can_dash():
    dash.start_dash((1.0, 0.0), (0.0, 0.0, 0.0), 100.0, 10)
    dash.set_cooldown(30)
```

Movement and enemy rules use a fixed step of 1/60 s (`FIXED_TIMESTEP` in
`alacod.input`). Given the same inputs, they produce the same results.

## What it does not do

- It does not render, play audio, read a keyboard, mouse or gamepad, or
  connect to other players.
- It does not read configuration files. The `from_dict` constructors take
  data that has already been parsed. `AssetCatalog` lists paths but does not
  load them.
- It provides no random number generator. `calculate_path` needs an object
  with `next_f32()`. `spawn_from_spawners` needs `next_f32()` and
  `next_u32()`.
- It has no weapons or bullets, and it installs no command.

## Tests

```
pytest
```