"""Game-wide state: application phases, version info, asset catalogue and frame counting."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator

DEFAULT_VERSION = "v0.0.0"
VERSION_ENV_VAR = "APP_VERSION"
FRAME_LIMIT = 2**32

_CHARACTER_DIR = "ZombieShooter/Sprites/Character"
_ZOMBIE_DIR = "ZombieShooter/Sprites/Zombie"

PLAYER_SPRITESHEET_CONFIG_PATH = f"{_CHARACTER_DIR}/player_sheet.ron"
PLAYER_SHIRT_SPRITESHEET_CONFIG_PATH = f"{_CHARACTER_DIR}/shirt_1_sheet.ron"
PLAYER_HAIR_SPRITESHEET_CONFIG_PATH = f"{_CHARACTER_DIR}/hair_1_sheet.ron"
PLAYER_ANIMATIONS_CONFIG_PATH = f"{_CHARACTER_DIR}/player_animation.ron"
PLAYER_CONFIG_PATH = f"{_CHARACTER_DIR}/player_config.ron"
SHADOW_SPRITESHEET_CONFIG_PATH = f"{_CHARACTER_DIR}/shadow_sheet.ron"
ZOMBIE_ANIMATIONS_CONFIG_PATH = f"{_ZOMBIE_DIR}/zombie_animation.ron"
WEAPONS_CONFIG_PATH = f"{_CHARACTER_DIR}/weapons.ron"
CAMERA_CONFIG_PATH = "camera.ron"


class AppState(Enum):
    """Phase the application is in."""

    LOADING = "Loading"
    LOBBY = "Lobby"
    IN_GAME = "InGame"


def _version_from_environment() -> str:
    return os.environ.get(VERSION_ENV_VAR, DEFAULT_VERSION)


@dataclass(frozen=True)
class GameInfo:
    """Build information shown in game; the version comes from APP_VERSION."""

    version: str = field(default_factory=_version_from_environment)


@dataclass(frozen=True)
class AssetCatalog:
    """Paths of every configuration asset the game needs before it can start."""

    spritesheets: dict[str, dict[str, str]]
    animations: dict[str, str]
    character_configs: dict[str, str]
    weapons: str
    camera: str

    @classmethod
    def create(cls) -> "AssetCatalog":
        """Return the catalogue of the game's built-in assets."""
        return cls(
            spritesheets={
                "player": {
                    "body": PLAYER_SPRITESHEET_CONFIG_PATH,
                    "shirt": PLAYER_SHIRT_SPRITESHEET_CONFIG_PATH,
                    "hair": PLAYER_HAIR_SPRITESHEET_CONFIG_PATH,
                    "shadow": SHADOW_SPRITESHEET_CONFIG_PATH,
                },
                "shotgun": {"body": f"{_CHARACTER_DIR}/shotgun_sheet.ron"},
                "pistol": {"body": f"{_CHARACTER_DIR}/pistol_sheet.ron"},
                "machine_gun": {"body": f"{_CHARACTER_DIR}/machine_gun_sheet.ron"},
                "zombie_1": {
                    "body": f"{_ZOMBIE_DIR}/zombie_sheet.ron",
                    "shadow": SHADOW_SPRITESHEET_CONFIG_PATH,
                },
                "zombie_2": {
                    "body": f"{_ZOMBIE_DIR}/zombie_hard_sheet.ron",
                    "shadow": SHADOW_SPRITESHEET_CONFIG_PATH,
                },
            },
            animations={
                "player": PLAYER_ANIMATIONS_CONFIG_PATH,
                "machine_gun": PLAYER_ANIMATIONS_CONFIG_PATH,
                "pistol": PLAYER_ANIMATIONS_CONFIG_PATH,
                "shotgun": PLAYER_ANIMATIONS_CONFIG_PATH,
                "zombie_1": ZOMBIE_ANIMATIONS_CONFIG_PATH,
                "zombie_2": ZOMBIE_ANIMATIONS_CONFIG_PATH,
            },
            character_configs={
                "player": PLAYER_CONFIG_PATH,
                "zombie_1": f"{_ZOMBIE_DIR}/zombie_config.ron",
                "zombie_2": f"{_ZOMBIE_DIR}/zombie_hard_config.ron",
            },
            weapons=WEAPONS_CONFIG_PATH,
            camera=CAMERA_CONFIG_PATH,
        )

    def _paths_in_order(self) -> Iterator[str]:
        for layers in self.spritesheets.values():
            yield from layers.values()
        yield from self.animations.values()
        yield from self.character_configs.values()
        yield self.weapons
        yield self.camera

    def all_paths(self) -> tuple[str, ...]:
        """Return every distinct asset path, in the order loading checks them."""
        return tuple(dict.fromkeys(self._paths_in_order()))


def loading_state(catalog: AssetCatalog, is_loaded: Callable[[str], bool]) -> AppState:
    """Return LOBBY once every catalogued asset is loaded, else LOADING."""
    if all(is_loaded(path) for path in catalog.all_paths()):
        return AppState.LOBBY
    return AppState.LOADING


@dataclass
class FrameCount:
    """Simulation frames elapsed; wraps like an unsigned 32-bit counter."""

    frame: int = 0

    def increase(self) -> None:
        self.frame = (self.frame + 1) % FRAME_LIMIT


def frame_counter_text(info: GameInfo, frame_count: FrameCount) -> str:
    """Return the version and frame line shown in the debug overlay."""
    return f"{info.version} : {frame_count.frame}"