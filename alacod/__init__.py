"""Deterministic game-logic core for a top-down co-op zombie shooter."""

__version__ = "0.0.1"

__all__ = [
    "animation",
    "camera",
    "character",
    "collider",
    "dash",
    "game",
    "input",
    "pathing",
    "spawning",
]