"""Frame-based dash movement state."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class DashState:
    """Progress and cooldown of a character's dash, counted in frames."""

    is_dashing: bool = False
    dash_direction: tuple[float, float] = (0.0, 0.0)
    dash_frames_remaining: int = 0
    dash_cooldown_remaining: int = 0
    dash_distance_per_frame: float = 0.0
    dash_start_position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    dash_total_distance: float = 0.0

    def can_dash(self) -> bool:
        return not self.is_dashing and self.dash_cooldown_remaining == 0

    def start_dash(
        self,
        direction: tuple[float, float],
        start_position: tuple[float, float, float],
        total_distance: float,
        duration_frames: int,
    ) -> None:
        """Begin a dash along ``direction``; raise ValueError for a zero direction or duration."""
        length = math.hypot(direction[0], direction[1])
        if length == 0.0:
            raise ValueError("dash direction must be non-zero")
        if duration_frames <= 0:
            raise ValueError("dash duration must be positive")
        self.is_dashing = True
        self.dash_direction = (direction[0] / length, direction[1] / length)
        self.dash_frames_remaining = duration_frames
        self.dash_start_position = tuple(float(c) for c in start_position)
        self.dash_total_distance = total_distance
        self.dash_distance_per_frame = total_distance / duration_frames

    def update(self) -> None:
        """Advance one frame: count down the dash and the cooldown."""
        if self.is_dashing:
            self.dash_frames_remaining = max(0, self.dash_frames_remaining - 1)
            if self.dash_frames_remaining == 0:
                self.is_dashing = False
        if self.dash_cooldown_remaining > 0:
            self.dash_cooldown_remaining -= 1

    def set_cooldown(self, cooldown_frames: int) -> None:
        self.dash_cooldown_remaining = cooldown_frames