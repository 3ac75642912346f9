from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 1

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line


@dataclass
class SpeedRules:
    """Gravity speed in rows per second, bounded to ``[min_speed, max_speed]``."""

    min_speed: int = 1
    max_speed: int = 20
    default_speed: int = 1

    def __post_init__(self) -> None:
        if self.min_speed < 1 or self.max_speed < self.min_speed:
            raise ValueError(f"invalid speed range [{self.min_speed}, {self.max_speed}]")
        if not self.min_speed <= self.default_speed <= self.max_speed:
            raise ValueError(f"default speed {self.default_speed} outside [{self.min_speed}, {self.max_speed}]")

    def clamp(self, speed: int) -> int:
        return max(self.min_speed, min(self.max_speed, int(speed)))

    def gravity_interval_ms(self, speed: int) -> float:
        return 1000.0 / self.clamp(speed)
