"""Player progression: the unlock level that gates which pot spawn points are active."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Progression:
    """Current unlock level of the player."""

    level: int = 0

    def level_up(self, levels: int = 1) -> int:
        self.level += max(0, levels)
        return self.level

    def has_unlocked(self, required_level: int) -> bool:
        return self.level >= required_level
