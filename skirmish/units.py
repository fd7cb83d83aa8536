"""
Unit System - Combatants and obstacles for the skirmish model.

A skirmish is a fixed-roster fight between two factions:
- GOOD: the controlled squad (maximizing side)
- BAD: the opposing squad (minimizing side)

Units are never removed from a board. Death is derived from health,
so unit ids stay stable across every ply of a search.
"""

import math
from enum import Enum
from dataclasses import dataclass
from typing import Tuple


class Faction(Enum):
    GOOD = "good"
    BAD = "bad"

    @property
    def opponent(self) -> 'Faction':
        return Faction.BAD if self is Faction.GOOD else Faction.GOOD


@dataclass
class Unit:
    """A combatant instance on the board."""
    unit_id: int
    faction: Faction
    x: int
    y: int
    hp: int
    max_hp: int
    damage: int
    attack_range: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def health_fraction(self) -> float:
        return self.hp / self.max_hp

    @property
    def damage_taken(self) -> int:
        return self.max_hp - self.hp

    def take_damage(self, damage: int):
        """Apply damage to this unit."""
        self.hp = max(0, self.hp - damage)

    def approach_distance(self, other: 'Unit') -> int:
        """Manhattan distance minus one: units in contact score 0."""
        return abs(self.x - other.x) + abs(self.y - other.y) - 1

    def range_distance(self, other: 'Unit') -> int:
        """Euclidean distance, floored, as used for attack legality."""
        return int(math.floor(math.hypot(abs(self.x - other.x),
                                         abs(self.y - other.y))))

    def in_attack_range(self, other: 'Unit') -> bool:
        return self.range_distance(other) <= self.attack_range

    def copy(self) -> 'Unit':
        return Unit(self.unit_id, self.faction, self.x, self.y,
                    self.hp, self.max_hp, self.damage, self.attack_range)


@dataclass(frozen=True)
class Obstacle:
    """Immovable resource/tree occupying one grid cell."""
    obstacle_id: int
    x: int
    y: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)
