"""
Board - Grid extent, obstacle occupancy and the unit roster.

Occupancy is a dense boolean grid that marks obstacle cells only.
Units never mark cells occupied, so two units may share a cell.
The board owns every unit record; each search ply works on its own
copy so sibling branches never see each other's mutations.
"""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from skirmish.units import Faction, Obstacle, Unit


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Tuple[int, int]]:
    """Grid cells on the straight line from (x0, y0) to (x1, y1), inclusive."""
    cells = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        cells.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy
    return cells


class Board:
    """Bounded grid with static obstacles and a fixed unit roster."""

    def __init__(self, width: int, height: int,
                 units: Iterable[Unit] = (),
                 obstacles: Iterable[Obstacle] = (),
                 occupancy: Optional[np.ndarray] = None):
        self.width = width
        self.height = height
        self.obstacles: List[Obstacle] = list(obstacles)
        self.units: Dict[int, Unit] = {u.unit_id: u for u in units}

        if occupancy is None:
            occupancy = np.zeros((height, width), dtype=np.bool_)
            for ob in self.obstacles:
                occupancy[ob.y, ob.x] = True
        self.occupancy = occupancy

        # Rosters are fixed at construction; order is insertion order
        self.rosters: Dict[Faction, List[int]] = {
            faction: [u.unit_id for u in self.units.values() if u.faction is faction]
            for faction in Faction
        }

    def copy(self) -> 'Board':
        """Independent board: every unit record and the occupancy grid copied."""
        return Board(self.width, self.height,
                     units=[u.copy() for u in self.units.values()],
                     obstacles=self.obstacles,
                     occupancy=self.occupancy.copy())

    # -- spatial queries -------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_obstacle(self, x: int, y: int) -> bool:
        return bool(self.occupancy[y, x])

    def can_enter(self, x: int, y: int) -> bool:
        """In bounds and not an obstacle cell. Units are not considered."""
        return self.in_bounds(x, y) and not self.is_obstacle(x, y)

    @property
    def has_obstacles(self) -> bool:
        return bool(self.occupancy.any())

    @staticmethod
    def approach_distance(a: Unit, b: Unit) -> int:
        return a.approach_distance(b)

    @staticmethod
    def range_distance(a: Unit, b: Unit) -> int:
        return a.range_distance(b)

    def obstacle_between(self, a: Unit, b: Unit) -> bool:
        """Whether any obstacle lies in the bounding rectangle of a and b."""
        x0, x1 = sorted((a.x, b.x))
        y0, y1 = sorted((a.y, b.y))
        return bool(self.occupancy[y0:y1 + 1, x0:x1 + 1].any())

    def line_blocked(self, a: Unit, b: Unit) -> bool:
        """Whether the straight line from a to b crosses an obstacle cell."""
        for x, y in bresenham_line(a.x, a.y, b.x, b.y):
            if self.in_bounds(x, y) and self.occupancy[y, x]:
                return True
        return False

    # -- roster queries --------------------------------------------------

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        return self.units.get(unit_id)

    def alive_units(self, faction: Faction) -> List[Unit]:
        """Living units of a faction in roster order. Never cached."""
        return [self.units[uid] for uid in self.rosters[faction]
                if self.units[uid].is_alive]

    def enemies_in_range(self, unit: Unit) -> List[Unit]:
        return [e for e in self.alive_units(unit.faction.opponent)
                if unit.in_attack_range(e)]

    def nearest_enemy(self, unit: Unit) -> Optional[Unit]:
        """Closest living enemy by approach distance; first in roster on ties."""
        enemies = self.alive_units(unit.faction.opponent)
        if not enemies:
            return None
        return min(enemies, key=unit.approach_distance)

    # -- mutation --------------------------------------------------------

    def apply_move(self, unit_id: int, dx: int, dy: int):
        """Shift a unit by (dx, dy). Legality is the caller's job."""
        unit = self.units[unit_id]
        unit.x += dx
        unit.y += dy

    def apply_attack(self, attacker_id: int, target_id: int):
        """Deal the attacker's damage to the target; no-op if either is dead."""
        attacker = self.units.get(attacker_id)
        target = self.units.get(target_id)
        if attacker is None or target is None:
            return
        if not attacker.is_alive or not target.is_alive:
            return
        target.take_damage(attacker.damage)
