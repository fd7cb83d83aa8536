"""
Action System - Individual unit actions and joint actions.

Each acting unit is given exactly one action per ply:
  MOVE one cell in a cardinal direction, or
  ATTACK a living enemy by id.

A joint action maps unit id -> Action for every living unit of the
faction to move.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class ActionType(IntEnum):
    MOVE = 1
    ATTACK = 5


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


# Direction offsets: (dx, dy)
DIR_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Action:
    """A single action assigned to a unit."""
    unit_id: int
    action_type: ActionType
    direction: Optional[Direction] = None   # For move
    target_id: Optional[int] = None         # For attack

    @classmethod
    def move(cls, unit_id: int, direction: Direction) -> 'Action':
        return cls(unit_id=unit_id, action_type=ActionType.MOVE,
                   direction=direction)

    @classmethod
    def attack(cls, unit_id: int, target_id: int) -> 'Action':
        return cls(unit_id=unit_id, action_type=ActionType.ATTACK,
                   target_id=target_id)

    @property
    def is_attack(self) -> bool:
        return self.action_type == ActionType.ATTACK

    def offset(self) -> Tuple[int, int]:
        """Cell offset of a move action."""
        if self.direction is None:
            raise ValueError(f"Action for unit {self.unit_id} has no direction")
        return DIR_OFFSETS[self.direction]

    def __str__(self) -> str:
        if self.is_attack:
            return f"{self.unit_id}->attack({self.target_id})"
        return f"{self.unit_id}->move({self.direction.name})"


JointAction = Dict[int, Action]


def count_attacks(joint: JointAction) -> int:
    return sum(1 for a in joint.values() if a.is_attack)


def is_all_attack(joint: JointAction) -> bool:
    return len(joint) > 0 and count_attacks(joint) == len(joint)


def is_pure_move(joint: JointAction) -> bool:
    return count_attacks(joint) == 0


def describe(joint: JointAction) -> str:
    """Compact text form of a joint action for logs and the CLI."""
    if not joint:
        return "(no action)"
    return ", ".join(str(a) for a in joint.values())
