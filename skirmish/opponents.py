"""
Scripted Opponents - Bot controllers to play the skirmish against.

All implement: get_commands(snapshot, faction) -> List[Command]

- RandomAI: a uniformly random legal action per unit (seeded)
- RushAI: attack the weakest enemy in range, else close on the nearest
"""

import random
from typing import Any, Dict, List, Optional

from skirmish.actions import Action, Direction, DIR_OFFSETS, JointAction
from skirmish.adapters import Command, state_from_snapshot, to_commands
from skirmish.game_state import GameState
from skirmish.units import Faction, Unit


class BaseAI:
    """Base class for scripted controllers."""

    def get_commands(self, snapshot: Dict[str, Any], faction: Faction) -> List[Command]:
        state = state_from_snapshot(snapshot, to_move=faction)
        joint: JointAction = {}
        for unit in state.board.alive_units(faction):
            action = self.choose(state, unit)
            if action is not None:
                joint[unit.unit_id] = action
        return to_commands(joint)

    def choose(self, state: GameState, unit: Unit) -> Optional[Action]:
        return None


class RandomAI(BaseAI):
    """Selects a random legal action for each unit."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def choose(self, state: GameState, unit: Unit) -> Optional[Action]:
        actions = state.legal_actions(unit.unit_id)
        if not actions:
            return None
        return self.rng.choice(actions)


class RushAI(BaseAI):
    """Aggressive controller: focus fire the weakest target, otherwise advance."""

    def choose(self, state: GameState, unit: Unit) -> Optional[Action]:
        board = state.board
        targets = board.enemies_in_range(unit)
        if targets:
            weakest = min(targets, key=lambda t: t.hp)
            return Action.attack(unit.unit_id, weakest.unit_id)

        enemy = board.nearest_enemy(unit)
        if enemy is None:
            return None
        return self._move_toward(state, unit, enemy)

    def _move_toward(self, state: GameState, unit: Unit, enemy: Unit) -> Optional[Action]:
        best = None
        best_dist = None
        for d in Direction:
            dx, dy = DIR_OFFSETS[d]
            nx, ny = unit.x + dx, unit.y + dy
            if not state.board.can_enter(nx, ny):
                continue
            dist = abs(nx - enemy.x) + abs(ny - enemy.y)
            if best_dist is None or dist < best_dist:
                best, best_dist = d, dist
        if best is None:
            return None
        return Action.move(unit.unit_id, best)


OPPONENTS = {
    'random': RandomAI,
    'rush': RushAI,
}
