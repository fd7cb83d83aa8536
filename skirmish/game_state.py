"""
Game State - One ply of the skirmish: a board plus the side to move.

Provides what adversarial search needs from the model:
- legal actions per unit
- successor generation over joint actions
- the transition function (copy board, then mutate the copy)
- a lazily computed, cached utility

Joint actions are enumerated for at most two acting units per faction:
one unit's actions singly, or the full cross product of two units'
action lists. Larger rosters are rejected when the state is built.
"""

from dataclasses import dataclass
from typing import List, Optional

from skirmish.actions import Action, ActionType, Direction, DIR_OFFSETS, JointAction
from skirmish.board import Board
from skirmish.errors import ConfigurationError
from skirmish.evaluation import EvaluationWeights, evaluate
from skirmish.units import Faction


MAX_ACTING_UNITS = 2


@dataclass
class GameStateChild:
    """A joint action and the state it leads to."""
    action: JointAction
    state: 'GameState'


class GameState:
    """Immutable-per-ply snapshot: owned board, side to move, cached utility."""

    def __init__(self, board: Board, to_move: Faction = Faction.GOOD,
                 weights: EvaluationWeights = EvaluationWeights(),
                 check_roster: bool = True):
        # Successors come from apply(), which never revives a unit
        if check_roster:
            self._check_roster(board)
        self.board = board
        self.to_move = to_move
        self.weights = weights
        self._utility: Optional[float] = None

    @staticmethod
    def _check_roster(board: Board):
        for faction in Faction:
            alive = len(board.alive_units(faction))
            if alive > MAX_ACTING_UNITS:
                raise ConfigurationError(
                    f"{faction.name} has {alive} living units; joint actions "
                    f"support at most {MAX_ACTING_UNITS} per faction"
                )

    @property
    def is_player_turn(self) -> bool:
        return self.to_move is Faction.GOOD

    @property
    def is_terminal(self) -> bool:
        return not (self.board.alive_units(Faction.GOOD)
                    and self.board.alive_units(Faction.BAD))

    def legal_actions(self, unit_id: int) -> List[Action]:
        """Moves into enterable cells (N, E, S, W), then attacks in roster order."""
        unit = self.board.get_unit(unit_id)
        if unit is None or not unit.is_alive:
            return []

        actions = []
        for d in Direction:
            dx, dy = DIR_OFFSETS[d]
            if self.board.can_enter(unit.x + dx, unit.y + dy):
                actions.append(Action.move(unit_id, d))
        for enemy in self.board.enemies_in_range(unit):
            actions.append(Action.attack(unit_id, enemy.unit_id))
        return actions

    def joint_actions(self) -> List[JointAction]:
        # Nothing to play once either side is wiped out
        if self.is_terminal:
            return []
        acting = self.board.alive_units(self.to_move)
        if len(acting) > MAX_ACTING_UNITS:
            raise ConfigurationError(
                f"{len(acting)} acting units for {self.to_move.name}; "
                f"at most {MAX_ACTING_UNITS} supported"
            )

        first = acting[0].unit_id
        if len(acting) == 1:
            return [{first: a} for a in self.legal_actions(first)]

        second = acting[1].unit_id
        second_actions = self.legal_actions(second)
        return [{first: a, second: b}
                for a in self.legal_actions(first)
                for b in second_actions]

    def successors(self) -> List[GameStateChild]:
        return [GameStateChild(joint, self.apply(joint))
                for joint in self.joint_actions()]

    def apply(self, joint: JointAction) -> 'GameState':
        """Successor state: copied board, joint action applied, turn flipped."""
        board = self.board.copy()
        for unit_id, action in joint.items():
            unit = board.get_unit(unit_id)
            # Stale references to dead or unknown units are ignored
            if unit is None or not unit.is_alive:
                continue
            if action.action_type == ActionType.MOVE:
                dx, dy = action.offset()
                board.apply_move(unit_id, dx, dy)
            elif action.action_type == ActionType.ATTACK:
                board.apply_attack(unit_id, action.target_id)
        return GameState(board, self.to_move.opponent, self.weights,
                         check_roster=False)

    def utility(self) -> float:
        if self._utility is None:
            self._utility = evaluate(self.board, self.weights)
        return self._utility

    def __repr__(self) -> str:
        good = len(self.board.alive_units(Faction.GOOD))
        bad = len(self.board.alive_units(Faction.BAD))
        return (f"GameState(to_move={self.to_move.name}, "
                f"good={good}, bad={bad})")
