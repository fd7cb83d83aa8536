"""
Skirmish Engine - Authoritative turn loop that executes unit commands.

Stands in for the live game the agent plays against:
- Holds the real unit/obstacle roster
- Hands out snapshots for ingestion
- Validates and executes submitted commands (invalid ones are skipped)
- Alternates turns between the factions
- Detects game over (a faction extinct, or the turn limit reached)
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from skirmish.actions import DIR_OFFSETS, Direction
from skirmish.adapters import Command, board_from_snapshot, snapshot_from_board
from skirmish.board import Board
from skirmish.units import Faction

logger = logging.getLogger(__name__)


class SkirmishEngine:
    """
    Deterministic turn-based engine for a fixed-roster skirmish.
    GOOD moves first; each step executes one faction's commands.
    """

    def __init__(self, max_turns: int = 200):
        self.max_turns = max_turns
        self.board: Optional[Board] = None
        self.turn = 0
        self.to_move = Faction.GOOD
        self.done = False
        self.winner: Optional[Faction] = None

    def reset(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """Load a scenario and return the opening snapshot."""
        self.board = board_from_snapshot(snapshot)
        self.turn = 0
        self.to_move = Faction.GOOD
        self.done = False
        self.winner = None
        self.done, self.winner = self.check_game_over()
        return self.snapshot()

    def snapshot(self) -> Dict[str, Any]:
        if self.board is None:
            raise RuntimeError("Call reset() before snapshot()")
        return snapshot_from_board(self.board)

    def step(self, faction: Faction, commands: List[Command]) -> Dict[str, Any]:
        """Execute one faction's commands and hand the turn over."""
        if self.board is None:
            raise RuntimeError("Call reset() before step()")
        if self.done:
            raise RuntimeError("Game is over; call reset() to start a new one")
        if faction is not self.to_move:
            raise RuntimeError(
                f"It is {self.to_move.name}'s turn, not {faction.name}'s")

        executed = 0
        acted = set()
        for cmd in commands:
            if cmd.unit_id in acted:
                logger.warning(f"Unit {cmd.unit_id} already acted this turn, "
                               f"ignoring {cmd.kind}")
                continue
            if self._execute(faction, cmd):
                acted.add(cmd.unit_id)
                executed += 1

        self.turn += 1
        self.to_move = faction.opponent
        self.done, self.winner = self.check_game_over()
        if self.done:
            result = self.winner.name if self.winner else "DRAW"
            logger.info(f"Game over at turn {self.turn}: {result}")

        return {
            'turn': self.turn,
            'executed': executed,
            'done': self.done,
            'winner': self.winner,
            'good_units': len(self.board.alive_units(Faction.GOOD)),
            'bad_units': len(self.board.alive_units(Faction.BAD)),
        }

    def check_game_over(self) -> Tuple[bool, Optional[Faction]]:
        """(done, winner); winner is None for a draw or an unfinished game."""
        good = self.board.alive_units(Faction.GOOD)
        bad = self.board.alive_units(Faction.BAD)
        if not good and not bad:
            return True, None
        if not good:
            return True, Faction.BAD
        if not bad:
            return True, Faction.GOOD
        if self.turn >= self.max_turns:
            return True, None
        return False, None

    def _execute(self, faction: Faction, cmd: Command) -> bool:
        unit = self.board.get_unit(cmd.unit_id)
        if unit is None or unit.faction is not faction or not unit.is_alive:
            logger.warning(f"{faction.name} cannot command unit {cmd.unit_id}")
            return False

        if cmd.kind == "move":
            try:
                direction = Direction[str(cmd.direction).upper()]
            except KeyError:
                logger.warning(f"Unit {unit.unit_id}: bad direction {cmd.direction!r}")
                return False
            dx, dy = DIR_OFFSETS[direction]
            if not self.board.can_enter(unit.x + dx, unit.y + dy):
                logger.warning(f"Unit {unit.unit_id}: cannot move {direction.name} "
                               f"from {unit.position}")
                return False
            self.board.apply_move(unit.unit_id, dx, dy)
            return True

        if cmd.kind == "attack":
            target = self.board.get_unit(cmd.target_id) if cmd.target_id is not None else None
            if target is None or target.faction is faction or not target.is_alive:
                logger.warning(f"Unit {unit.unit_id}: invalid target {cmd.target_id}")
                return False
            if not unit.in_attack_range(target):
                logger.warning(f"Unit {unit.unit_id}: target {target.unit_id} out of range")
                return False
            self.board.apply_attack(unit.unit_id, target.unit_id)
            return True

        logger.warning(f"Unit {unit.unit_id}: unknown command kind {cmd.kind!r}")
        return False


def run_game(engine: SkirmishEngine, controllers: Dict[Faction, Any],
             on_turn: Optional[Callable[[Faction, List[Command], Dict[str, Any]], None]] = None
             ) -> Dict[str, Any]:
    """
    Play the loaded scenario to completion.

    controllers maps each faction to an object with
    get_commands(snapshot, faction). Returns the final step info.
    """
    info = {'turn': engine.turn, 'done': engine.done, 'winner': engine.winner}
    while not engine.done:
        faction = engine.to_move
        commands = controllers[faction].get_commands(engine.snapshot(), faction)
        info = engine.step(faction, commands)
        if on_turn is not None:
            on_turn(faction, commands, info)

    snapshot = engine.snapshot()
    for controller in controllers.values():
        terminal_step = getattr(controller, 'terminal_step', None)
        if terminal_step is not None:
            terminal_step(snapshot)
    return info
