"""
Skirmish - Game-state model for a two-squad grid combat scenario.

A small GOOD squad fights a small BAD squad on a bounded grid with
immovable obstacles. Features:

- Dense obstacle occupancy with adjacency, range and line-of-fire queries
- Fixed rosters: dead units keep their records so ids stay stable
- Joint-action successor generation for up to two units per side
- Copy-then-mutate transitions with a cached static evaluation
- A deterministic engine plus snapshot/command adapters around it
"""

from skirmish.units import Faction, Unit, Obstacle
from skirmish.actions import ActionType, Direction, Action, JointAction
from skirmish.board import Board
from skirmish.evaluation import EvaluationWeights, evaluate
from skirmish.game_state import GameState, GameStateChild
from skirmish.errors import ConfigurationError, ScenarioError
from skirmish.adapters import Command, state_from_snapshot, to_commands, load_scenario
from skirmish.engine import SkirmishEngine
from skirmish.opponents import RandomAI, RushAI
from skirmish.renderer import BoardRenderer

__all__ = [
    "Faction", "Unit", "Obstacle",
    "ActionType", "Direction", "Action", "JointAction",
    "Board",
    "EvaluationWeights", "evaluate",
    "GameState", "GameStateChild",
    "ConfigurationError", "ScenarioError",
    "Command", "state_from_snapshot", "to_commands", "load_scenario",
    "SkirmishEngine",
    "RandomAI", "RushAI",
    "BoardRenderer",
]
