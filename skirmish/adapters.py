"""
Engine Adapters - Ingestion of live snapshots and egress of commands.

A snapshot is a plain, JSON-compatible dict:

    {
        "width": 8, "height": 8,
        "units": [
            {"id": 0, "faction": "good", "x": 1, "y": 1,
             "hp": 160, "max_hp": 160, "damage": 16, "range": 1},
            ...
        ],
        "obstacles": [{"id": 100, "x": 3, "y": 3}, ...]
    }

`hp` defaults to `max_hp`. Only living units are ingested; the search
never reads live state again once the root GameState is built.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from skirmish.actions import ActionType, Direction, JointAction
from skirmish.board import Board
from skirmish.errors import ScenarioError
from skirmish.evaluation import EvaluationWeights
from skirmish.game_state import GameState
from skirmish.units import Faction, Obstacle, Unit


@dataclass(frozen=True)
class Command:
    """An engine command for one unit."""
    kind: str                        # "move" or "attack"
    unit_id: int
    direction: Optional[str] = None  # "NORTH", "EAST", "SOUTH", "WEST"
    target_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind, "unit_id": self.unit_id}
        if self.direction is not None:
            data["direction"] = self.direction
        if self.target_id is not None:
            data["target_id"] = self.target_id
        return data


def _parse_faction(value: Any) -> Faction:
    try:
        return Faction(str(value).lower())
    except ValueError:
        raise ScenarioError(f"Unknown faction: {value!r}") from None


def _parse_unit(data: Dict[str, Any]) -> Unit:
    try:
        max_hp = int(data["max_hp"])
        unit = Unit(
            unit_id=int(data["id"]),
            faction=_parse_faction(data["faction"]),
            x=int(data["x"]),
            y=int(data["y"]),
            hp=int(data.get("hp", max_hp)),
            max_hp=max_hp,
            damage=int(data.get("damage", 0)),
            attack_range=int(data.get("range", 1)),
        )
    except KeyError as e:
        raise ScenarioError(f"Unit entry missing field {e.args[0]!r}: {data}") from None
    except ScenarioError:
        raise
    except (TypeError, ValueError, AttributeError) as e:
        raise ScenarioError(f"Malformed unit entry {data!r}: {e}") from None

    if unit.max_hp <= 0:
        raise ScenarioError(f"Unit {unit.unit_id}: max_hp must be positive")
    if not 0 <= unit.hp <= unit.max_hp:
        raise ScenarioError(
            f"Unit {unit.unit_id}: hp {unit.hp} outside [0, {unit.max_hp}]")
    if unit.damage < 0 or unit.attack_range < 0:
        raise ScenarioError(
            f"Unit {unit.unit_id}: damage and range must be non-negative")
    return unit


def board_from_snapshot(snapshot: Dict[str, Any]) -> Board:
    """Build a validated Board from a snapshot dict."""
    try:
        width = int(snapshot["width"])
        height = int(snapshot["height"])
    except KeyError as e:
        raise ScenarioError(f"Snapshot missing field {e.args[0]!r}") from None
    except (TypeError, ValueError) as e:
        raise ScenarioError(f"Bad board extent: {e}") from None
    if width <= 0 or height <= 0:
        raise ScenarioError(f"Board extent must be positive, got {width}x{height}")
    for key in ("units", "obstacles"):
        if not isinstance(snapshot.get(key, []), list):
            raise ScenarioError(f"Snapshot field {key!r} must be a list")

    obstacles = []
    for i, data in enumerate(snapshot.get("obstacles", [])):
        try:
            ob = Obstacle(obstacle_id=int(data.get("id", i)),
                          x=int(data["x"]), y=int(data["y"]))
        except KeyError as e:
            raise ScenarioError(f"Obstacle entry missing field {e.args[0]!r}: {data}") from None
        except (TypeError, ValueError, AttributeError) as e:
            raise ScenarioError(f"Malformed obstacle entry {data!r}: {e}") from None
        if not (0 <= ob.x < width and 0 <= ob.y < height):
            raise ScenarioError(f"Obstacle {ob.obstacle_id} out of bounds at {ob.position}")
        obstacles.append(ob)
    blocked = {ob.position for ob in obstacles}

    units = []
    seen = set()
    for data in snapshot.get("units", []):
        unit = _parse_unit(data)
        if unit.unit_id in seen:
            raise ScenarioError(f"Duplicate unit id {unit.unit_id}")
        seen.add(unit.unit_id)
        if not unit.is_alive:
            continue
        if not (0 <= unit.x < width and 0 <= unit.y < height):
            raise ScenarioError(f"Unit {unit.unit_id} out of bounds at {unit.position}")
        if unit.position in blocked:
            raise ScenarioError(f"Unit {unit.unit_id} stands on an obstacle at {unit.position}")
        units.append(unit)

    return Board(width, height, units=units, obstacles=obstacles)


def state_from_snapshot(snapshot: Dict[str, Any],
                        to_move: Faction = Faction.GOOD,
                        weights: EvaluationWeights = EvaluationWeights()) -> GameState:
    """Root GameState for one real-game turn."""
    return GameState(board_from_snapshot(snapshot), to_move, weights)


def snapshot_from_board(board: Board) -> Dict[str, Any]:
    """Inverse of board_from_snapshot, for engines that hold a Board."""
    return {
        "width": board.width,
        "height": board.height,
        "units": [
            {"id": u.unit_id, "faction": u.faction.value, "x": u.x, "y": u.y,
             "hp": u.hp, "max_hp": u.max_hp, "damage": u.damage,
             "range": u.attack_range}
            for u in board.units.values()
        ],
        "obstacles": [
            {"id": ob.obstacle_id, "x": ob.x, "y": ob.y}
            for ob in board.obstacles
        ],
    }


def to_commands(joint: JointAction) -> List[Command]:
    """Translate a joint action into engine commands."""
    commands = []
    for unit_id, action in joint.items():
        if action.action_type == ActionType.MOVE:
            commands.append(Command("move", unit_id,
                                    direction=Direction(action.direction).name))
        elif action.action_type == ActionType.ATTACK:
            commands.append(Command("attack", unit_id, target_id=action.target_id))
    return commands


def load_scenario(path: str) -> Dict[str, Any]:
    """Read a scenario snapshot from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            snapshot = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ScenarioError(f"{path}: invalid JSON ({e})") from None
    if not isinstance(snapshot, dict):
        raise ScenarioError(f"{path}: top level must be an object")
    return snapshot
