"""
Static Evaluation - Scalar utility of a board for the GOOD faction.

Utility is the sum of six features, each over living units only:
- Good alive:   living GOOD count, -inf when GOOD is extinct
- Bad alive:    living BAD count, +inf when BAD is extinct
- Health:       sum of GOOD health fractions
- Damage dealt: sum of BAD (max hp - hp)
- Threat:       per GOOD unit, number of enemies within attack range
- Positioning:  obstacle-blocked approach penalty, else minus total
                approach distance to the nearest enemy

The infinite terms make extinction decisive regardless of the others.
Everything here is a pure function of the board.
"""

from dataclasses import dataclass

from skirmish.board import Board
from skirmish.units import Faction


DEFAULT_OBSTACLE_PENALTY = 200000.0


@dataclass(frozen=True)
class EvaluationWeights:
    """Tunable constants of the evaluation."""
    obstacle_penalty: float = DEFAULT_OBSTACLE_PENALTY


def good_alive_term(board: Board) -> float:
    good = board.alive_units(Faction.GOOD)
    if not good:
        return float('-inf')
    return float(len(good))


def bad_alive_term(board: Board) -> float:
    bad = board.alive_units(Faction.BAD)
    if not bad:
        return float('inf')
    return float(len(bad))


def health_term(board: Board) -> float:
    return sum(u.health_fraction for u in board.alive_units(Faction.GOOD))


def damage_dealt_term(board: Board) -> float:
    return float(sum(u.damage_taken for u in board.alive_units(Faction.BAD)))


def threat_term(board: Board) -> float:
    return float(sum(len(board.enemies_in_range(u))
                     for u in board.alive_units(Faction.GOOD)))


def blocked_fraction(board: Board) -> float:
    """Fraction of GOOD units whose line to their nearest enemy hits an obstacle."""
    good = board.alive_units(Faction.GOOD)
    if not good:
        return 0.0
    blocked = 0
    for unit in good:
        enemy = board.nearest_enemy(unit)
        if enemy is not None and board.line_blocked(unit, enemy):
            blocked += 1
    return blocked / len(good)


def positioning_term(board: Board,
                     obstacle_penalty: float = DEFAULT_OBSTACLE_PENALTY) -> float:
    good = board.alive_units(Faction.GOOD)
    bad = board.alive_units(Faction.BAD)
    if not good or not bad:
        return 0.0

    if board.has_obstacles and any(board.obstacle_between(g, b)
                                   for g in good for b in bad):
        fraction = blocked_fraction(board)
        if fraction > 0:
            return -obstacle_penalty * fraction

    return -float(sum(u.approach_distance(board.nearest_enemy(u)) for u in good))


def evaluate(board: Board, weights: EvaluationWeights = EvaluationWeights()) -> float:
    """Utility of the board from GOOD's point of view."""
    good_term = good_alive_term(board)
    # A lost game stays lost even if BAD is also extinct
    if good_term == float('-inf'):
        return good_term

    return (good_term
            + bad_alive_term(board)
            + health_term(board)
            + damage_dealt_term(board)
            + threat_term(board)
            + positioning_term(board, weights.obstacle_penalty))
