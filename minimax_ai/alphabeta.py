"""
Alpha-Beta Search - Depth-limited minimax with pruning and move ordering.

GOOD is the maximizing side, BAD the minimizing side. The search
threads the chosen child up alongside its value, so the root knows
which joint action produced the backed-up value without re-matching
utilities. Ties go to the first child in move order.

Move ordering (pruning only, never the final value):
  1. joint actions made entirely of attacks
  2. joint actions with at least one attack
  3. pure movement, by descending static utility of the result

Optional node and wall-clock budgets switch the root to iterative
deepening; the deepest fully searched depth wins.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from skirmish.actions import JointAction, describe, is_all_attack, is_pure_move
from skirmish.errors import ConfigurationError
from skirmish.game_state import GameState, GameStateChild
from minimax_ai.config import SearchConfig

logger = logging.getLogger(__name__)

INF = float('inf')


class SearchBudgetExhausted(Exception):
    """Raised inside the recursion when the node or time budget runs out."""


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0
    depth_reached: int = 0
    elapsed: float = 0.0


@dataclass
class SearchResult:
    """Backed-up value and the root joint action that achieves it."""
    value: float
    action: Optional[JointAction]
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def found_action(self) -> bool:
        return self.action is not None


def order_children(children: List[GameStateChild]) -> List[GameStateChild]:
    """Attack-only first, then mixed, then moves by descending utility."""
    all_attack, some_attack, moves = [], [], []
    for child in children:
        if is_all_attack(child.action):
            all_attack.append(child)
        elif is_pure_move(child.action):
            moves.append(child)
        else:
            some_attack.append(child)
    # sorted() with reverse=True stays stable for equal utilities
    moves = sorted(moves, key=lambda c: c.state.utility(), reverse=True)
    return all_attack + some_attack + moves


def minimax_value(state: GameState, depth: int) -> float:
    """Unpruned, unordered minimax value. Exponential; for verification."""
    if depth == 0:
        return state.utility()
    children = state.successors()
    if not children:
        return state.utility()
    values = [minimax_value(c.state, depth - 1) for c in children]
    return max(values) if state.is_player_turn else min(values)


class AlphaBetaSearch:
    """
    Alpha-beta minimax over GameState successors.

    Single-threaded depth-first walk; every node owns its own copied
    state, so no bookkeeping is shared between sibling branches.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = (config or SearchConfig()).validate()
        self._stats = SearchStats()
        self._deadline: Optional[float] = None

    def search(self, state: GameState, depth: Optional[int] = None) -> SearchResult:
        """Best joint action for the side to move in `state`."""
        depth = self.config.depth if depth is None else depth
        if depth <= 0:
            raise ConfigurationError(f"Search depth must be positive, got {depth}")

        self._stats = SearchStats()
        start = time.monotonic()
        self._deadline = (start + self.config.time_limit
                          if self.config.time_limit is not None else None)

        if self.config.has_budget:
            value, child = self._iterative_deepening(state, depth)
        else:
            value, child = self._value(state, depth, -INF, INF)
            self._stats.depth_reached = depth

        self._stats.elapsed = time.monotonic() - start
        result = SearchResult(value=value,
                              action=child.action if child is not None else None,
                              stats=self._stats)
        logger.info(
            f"Search {state.to_move.name}: value={value:.3f} "
            f"depth={self._stats.depth_reached}/{depth} nodes={self._stats.nodes} "
            f"cutoffs={self._stats.cutoffs} time={self._stats.elapsed:.3f}s "
            f"action=[{describe(result.action) if result.action else 'none'}]"
        )
        return result

    def _iterative_deepening(self, state: GameState,
                             depth: int) -> Tuple[float, Optional[GameStateChild]]:
        completed = None
        for d in range(1, depth + 1):
            try:
                completed = self._value(state, d, -INF, INF)
            except SearchBudgetExhausted:
                logger.debug(f"Budget exhausted during depth {d} "
                             f"after {self._stats.nodes} nodes")
                break
            self._stats.depth_reached = d

        if completed is not None:
            return completed

        # Not even depth 1 finished: first child in move order
        children = order_children(state.successors())
        if not children:
            return state.utility(), None
        logger.warning("Search budget too small for one ply; "
                       "falling back to the first ordered child")
        return children[0].state.utility(), children[0]

    def _enter(self):
        self._stats.nodes += 1
        if self.config.max_nodes is not None and self._stats.nodes > self.config.max_nodes:
            raise SearchBudgetExhausted()
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchBudgetExhausted()

    def _value(self, state: GameState, depth: int,
               alpha: float, beta: float) -> Tuple[float, Optional[GameStateChild]]:
        if state.is_player_turn:
            return self._maximize(state, depth, alpha, beta)
        return self._minimize(state, depth, alpha, beta)

    def _maximize(self, state: GameState, depth: int,
                  alpha: float, beta: float) -> Tuple[float, Optional[GameStateChild]]:
        self._enter()
        if depth == 0:
            self._stats.leaves += 1
            return state.utility(), None

        children = order_children(state.successors())
        if not children:
            self._stats.leaves += 1
            return state.utility(), None

        best, best_child = -INF, None
        for child in children:
            value, _ = self._value(child.state, depth - 1, alpha, beta)
            if best_child is None or value > best:
                best, best_child = value, child
            if beta <= best:
                self._stats.cutoffs += 1
                return best, best_child
            alpha = max(alpha, best)
        return best, best_child

    def _minimize(self, state: GameState, depth: int,
                  alpha: float, beta: float) -> Tuple[float, Optional[GameStateChild]]:
        self._enter()
        if depth == 0:
            self._stats.leaves += 1
            return state.utility(), None

        children = order_children(state.successors())
        if not children:
            self._stats.leaves += 1
            return state.utility(), None

        best, best_child = INF, None
        for child in children:
            value, _ = self._value(child.state, depth - 1, alpha, beta)
            if best_child is None or value < best:
                best, best_child = value, child
            if alpha >= best:
                self._stats.cutoffs += 1
                return best, best_child
            beta = min(beta, best)
        return best, best_child
