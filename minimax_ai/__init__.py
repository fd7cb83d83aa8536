"""
Minimax AI - Alpha-beta adversarial search for the skirmish model.

Searches a fixed number of plies over joint actions, pruning with
alpha-beta and ordering attacks before movement so cutoffs come early.
The chosen joint action is carried up the recursion with its value.
"""

from minimax_ai.config import SearchConfig
from minimax_ai.alphabeta import (
    AlphaBetaSearch, SearchResult, SearchStats, order_children, minimax_value,
)
from minimax_ai.agent import MinimaxAgent

__all__ = [
    "SearchConfig",
    "AlphaBetaSearch",
    "SearchResult",
    "SearchStats",
    "order_children",
    "minimax_value",
    "MinimaxAgent",
]
