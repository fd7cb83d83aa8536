"""
Minimax Agent - Per-turn decision loop around the alpha-beta search.

Each real game turn:
  snapshot -> root GameState -> alpha-beta search -> engine commands

The agent keeps no state between turns beyond statistics; the root
state is rebuilt from a fresh snapshot every time.
"""

import logging
from typing import Any, Dict, List, Optional

from skirmish.adapters import Command, state_from_snapshot, to_commands
from skirmish.units import Faction
from minimax_ai.alphabeta import AlphaBetaSearch, SearchResult, SearchStats
from minimax_ai.config import SearchConfig

logger = logging.getLogger(__name__)


class MinimaxAgent:
    """Plays one faction by searching a fixed number of plies each turn."""

    def __init__(self, faction: Faction = Faction.GOOD,
                 config: Optional[SearchConfig] = None):
        self.faction = faction
        self.config = config or SearchConfig()
        self.search = AlphaBetaSearch(self.config)
        self.last_result: Optional[SearchResult] = None
        self.history: List[SearchStats] = []

    def initial_step(self, snapshot: Dict[str, Any]) -> List[Command]:
        return self.middle_step(snapshot)

    def middle_step(self, snapshot: Dict[str, Any]) -> List[Command]:
        state = state_from_snapshot(snapshot, to_move=self.faction,
                                    weights=self.config.weights)
        result = self.search.search(state)
        self.last_result = result
        self.history.append(result.stats)
        if result.action is None:
            logger.info(f"{self.faction.name} has no legal joint action")
            return []
        return to_commands(result.action)

    def terminal_step(self, snapshot: Dict[str, Any]):
        total_nodes = sum(s.nodes for s in self.history)
        logger.info(f"{self.faction.name} agent finished: {len(self.history)} "
                    f"decisions, {total_nodes} nodes searched")

    def get_commands(self, snapshot: Dict[str, Any], faction: Faction) -> List[Command]:
        """Controller interface shared with the scripted opponents."""
        if faction is not self.faction:
            raise ValueError(f"Agent plays {self.faction.name}, asked to move {faction.name}")
        if not self.history:
            return self.initial_step(snapshot)
        return self.middle_step(snapshot)
