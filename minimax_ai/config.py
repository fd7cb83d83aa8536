"""
Search Configuration - Settings for the alpha-beta agent.

Defaults suit the fixed two-versus-two skirmish. Every setting can be
overridden from the environment for batch runs. The search and the
agent never touch logging; log_level is applied by cli.py when it
configures the root logger.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import os

from skirmish.errors import ConfigurationError
from skirmish.evaluation import DEFAULT_OBSTACLE_PENALTY, EvaluationWeights


@dataclass
class SearchConfig:
    """Master configuration for one search agent"""
    depth: int = 3                       # Plies searched per decision
    max_nodes: Optional[int] = None      # None = unlimited
    time_limit: Optional[float] = None   # Seconds, None = unlimited
    obstacle_penalty: float = DEFAULT_OBSTACLE_PENALTY
    log_level: str = "WARNING"           # Applied by the command line only

    @property
    def has_budget(self) -> bool:
        return self.max_nodes is not None or self.time_limit is not None

    @property
    def level(self) -> int:
        """Numeric logging level for logging.basicConfig."""
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")
        return level

    @property
    def weights(self) -> EvaluationWeights:
        return EvaluationWeights(obstacle_penalty=self.obstacle_penalty)

    def validate(self) -> 'SearchConfig':
        """Fail fast on settings the search cannot honour."""
        if self.depth <= 0:
            raise ConfigurationError(f"Search depth must be positive, got {self.depth}")
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ConfigurationError(f"max_nodes must be positive, got {self.max_nodes}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ConfigurationError(f"time_limit must be positive, got {self.time_limit}")
        if self.obstacle_penalty < 0:
            raise ConfigurationError(
                f"obstacle_penalty must be non-negative, got {self.obstacle_penalty}")
        # Resolving the level rejects unknown names
        self.level
        return self

    @classmethod
    def from_env(cls) -> 'SearchConfig':
        """Load from environment variables"""
        try:
            return cls(
                depth=int(os.getenv('SKIRMISH_DEPTH', 3)),
                max_nodes=int(os.getenv('SKIRMISH_MAX_NODES')) if os.getenv('SKIRMISH_MAX_NODES') else None,
                time_limit=float(os.getenv('SKIRMISH_TIME_LIMIT')) if os.getenv('SKIRMISH_TIME_LIMIT') else None,
                obstacle_penalty=float(os.getenv('SKIRMISH_OBSTACLE_PENALTY', DEFAULT_OBSTACLE_PENALTY)),
                log_level=os.getenv('SKIRMISH_LOG_LEVEL', 'WARNING').upper(),
            )
        except ValueError as e:
            raise ConfigurationError(f"Bad SKIRMISH_* environment setting: {e}") from None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration"""
        return {
            'depth': self.depth,
            'max_nodes': self.max_nodes,
            'time_limit': self.time_limit,
            'obstacle_penalty': self.obstacle_penalty,
            'log_level': self.log_level,
        }
