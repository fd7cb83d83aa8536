"""Exception types raised at construction and ingestion boundaries."""


class ConfigurationError(ValueError):
    """Invalid search configuration or a roster the model cannot search."""


class ScenarioError(ValueError):
    """Malformed snapshot or scenario description."""
