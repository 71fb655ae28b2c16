"""Exception hierarchy for the aggregation engine.

Malformed individual rows are never errors: the validator drops them.
These exceptions cover faults that invalidate a whole call.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(EngineError, TypeError):
    """The batch itself is not a sequence of rows (e.g. None, a string, a dict)."""


class DegenerateInputError(EngineError, ValueError):
    """No valid records remain after filtering.

    Mean, maximum and minimum are undefined for an empty set, so callers
    should fall back to another dataset or show an explicit empty state.
    """


class ConfigError(EngineError, ValueError):
    """The engine configuration is inconsistent."""


class SourceError(EngineError):
    """The raw catalog could not be retrieved from its source."""
