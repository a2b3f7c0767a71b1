"""Domain-specific errors for the program engine.

Every failure the engine reports synchronously to its caller is one of
these types. None of them is retried internally.
"""


class ProgramEngineError(Exception):
    """Base exception for all program engine errors."""

    pass


class InvalidReferenceError(ProgramEngineError):
    """Raised when a week/session/exercise reference does not exist.

    Covers week or session numbers outside the program, week numbers outside
    the periodization table, and exercise ids absent from a generated plan.
    """

    pass


class CatalogExhaustedError(ProgramEngineError):
    """Raised when injury filtering leaves no exercise to select at all."""

    pass


class InvalidConfigurationError(ProgramEngineError):
    """Raised when program parameters or the catalog file are invalid."""

    pass


class ProgramInvariantError(ProgramEngineError):
    """Raised when a Program value violates its cursor or shape invariants.

    Attributes:
        code: Error code (e.g., "CURSOR_OUT_OF_RANGE", "WEEK_COUNT_MISMATCH")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
