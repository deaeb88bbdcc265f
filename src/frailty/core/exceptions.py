"""Exception hierarchy for frailty.

All frailty exceptions live in this module. The scoring core raises them
directly; the CLI catches and formats them for users.

Exception Hierarchy:
    FrailtyError (base)
    |-- ConfigurationError - Diagnosis field missing from the input records
    +-- DataError - Input table could not be read
"""


class FrailtyError(Exception):
    """Base exception for all frailty errors.

    Example:
        try:
            df = add_frailty_metrics(df, "diagnosis")
        except FrailtyError as e:
            print(f"Error: {e}")
    """

    pass


class ConfigurationError(FrailtyError):
    """Raised when the requested diagnosis field is missing or ambiguous.

    Detected once, before any record is scored, so a batch either comes
    back fully augmented or not at all.

    Attributes:
        message: Human-readable error description
        field: The diagnosis field that was requested
        available: Field names the input actually provides
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        available: list[str] | None = None,
    ):
        self.field = field
        self.available = available or []
        super().__init__(message)


class DataError(FrailtyError):
    """Raised when an input table cannot be loaded.

    Attributes:
        message: Human-readable error description
        path: The file that failed to load (optional)
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
