"""Exception hierarchy for export and import operations."""


class SiteCrateError(Exception):
    """Base class for all sitecrate errors."""


class CallerIdentityError(SiteCrateError):
    """Raised when an operation needs an acting user and none is available."""


class RecipeParseError(SiteCrateError):
    """Raised when recipe text is not a well-formed recipe."""


class RecipeExecutionError(SiteCrateError):
    """Raised when a recipe step cannot be executed."""

    def __init__(self, message: str, step: str = "") -> None:
        super().__init__(message)
        self.step = step


class StorageError(SiteCrateError):
    """Raised when an app-data directory or file cannot be written."""


class ShellDescriptorError(SiteCrateError):
    """Raised when a shell descriptor update uses a stale serial number."""
