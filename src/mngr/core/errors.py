"""Error taxonomy shared by the validation, storage and dispatch layers."""


class MngrError(Exception):
    """Base class for all mngr errors."""


class ValidationError(MngrError, ValueError):
    """Raised when a request path cannot be turned into a ValidatedURL."""


class StorageError(MngrError):
    """Raised when reading or writing the data root fails."""


class PageNotFoundError(StorageError):
    """Raised when a page does not exist in the data root."""


class ContextError(MngrError, RuntimeError):
    """Raised when a request-context entry is missing or written twice."""
