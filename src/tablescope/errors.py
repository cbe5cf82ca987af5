class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class GuardrailError(RuntimeError):
    """Request is structurally invalid and was not sent to the backend."""


class DriverError(RuntimeError):
    """A driver operation failed."""


class BackendConnectionError(DriverError):
    """The pool could not yield a usable connection."""


class QueryError(DriverError):
    """The backend rejected a statement."""

    def __init__(self, message: str, statement: str | None = None) -> None:
        super().__init__(message)
        self.statement = statement


class ConversionError(DriverError):
    """A fetched value could not be reduced to text."""


class FeatureNotImplementedError(DriverError, NotImplementedError):
    """The operation is part of the driver contract but the backend lacks it."""

    def __init__(self, operation: str, backend: str) -> None:
        super().__init__(f"{operation} is not supported by the {backend} driver")
        self.operation = operation
        self.backend = backend
