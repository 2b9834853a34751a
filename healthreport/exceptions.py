"""Exception types raised by the healthreport package."""


class HealthcheckError(Exception):
    """Base class for healthreport errors."""


class HealthcheckDecodeError(HealthcheckError, ValueError):
    """Raised when a JSON document cannot be decoded into a healthcheck type."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field is not None:
            message = f"{field}: {message}"
        super().__init__(message)
