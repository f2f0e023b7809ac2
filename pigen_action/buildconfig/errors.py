"""Error types raised while checking a build configuration."""

# Error code constants
VALIDATION_ERROR = "validation"
ENVIRONMENT_ERROR = "environment_query"


class ConfigValidationError(ValueError):
    """Raised when a configuration field violates a constraint."""

    def __init__(self, message: str, code: str = VALIDATION_ERROR) -> None:
        super().__init__(message)
        self.code = code


class EnvironmentQueryError(ConfigValidationError):
    """Raised when the host cannot list its locales or timezones."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ENVIRONMENT_ERROR)


__all__ = [
    "ENVIRONMENT_ERROR",
    "VALIDATION_ERROR",
    "ConfigValidationError",
    "EnvironmentQueryError",
]
