"""Custom exceptions for the Prosperity engine.

Calculators in this package never raise for malformed numeric input; those
values are coerced to zero. The exceptions below are reserved for caller
mistakes that cannot be coerced away: an unknown report format, an unknown
catalog identifier, or invalid configuration.

Example:
    try:
        pdf = generator.generate(proposal, format="pdf")
    except ReportError as e:
        logger.error("report_failed", error=str(e), **e.details)
    except ProsperityError as e:
        # Handle any Prosperity-related error
        logger.error("engine_failed", error=str(e))
"""

from typing import Any, Optional


class ProsperityError(Exception):
    """Base exception for all Prosperity engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(ProsperityError):
    """Error raised when a caller passes a value the engine cannot use.

    Numeric fields are never validated this way; this covers identifiers
    such as strategy or product ids that must match a known entry.

    Example:
        >>> raise ValidationError(
        ...     "Unknown strategy",
        ...     field="strategy",
        ...     value="crypto_moonshot",
        ...     constraint="Must be one of: lirp, infinite_banking, ...",
        ... )
        ValidationError: Unknown strategy
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ReportError(ProsperityError):
    """Error raised when a report cannot be rendered.

    Attributes:
        format: The requested output format.
        section: The report section being rendered (if known).
    """

    def __init__(
        self,
        message: str,
        *,
        format: Optional[str] = None,
        section: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.format = format
        self.section = section

        if format:
            self.details["format"] = format
        if section:
            self.details["section"] = section


class ConfigurationError(ProsperityError):
    """Error raised when configuration is invalid or missing.

    Configuration errors are typically fatal and require the caller to fix
    the environment or the settings object before retrying.

    Example:
        >>> raise ConfigurationError(
        ...     "Days per month must be positive",
        ...     config_key="PROSPERITY_PROJECTION_DAYS_PER_MONTH",
        ...     expected="Positive integer",
        ...     actual=0,
        ... )
        ConfigurationError: Days per month must be positive
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "ProsperityError",
    "ValidationError",
    "ReportError",
    "ConfigurationError",
]
