from __future__ import annotations

from typing import Any

from requisite.exceptions.base import RequisiteError


class ConfigError(RequisiteError):
    """Exception for configuration loading and validation errors.

    Raised when ``requisite.yaml`` cannot be parsed, or when a value from a
    file or a ``REQUISITE_*`` environment variable fails validation.

    Attributes:
        message: Human-readable error message describing the problem.
        field: Optional dotted field name that caused the error
            (e.g., "tokens.ceiling").
        value: Optional value that failed validation.

    Example:
        ```python
        raise ConfigError(
            "Invalid configuration: Input should be less than or equal to 65535",
            field="tokens.ceiling",
            value=70000,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
