from __future__ import annotations


class RequisiteError(Exception):
    """Base exception class for all requisite errors.

    Catching ``RequisiteError`` catches every error raised by this package
    while letting unrelated exceptions (including ones raised by listener
    hooks or by host code) propagate unchanged.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            requirement.validate(listener)
        except RequirementDestroyedError:
            # host already gone, nothing to resolve
            pass
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the RequisiteError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
