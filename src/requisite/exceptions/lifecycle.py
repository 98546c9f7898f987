from __future__ import annotations

from requisite.exceptions.base import RequisiteError


class RequirementDestroyedError(RequisiteError):
    """Raised when a destroyed requirement is asked to do anything.

    ``cancel()``, ``destroy()``, ``is_in_progress()`` and ``is_destroyed()``
    never raise this; every other operation does.

    Attributes:
        message: Human-readable error message.
        operation: Name of the rejected operation.
    """

    def __init__(self, operation: str) -> None:
        """Initialize the RequirementDestroyedError.

        Args:
            operation: Name of the rejected operation.
        """
        self.operation = operation
        super().__init__(
            f"Cannot call {operation}(): this requirement has been destroyed"
        )
