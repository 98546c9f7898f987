"""Contract violation exceptions.

A contract violation is a programming error, never an expected runtime
outcome: a case used while detached, a stale case callback, a builder
reused after ``build()``. These are raised immediately to the caller of the
offending operation.
"""

from __future__ import annotations

from requisite.exceptions.base import RequisiteError

__all__ = [
    "ContractViolationError",
    "CaseNotAttachedError",
    "NoAttachedCaseError",
    "BuilderConsumedError",
    "InvalidTokenError",
]


class ContractViolationError(RequisiteError):
    """Base exception for broken usage contracts.

    Attributes:
        message: Human-readable error message.
    """

    pass


class CaseNotAttachedError(ContractViolationError):
    """Raised when a context-dependent case method runs while detached.

    Attributes:
        message: Human-readable error message.
        case_name: Class name of the offending case.
    """

    def __init__(self, case_name: str) -> None:
        """Initialize the CaseNotAttachedError.

        Args:
            case_name: Class name of the offending case.
        """
        self.case_name = case_name
        super().__init__(
            f"Requirement case {case_name} is not attached to an execution context"
        )


class NoAttachedCaseError(ContractViolationError):
    """Raised when a case result arrives while no case is attached.

    Usually means a case kept a reference to its callback and fired it after
    being detached, or after the run had already ended.
    """

    def __init__(self) -> None:
        super().__init__(
            "A requirement case delivered a result while no case is attached "
            "to this requirement"
        )


class BuilderConsumedError(ContractViolationError):
    """Raised when a builder is used after ``build()``."""

    def __init__(self) -> None:
        super().__init__(
            "This RequirementBuilder was already built. To create several "
            "requirements sharing cases, call fork() before build()."
        )


class InvalidTokenError(ContractViolationError):
    """Raised when an explicit request token is outside the allowed range.

    Attributes:
        message: Human-readable error message.
        token: The rejected token.
    """

    def __init__(self, token: int, ceiling: int) -> None:
        """Initialize the InvalidTokenError.

        Args:
            token: The rejected token.
            ceiling: Largest allowed token value.
        """
        self.token = token
        super().__init__(f"Request token {token} is outside 0..{ceiling}")
