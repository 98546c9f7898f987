"""requisite exception hierarchy.

All exceptions can be imported from this package:
    from requisite.exceptions import ContractViolationError, RequirementDestroyedError
"""

from __future__ import annotations

# Base exception
from requisite.exceptions.base import RequisiteError

# Configuration exceptions
from requisite.exceptions.config import ConfigError

# Contract violations (programming errors)
from requisite.exceptions.contract import (
    BuilderConsumedError,
    CaseNotAttachedError,
    ContractViolationError,
    InvalidTokenError,
    NoAttachedCaseError,
)

# Destroyed-state violations
from requisite.exceptions.lifecycle import RequirementDestroyedError

__all__ = [
    # Base
    "RequisiteError",
    # Config
    "ConfigError",
    # Contract
    "BuilderConsumedError",
    "CaseNotAttachedError",
    "ContractViolationError",
    "InvalidTokenError",
    "NoAttachedCaseError",
    # Lifecycle
    "RequirementDestroyedError",
]
