"""requisite: resolve ordered preconditions before an action proceeds.

Example:
    ```python
    from requisite import CallbackListener, HostController, Requirement

    controller = HostController(context=ScreenContext(screen))
    requirement = (
        Requirement.builder()
        .add(NetworkCase())
        .add(LocationPermissionCase())
        .build_for(controller)
    )
    requirement.validate(CallbackListener(on_success=open_map))
    ```
"""

from __future__ import annotations

from requisite.builder import RequirementBuilder
from requisite.case import CaseCallback, RequirementCase
from requisite.cases import CheckCase, SettingsCase
from requisite.channel import ResultChannel, ResultListener, Subscription
from requisite.config import RequisiteConfig, load_config
from requisite.context import ExecutionContext, Grant, require_host
from requisite.controller import HostController
from requisite.exceptions import (
    BuilderConsumedError,
    CaseNotAttachedError,
    ConfigError,
    ContractViolationError,
    InvalidTokenError,
    NoAttachedCaseError,
    RequirementDestroyedError,
    RequisiteError,
)
from requisite.lifecycle import TeardownNotifier, TeardownObserver
from requisite.listeners import CallbackListener, ListenerRegistry, RequirementListener
from requisite.permission import PermissionCase, SettingsNavigation
from requisite.prompts import Decision, PromptDecision
from requisite.requirement import Requirement
from requisite.tokens import TOKEN_MAX, check_token, token_for

__version__ = "0.1.0"

__all__ = [
    # Orchestration
    "Requirement",
    "RequirementBuilder",
    # Cases
    "RequirementCase",
    "CaseCallback",
    "CheckCase",
    "SettingsCase",
    "PermissionCase",
    "SettingsNavigation",
    "Decision",
    "PromptDecision",
    # Host boundary
    "ExecutionContext",
    "Grant",
    "require_host",
    "ResultChannel",
    "ResultListener",
    "Subscription",
    "TeardownNotifier",
    "TeardownObserver",
    "HostController",
    # Listeners
    "RequirementListener",
    "CallbackListener",
    "ListenerRegistry",
    # Tokens
    "TOKEN_MAX",
    "token_for",
    "check_token",
    # Config
    "RequisiteConfig",
    "load_config",
    # Errors
    "RequisiteError",
    "ContractViolationError",
    "CaseNotAttachedError",
    "NoAttachedCaseError",
    "BuilderConsumedError",
    "InvalidTokenError",
    "RequirementDestroyedError",
    "ConfigError",
]
