"""Single-use builder for :class:`Requirement`."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from requisite.case import RequirementCase
from requisite.exceptions import BuilderConsumedError, ContractViolationError
from requisite.requirement import Requirement

if TYPE_CHECKING:
    from requisite.channel import ResultChannel
    from requisite.config import RequisiteConfig
    from requisite.context import ExecutionContext
    from requisite.controller import HostController
    from requisite.lifecycle import TeardownNotifier

__all__ = ["RequirementBuilder"]


class RequirementBuilder:
    """Accumulates cases and builds exactly one :class:`Requirement`.

    After :meth:`build` every method raises :class:`BuilderConsumedError`.
    To build several requirements that share a prefix of cases, :meth:`fork`
    the builder before building.

    Example:
        ```python
        common = Requirement.builder().add(NetworkCase())

        upload = common.fork().add(StoragePermissionCase()).build_for(controller)
        nearby = (
            common.add_if(needs_precise, LocationPermissionCase())
            .build_for(controller)
        )
        ```
    """

    def __init__(self) -> None:
        self._cases: list[RequirementCase] | None = []

    def add(self, case: RequirementCase) -> RequirementBuilder:
        cases = self._require_open()
        if case is None:
            raise ContractViolationError("Cannot add None as a requirement case")
        cases.append(case)
        return self

    def add_if(self, condition: bool, case: RequirementCase) -> RequirementBuilder:
        self._require_open()
        if condition:
            self.add(case)
        return self

    def add_all(self, cases: Iterable[RequirementCase]) -> RequirementBuilder:
        self._require_open()
        for case in cases:
            self.add(case)
        return self

    def add_all_if(
        self, condition: bool, cases: Iterable[RequirementCase]
    ) -> RequirementBuilder:
        self._require_open()
        if condition:
            self.add_all(cases)
        return self

    def fork(self) -> RequirementBuilder:
        """Return a new builder holding a copy of the cases added so far."""
        cases = self._require_open()
        forked = RequirementBuilder()
        forked.add_all(cases)
        return forked

    def build(
        self,
        context: ExecutionContext,
        channel: ResultChannel,
        *,
        lifecycle: TeardownNotifier | None = None,
        config: RequisiteConfig | None = None,
    ) -> Requirement:
        """Build the requirement and consume this builder.

        Args:
            context: Execution context cases are attached to.
            channel: Channel the host forwards result events to.
            lifecycle: Optional teardown notifier; the requirement destroys
                itself when the context's host is torn down.
            config: Optional configuration (tracing options).

        Raises:
            BuilderConsumedError: If this builder was already built.
        """
        cases = self._require_open()
        self._cases = None
        return Requirement(
            cases, context, channel, lifecycle=lifecycle, config=config
        )

    def build_for(
        self,
        controller: HostController,
        *,
        config: RequisiteConfig | None = None,
    ) -> Requirement:
        """Build against the collaborators bundled in ``controller``."""
        return self.build(
            controller.context,
            controller.channel,
            lifecycle=controller.lifecycle,
            config=config,
        )

    @property
    def is_built(self) -> bool:
        return self._cases is None

    def _require_open(self) -> list[RequirementCase]:
        if self._cases is None:
            raise BuilderConsumedError()
        return self._cases
