"""Host controller: the collaborators a requirement is built against."""

from __future__ import annotations

from dataclasses import dataclass, field

from requisite.channel import ResultChannel
from requisite.context import ExecutionContext
from requisite.lifecycle import TeardownNotifier

__all__ = ["HostController"]


@dataclass(frozen=True, slots=True)
class HostController:
    """Bundle of one host's execution context, result channel and teardown
    notifier.

    Hosts that create many requirements keep one controller and pass it to
    :meth:`RequirementBuilder.build_for`; all requirements then share the
    same channel and are destroyed together when the host goes away.

    Attributes:
        context: Capabilities cases use to act on the host.
        channel: Channel the host forwards raw result events to.
        lifecycle: Notifier the host fires on teardown, or None when the
            host has no lifecycle and requirements are destroyed manually.

    Example:
        >>> controller = HostController(context=ScreenContext(screen))
        >>> requirement = Requirement.builder().add(case).build_for(controller)
        >>> # host result callback
        >>> controller.channel.dispatch_action_result(token, outcome)
    """

    context: ExecutionContext
    channel: ResultChannel = field(default_factory=ResultChannel)
    lifecycle: TeardownNotifier | None = None
