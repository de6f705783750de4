"""Structured diagnostic events for the conformance engine.

Components report what they tried (stage name, outcome, candidate text)
to an optional debug sink passed in by the caller. Nothing is emitted when
no sink is given.

Contains:
- DiagnosticEvent: One reported step
- DebugSink: Callable receiving events
- emit: Send an event to a sink if there is one
- logging_sink: Sink that writes events to the module logger
- CollectingSink: Sink that keeps events in memory for later display
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single diagnostic event.

    Attributes:
        component: Reporting component (e.g., "extraction", "structured").
        stage: Stage or step name.
        success: Whether the step produced a usable result.
        detail: Short explanation (failure reason, counts, ...).
        candidate: Candidate text produced by the step, if any.
    """

    component: str
    stage: str
    success: bool
    detail: str = ""
    candidate: Optional[str] = None


DebugSink = Callable[[DiagnosticEvent], None]


def emit(
    sink: Optional[DebugSink],
    component: str,
    stage: str,
    success: bool,
    detail: str = "",
    candidate: Optional[str] = None,
) -> None:
    """Send a diagnostic event to the sink, if one is configured."""
    if sink is None:
        return
    sink(DiagnosticEvent(component, stage, success, detail, candidate))


def logging_sink(event: DiagnosticEvent) -> None:
    """Write a diagnostic event to the log at DEBUG level."""
    status = "ok" if event.success else "failed"
    logger.debug("[%s:%s] %s %s", event.component, event.stage, status, event.detail)
    if event.candidate is not None:
        logger.debug("[%s:%s] candidate:\n%s", event.component, event.stage, event.candidate)


class CollectingSink:
    """Debug sink that stores events, optionally forwarding them to the log."""

    def __init__(self, forward_to_log: bool = False):
        self.events: list[DiagnosticEvent] = []
        self.forward_to_log = forward_to_log

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)
        if self.forward_to_log:
            logging_sink(event)

    def stages(self, component: Optional[str] = None) -> list[str]:
        """Stage names in emission order, optionally for one component."""
        return [e.stage for e in self.events if component is None or e.component == component]

    def format_report(self) -> str:
        """Render the collected events as plain text."""
        lines = []
        for event in self.events:
            mark = "+" if event.success else "-"
            line = f"{mark} {event.component}/{event.stage}"
            if event.detail:
                line += f": {event.detail}"
            lines.append(line)
        return "\n".join(lines)
