"""
Replay of recorded Cypress run events.

A recorded run is a JSON document of the form::

    {
      "events": [
        {"event": "before:run", "args": [{"browser": {"name": "chrome", "version": "120"}}]},
        {"event": "after:spec", "args": [{"relative": "cypress/e2e/a.cy.js"}, {"tests": [...]}]},
        {"event": "after:run", "args": [{"totalTests": 1, ...}]}
      ]
    }

Events are dispatched in file order through the handlers a reporter
registered, exactly as the runner would call them.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .filesystem import Filesystem
from .logger_config import get_logger
from .reporter import RUN_COMPLETE_EVENT, RUN_START_EVENT, SPEC_COMPLETE_EVENT, GenerateCtrfReport
from .reporter_config import RunConfiguration

logger = get_logger(__name__)

KNOWN_EVENTS = (RUN_START_EVENT, SPEC_COMPLETE_EVENT, RUN_COMPLETE_EVENT)


@dataclass
class RecordedEvent:
    event: str
    args: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordedEvent":
        name = data.get("event")
        if name not in KNOWN_EVENTS:
            raise ValueError(f"Unknown event {name!r}; expected one of {', '.join(KNOWN_EVENTS)}")
        args = data.get("args", [])
        if not isinstance(args, list):
            raise ValueError(f"Event {name!r} args must be a list")
        return cls(event=name, args=args)


class HandlerRegistry:
    """Subscription function that stores handlers and dispatches to them.

    Passed as ``on`` to :class:`GenerateCtrfReport`.
    """

    def __init__(self) -> None:
        self.handlers: Dict[str, Callable[..., Any]] = {}

    def __call__(self, event_name: str, handler: Callable[..., Any]) -> None:
        self.handlers[event_name] = handler

    def emit(self, event_name: str, *args: Any) -> None:
        handler = self.handlers.get(event_name)
        if handler is None:
            logger.debug(f"No handler registered for {event_name}; skipping")
            return
        handler(*args)


def load_events(path: Union[str, Path]) -> List[RecordedEvent]:
    """Load recorded events from ``path``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not a valid recorded run.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not isinstance(data.get("events"), list):
        raise ValueError(f"{path} does not contain an 'events' list")
    return [RecordedEvent.from_dict(e) for e in data["events"]]


def replay_events(
    events: List[RecordedEvent],
    config: Optional[RunConfiguration] = None,
    filesystem: Optional[Filesystem] = None,
) -> GenerateCtrfReport:
    """Feed ``events`` through a fresh reporter and return it."""
    registry = HandlerRegistry()
    reporter = GenerateCtrfReport(registry, config, filesystem=filesystem)
    for recorded in events:
        registry.emit(recorded.event, *recorded.args)
    logger.info(f"Replayed {len(events)} event(s)")
    return reporter
