"""Typed payloads for the Cypress run events the reporter listens to.

The host runner hands plain JSON-like mappings to event handlers.  Each
mapping is converted once, at the handler boundary, into one of the
dataclasses below so the aggregation code never digs through untyped dicts.
Field names follow Python conventions; ``from_dict`` reads the runner's
camelCase keys (``wallClockDuration``, ``displayError``, ``totalTests``...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Mapping, Optional, Type, TypeVar, Union

TestState = Literal["passed", "failed", "pending", "skipped"]
TEST_STATES = ("passed", "failed", "pending", "skipped")

T = TypeVar("T")


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise ValueError(f"{kind} payload is missing required field '{key}'")
    return data[key]


def _parse_state(raw: Any, kind: str) -> TestState:
    if raw not in TEST_STATES:
        raise ValueError(f"{kind} has unknown state {raw!r}; expected one of {', '.join(TEST_STATES)}")
    return raw


@dataclass
class CypressTestError:
    """Structured error recorded on a test attempt."""

    message: Optional[str] = None
    stack: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CypressTestError":
        return cls(message=data.get("message"), stack=data.get("stack"))


@dataclass
class CypressTestAttempt:
    """One execution try of a test."""

    state: TestState
    error: Optional[CypressTestError] = None
    wall_clock_duration: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CypressTestAttempt":
        raw_error = data.get("error")
        return cls(
            state=_parse_state(_require(data, "state", "attempt"), "attempt"),
            error=CypressTestError.from_dict(raw_error) if isinstance(raw_error, Mapping) else None,
            wall_clock_duration=data.get("wallClockDuration"),
        )


@dataclass
class CypressTest:
    """Final outcome of one test inside a spec.

    Attributes:
        title: Title segments, outermost ``describe`` first.
        state: Terminal state reported by the runner.
        duration: Explicit duration in milliseconds, when the runner sends one.
        attempts: Attempt history in execution order, ``None`` when absent.
        display_error: Human-readable error shown by the runner; set for
            failures that never reach an attempt (e.g. hook failures).
    """

    title: List[str]
    state: TestState
    duration: Optional[float] = None
    attempts: Optional[List[CypressTestAttempt]] = None
    display_error: Optional[str] = None

    @property
    def last_attempt(self) -> Optional[CypressTestAttempt]:
        if not self.attempts:
            return None
        return self.attempts[-1]

    @property
    def attempt_count(self) -> int:
        return len(self.attempts) if self.attempts else 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CypressTest":
        title = _require(data, "title", "test")
        if isinstance(title, str):
            title = [title]
        raw_attempts = data.get("attempts")
        return cls(
            title=[str(segment) for segment in title],
            state=_parse_state(_require(data, "state", "test"), "test"),
            duration=data.get("duration"),
            attempts=[CypressTestAttempt.from_dict(a) for a in raw_attempts] if raw_attempts is not None else None,
            display_error=data.get("displayError"),
        )


@dataclass
class Screenshot:
    """Screenshot captured while a spec ran."""

    path: str
    name: Optional[str] = None
    taken_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Screenshot":
        return cls(
            path=data.get("path") or "",
            name=data.get("name"),
            taken_at=data.get("takenAt"),
        )


@dataclass
class SpecInfo:
    """Identity of a spec file."""

    relative: Optional[str] = None
    absolute: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpecInfo":
        return cls(
            relative=data.get("relative"),
            absolute=data.get("absolute"),
            name=data.get("name"),
        )


@dataclass
class SpecResults:
    """Payload of the ``after:spec`` event."""

    tests: List[CypressTest] = field(default_factory=list)
    spec: Optional[SpecInfo] = None
    screenshots: List[Screenshot] = field(default_factory=list)
    video: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpecResults":
        spec = data.get("spec")
        return cls(
            tests=[CypressTest.from_dict(t) for t in data.get("tests") or []],
            spec=SpecInfo.from_dict(spec) if isinstance(spec, Mapping) else None,
            screenshots=[Screenshot.from_dict(s) for s in data.get("screenshots") or []],
            video=data.get("video"),
        )


@dataclass
class RunTotals:
    """Run-level counters from the ``after:run`` event."""

    total_tests: int = 0
    total_passed: int = 0
    total_failed: int = 0
    total_pending: int = 0
    total_skipped: int = 0
    total_suites: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RunTotals":
        return cls(
            total_tests=_require(data, "totalTests", "run"),
            total_passed=_require(data, "totalPassed", "run"),
            total_failed=_require(data, "totalFailed", "run"),
            total_pending=_require(data, "totalPending", "run"),
            total_skipped=_require(data, "totalSkipped", "run"),
            total_suites=data.get("totalSuites", 0),
        )


@dataclass
class BrowserInfo:
    name: str
    version: str

    def describe(self) -> str:
        return f"{self.name} {self.version}".strip()


@dataclass
class RunStartDetails:
    """Payload of the ``before:run`` event (the resolved runner config)."""

    browser: Optional[BrowserInfo] = None
    project_root: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RunStartDetails":
        raw_browser = data.get("browser")
        browser = None
        if isinstance(raw_browser, Mapping) and raw_browser.get("name") is not None:
            browser = BrowserInfo(name=str(raw_browser["name"]), version=str(raw_browser.get("version") or ""))
        return cls(browser=browser, project_root=data.get("projectRoot"))


def coerce_payload(cls: Type[T], payload: Union[T, Mapping[str, Any], None]) -> T:
    """Return ``payload`` as an instance of ``cls``.

    Typed instances pass through untouched; mappings go through
    ``cls.from_dict``; ``None`` yields the type's empty value.
    """
    if isinstance(payload, cls):
        return payload
    if payload is None:
        return cls()
    if isinstance(payload, Mapping):
        return cls.from_dict(payload)  # type: ignore[attr-defined]
    raise TypeError(f"Expected {cls.__name__} or mapping, got {type(payload).__name__}")
