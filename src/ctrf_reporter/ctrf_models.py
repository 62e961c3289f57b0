"""CTRF (Common Test Report Format) document model.

Optional fields left as ``None`` are dropped by ``to_dict`` so the written
JSON never carries null placeholders.  ``browser`` is the one exception: it
defaults to an empty string and is always emitted for non-minimal records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

TOOL_NAME = "cypress"


@dataclass
class CtrfAttachment:
    name: str
    content_type: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "contentType": self.content_type, "path": self.path}


@dataclass
class CtrfTest:
    """One test record of the report."""

    name: str
    status: str
    duration: float
    raw_status: Optional[str] = None
    type: Optional[str] = None
    file_path: Optional[str] = None
    retries: Optional[int] = None
    flaky: Optional[bool] = None
    browser: Optional[str] = None
    message: Optional[str] = None
    trace: Optional[str] = None
    screenshot: Optional[str] = None
    attachments: List[CtrfAttachment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "status": self.status,
            "duration": self.duration,
        }
        optional = (
            ("message", self.message),
            ("trace", self.trace),
            ("rawStatus", self.raw_status),
            ("type", self.type),
            ("filePath", self.file_path),
            ("retries", self.retries),
            ("flaky", self.flaky),
            ("browser", self.browser),
            ("screenshot", self.screenshot),
        )
        for key, value in optional:
            if value is not None:
                result[key] = value
        if self.attachments:
            result["attachments"] = [a.to_dict() for a in self.attachments]
        return result


@dataclass
class CtrfSummary:
    tests: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    skipped: int = 0
    other: int = 0
    start: int = 0
    stop: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "tests": self.tests,
            "passed": self.passed,
            "failed": self.failed,
            "pending": self.pending,
            "skipped": self.skipped,
            "other": self.other,
            "start": self.start,
            "stop": self.stop,
        }


@dataclass
class CtrfReport:
    """The report accumulated over a single run."""

    tool_name: str = TOOL_NAME
    summary: CtrfSummary = field(default_factory=CtrfSummary)
    tests: List[CtrfTest] = field(default_factory=list)
    environment: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        results: Dict[str, Any] = {
            "tool": {"name": self.tool_name},
            "summary": self.summary.to_dict(),
            "tests": [t.to_dict() for t in self.tests],
        }
        if self.environment is not None:
            results["environment"] = dict(self.environment)
        return {"results": results}
