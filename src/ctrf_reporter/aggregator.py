"""
Result aggregation: folds ``after:spec`` payloads into the CTRF report.
"""

import math
from typing import Optional, Tuple

from .attachments import collect_attachments, resolve_screenshot
from .ctrf_models import CtrfReport, CtrfTest
from .cypress_types import CypressTest, CypressTestAttempt, SpecResults
from .filesystem import Filesystem
from .logger_config import get_logger
from .reporter_config import RunConfiguration

logger = get_logger(__name__)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def resolve_duration(test: CypressTest) -> float:
    """Explicit duration, else the last attempt's wall-clock duration, else 0."""
    if _is_number(test.duration):
        return test.duration  # type: ignore[return-value]
    last_attempt = test.last_attempt
    if last_attempt is not None and _is_number(last_attempt.wall_clock_duration):
        return last_attempt.wall_clock_duration  # type: ignore[return-value]
    return 0


def extract_failure_details(test: CypressTest, last_attempt: Optional[CypressTestAttempt]) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(message, trace)`` for a failed test.

    The last attempt's structured error wins when it carries both a message
    and a stack.  Failures that never reach an attempt (hook failures, for
    example) only populate ``display_error``, which is then used for both.
    """
    error = last_attempt.error if last_attempt is not None else None
    if error is not None and error.message is not None and error.stack is not None:
        return error.message, error.stack

    display_error = test.display_error
    if isinstance(display_error, str) and display_error.strip():
        return display_error, display_error

    return None, None


class ResultAggregator:
    """Appends one :class:`CtrfTest` per test outcome to ``report``."""

    def __init__(self, report: CtrfReport, config: RunConfiguration, filesystem: Filesystem):
        self.report = report
        self.config = config
        self.filesystem = filesystem
        self.browser = ""

    def add_spec_results(self, results: SpecResults) -> None:
        for test in results.tests:
            self.report.tests.append(self.build_test(test, results))
        spec_name = results.spec.relative if results.spec is not None else None
        logger.debug(f"Aggregated {len(results.tests)} test(s) from spec {spec_name or '<unknown>'}")

    def build_test(self, test: CypressTest, results: SpecResults) -> CtrfTest:
        ctrf_test = CtrfTest(
            name=" ".join(test.title),
            status=test.state,
            duration=resolve_duration(test),
        )
        if self.config.minimal:
            return ctrf_test

        attempt_count = test.attempt_count
        if test.state == "failed":
            ctrf_test.message, ctrf_test.trace = extract_failure_details(test, test.last_attempt)
        ctrf_test.raw_status = test.state
        ctrf_test.type = self.config.test_type
        ctrf_test.file_path = results.spec.relative if results.spec is not None else None
        ctrf_test.retries = max(0, attempt_count - 1)
        ctrf_test.flaky = test.state == "passed" and attempt_count > 1
        ctrf_test.browser = self.browser
        ctrf_test.screenshot = resolve_screenshot(test, results, self.filesystem, self.config.screenshot)
        ctrf_test.attachments = collect_attachments(test, results, self.filesystem)
        return ctrf_test
