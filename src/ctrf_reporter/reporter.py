"""
CTRF JSON reporter for Cypress runs.

:class:`GenerateCtrfReport` subscribes to the runner's lifecycle events at
construction time and owns the report for exactly one run::

    before:run  -> record start time, browser and environment block
    after:spec  -> aggregate that spec's tests (once per spec file)
    after:run   -> record stop time, copy run totals, write the file
"""

import dataclasses
import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .aggregator import ResultAggregator
from .ctrf_models import CtrfReport, CtrfSummary
from .cypress_types import RunStartDetails, RunTotals, SpecInfo, SpecResults, coerce_payload
from .exceptions import ConfigurationError
from .filesystem import Filesystem, LocalFilesystem
from .logger_config import get_logger
from .reporter_config import RunConfiguration

logger = get_logger(__name__)

REPORTER_NAME = "cypress-ctrf-json-reporter"

RUN_START_EVENT = "before:run"
SPEC_COMPLETE_EVENT = "after:spec"
RUN_COMPLETE_EVENT = "after:run"

Subscribe = Callable[[str, Callable[..., Any]], Any]


def normalize_filename(filename: str) -> str:
    """Ensure ``filename`` ends with exactly one ``.json`` suffix.

    Other extensions are kept: ``report.txt`` becomes ``report.txt.json``.
    """
    if filename.endswith(".json"):
        return filename
    return f"{filename}.json"


def _now_ms() -> int:
    return int(time.time() * 1000)


class GenerateCtrfReport:
    """Aggregates one Cypress run into a CTRF report file.

    Args:
        on: The runner's event subscription function, called as
            ``on(event_name, handler)`` once per event kind.
        config: Reporter options; defaults apply when omitted.
        filesystem: Filesystem capability; the local disk when omitted.
        clock: Returns the current time in epoch milliseconds.

    Raises:
        ConfigurationError: If ``on`` is missing, disabled or not callable.
        OSError: If the output directory cannot be created.
    """

    def __init__(
        self,
        on: Optional[Subscribe],
        config: Optional[RunConfiguration] = None,
        filesystem: Optional[Filesystem] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        if on is None or on is False or not callable(on):
            raise ConfigurationError("Missing required option: on")

        self.config = config or RunConfiguration()
        self.filesystem: Filesystem = filesystem or LocalFilesystem()
        self._on = on
        self._clock = clock or _now_ms
        self._report = CtrfReport()
        self._aggregator = ResultAggregator(self._report, self.config, self.filesystem)
        self.filename = normalize_filename(self.config.output_file)
        self.run_start = 0
        self.run_stop = 0

        if not self.filesystem.exists(self.config.output_dir):
            self.filesystem.create_directory(self.config.output_dir)

        self._register_handlers()

    @classmethod
    def from_options(cls, options: Mapping[str, Any], filesystem: Optional[Filesystem] = None) -> "GenerateCtrfReport":
        """Construct from a host-style options mapping that includes ``on``."""
        remaining = dict(options)
        on = remaining.pop("on", None)
        return cls(on, RunConfiguration.from_options(remaining), filesystem=filesystem)

    @property
    def output_path(self) -> Path:
        return Path(self.config.output_dir) / self.filename

    @property
    def browser(self) -> str:
        return self._aggregator.browser

    @property
    def report(self) -> Dict[str, Any]:
        """A fresh JSON-ready copy of the report in its current state."""
        return self._report.to_dict()

    def _register_handlers(self) -> None:
        self._on(RUN_START_EVENT, self.on_run_start)
        self._on(SPEC_COMPLETE_EVENT, self.on_spec_complete)
        self._on(RUN_COMPLETE_EVENT, self.on_run_complete)

    def on_run_start(self, details: Union[RunStartDetails, Mapping[str, Any], None] = None) -> None:
        self.run_start = self._clock()
        run_details = coerce_payload(RunStartDetails, details)
        if run_details.browser is not None:
            self._aggregator.browser = run_details.browser.describe()

        environment = self.config.environment_details()
        if environment:
            self._report.environment = environment

    def on_spec_complete(
        self,
        spec: Union[SpecInfo, Mapping[str, Any], None],
        results: Union[SpecResults, Mapping[str, Any], None] = None,
    ) -> None:
        # The runner also fires this event with the results as the only argument.
        if results is None and (isinstance(spec, SpecResults) or (isinstance(spec, Mapping) and "tests" in spec)):
            spec, results = None, spec
        spec_results = coerce_payload(SpecResults, results)
        if spec_results.spec is None and spec is not None:
            spec_results = dataclasses.replace(spec_results, spec=coerce_payload(SpecInfo, spec))
        self._aggregator.add_spec_results(spec_results)

    def on_run_complete(self, run: Union[RunTotals, Mapping[str, Any]]) -> None:
        self.run_stop = self._clock()
        self.update_totals(coerce_payload(RunTotals, run))
        self.write_report()

    def update_totals(self, totals: RunTotals) -> None:
        """Replace the summary with the runner's own totals.

        The counts are not derived from the aggregated test records, so the
        two can disagree when the runner counts differently.
        """
        self._report.summary = CtrfSummary(
            tests=totals.total_tests,
            passed=totals.total_passed,
            failed=totals.total_failed,
            pending=totals.total_pending,
            skipped=totals.total_skipped,
            other=0,
            start=self.run_start,
            stop=self.run_stop,
        )

    def write_report(self) -> bool:
        """Write the report to :attr:`output_path`; return True on success."""
        try:
            content = json.dumps(self.report, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
            self.filesystem.write_text(self.output_path, content)
        except (OSError, ValueError) as e:
            logger.error(f"Error writing ctrf json report: {e}")
            return False
        logger.info(f"{REPORTER_NAME}: successfully written ctrf json to {self.output_path}")
        return True
