"""Tests for loading and replaying recorded run events."""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from ctrf_reporter.event_log import HandlerRegistry, RecordedEvent, load_events, replay_events
from ctrf_reporter.filesystem import LocalFilesystem
from ctrf_reporter.reporter_config import RunConfiguration

RECORDED_RUN = Path(__file__).parent / "fixtures" / "recorded_run.json"


def test_load_events_in_file_order():
    events = load_events(RECORDED_RUN)
    assert [e.event for e in events] == ["before:run", "after:spec", "after:run"]
    assert len(events[1].args) == 2


def test_load_events_rejects_unknown_event(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"events": [{"event": "after:screenshot", "args": []}]}))

    with pytest.raises(ValueError, match="Unknown event 'after:screenshot'"):
        load_events(path)


def test_load_events_requires_events_list(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([1, 2, 3]))

    with pytest.raises(ValueError, match="'events' list"):
        load_events(path)


def test_recorded_event_args_must_be_list():
    with pytest.raises(ValueError, match="args must be a list"):
        RecordedEvent.from_dict({"event": "after:run", "args": {"totalTests": 1}})


def test_registry_dispatches_to_registered_handler():
    registry = HandlerRegistry()
    handler = Mock()
    registry("after:run", handler)

    registry.emit("after:run", {"totalTests": 0})
    registry.emit("before:run", {})

    handler.assert_called_once_with({"totalTests": 0})


def test_replay_writes_report(tmp_path):
    config = RunConfiguration(output_dir=str(tmp_path / "ctrf"), app_name="shop")

    reporter = replay_events(load_events(RECORDED_RUN), config, filesystem=LocalFilesystem())

    document = json.loads(reporter.output_path.read_text(encoding="utf-8"))
    results = document["results"]
    assert results["environment"] == {"appName": "shop"}
    assert results["summary"]["tests"] == 2

    adds, removes = results["tests"]
    assert adds["name"] == "Cart adds item"
    assert adds["duration"] == 120
    assert adds["retries"] == 1
    assert adds["flaky"] is True
    assert adds["browser"] == "chrome 120.0"
    assert adds["filePath"] == "cypress/e2e/cart.cy.js"

    assert removes["message"] == "AssertionError: expected 0 to equal 1"
    assert removes["trace"] == "AssertionError: expected 0 to equal 1"
    assert removes["attachments"] == [
        {
            "name": "screenshot",
            "contentType": "image/png",
            "path": "/work/shop/cypress/screenshots/cart.cy.js/Cart -- removes item (failed).png",
        }
    ]
