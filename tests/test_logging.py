"""
Tests for logging helpers.
"""

import logging

import pytest

from jsontransform.core.logging import bind_logger, get_logger


def test_bound_context_merges_with_call_extra(caplog: pytest.LogCaptureFixture) -> None:
    log = bind_logger(get_logger("jsontransform.tests"), run_id="ab12", group="person")

    with caplog.at_level(logging.INFO, logger="jsontransform.tests"):
        log.info("bound", extra={"group": "card"})

    record = caplog.records[-1]
    assert record.run_id == "ab12"
    assert record.group == "card"


def test_bound_context_accepts_explicit_none_extra(caplog: pytest.LogCaptureFixture) -> None:
    log = bind_logger(get_logger("jsontransform.tests"), run_id="ab12")

    with caplog.at_level(logging.INFO, logger="jsontransform.tests"):
        log.info("no extra", extra=None)

    assert caplog.records[-1].run_id == "ab12"
