from __future__ import annotations

import json

import pytest
import structlog

from zen_den.logging import setup_logging
from zen_den.visits import service


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_module_logger_follows_configuration_applied_after_import(capsys):
    setup_logging(json_output=True, log_level="WARNING")

    service.log.info("visit.checked_in", visit_id="v1")
    service.log.warning("visit.store_slow", visit_id="v1")

    lines = capsys.readouterr().err.strip().splitlines()
    assert len(lines) == 1

    entry = json.loads(lines[0])
    assert entry["event"] == "visit.store_slow"
    assert entry["level"] == "warning"
    assert entry["module"] == "zen_den.visits.service"
    assert entry["visit_id"] == "v1"
