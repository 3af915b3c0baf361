"""Unit tests for JSON logging and metrics helpers"""

import json
import logging
from prometheus_client import REGISTRY
from debt_engine.infrastructure.observability.logging import log_analysis, setup_logging
from debt_engine.infrastructure.observability.metrics import record_strategy


def test_log_analysis_emits_json(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("INFO")
        log_analysis("user1", "debt_analysis", 12.5, health_status="Good")
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert record["message"] == "Debt calculation completed"
    assert record["level"] == "INFO"
    assert record["service"] == "debt-engine"
    assert record["user_id"] == "user1"
    assert record["step"] == "debt_analysis_complete"
    assert record["health_status"] == "Good"
    assert record["duration_ms"] == 12.5


def test_record_strategy_increments_counter():
    labels = {"strategy": "Snowball"}
    before = REGISTRY.get_sample_value("debt_strategy_recommendation_total", labels) or 0.0

    record_strategy("Snowball")

    assert REGISTRY.get_sample_value("debt_strategy_recommendation_total", labels) == before + 1
