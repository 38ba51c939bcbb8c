from __future__ import annotations

import json
import logging
import sys

from crm.core.logging import JsonFormatter, LogContext, build_log_event
from crm.services.notifications import NotificationSink


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {
            "name": "crm.test",
            "levelname": "INFO",
            "msg": "stage.changed",
            **build_log_event("stage.changed", LogContext(user_id="3", customer_id="9"), to_stage_id=2),
        }
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "stage.changed"
    assert "message" not in payload
    assert payload["context"] == {"user_id": "3", "customer_id": "9"}
    assert payload["to_stage_id"] == 2


def test_json_formatter_keeps_distinct_message_and_exception():
    try:
        raise RuntimeError("disk full")
    except RuntimeError:
        record = logging.getLogger("crm.test").makeRecord(
            "crm.test",
            logging.ERROR,
            __file__,
            1,
            "Storage write failed for %s",
            ("contract.pdf",),
            sys.exc_info(),
            extra={"event": "document.store_failed"},
        )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "document.store_failed"
    assert payload["message"] == "Storage write failed for contract.pdf"
    assert "context" not in payload
    assert "RuntimeError: disk full" in payload["exception"]


def test_notification_sink_logs_and_drains(caplog):
    sink = NotificationSink()
    with caplog.at_level(logging.INFO, logger="crm.services.notifications"):
        sink.success("Customer created")
        sink.danger("Pipeline Stage is in use by customers.")

    assert [item.to_dict()["level"] for item in sink.drain()] == ["success", "danger"]
    assert sink.items == []
    assert [record.title for record in caplog.records] == [
        "Customer created",
        "Pipeline Stage is in use by customers.",
    ]
