import json
import logging

from cfxresolver.logging_conf import JsonFormatter


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("service.resolver", logging.WARNING, __file__, 1, "probe.failed", None, None)
    record.event = "probe_failed"
    record.endpoint = "1.2.3.4:30120"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "service.resolver"
    assert payload["message"] == "probe.failed"
    assert payload["event"] == "probe_failed"
    assert payload["endpoint"] == "1.2.3.4:30120"
    assert "lineno" not in payload

