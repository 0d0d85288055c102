"""Tests for export event handler fan-out."""

import logging

from sitecrate.hooks import ExportEventHandler, invoke_handlers


class RecordingHandler(ExportEventHandler):
    def __init__(self, name: str, calls: list[str], fail: bool = False) -> None:
        self.name = name
        self.calls = calls
        self.fail = fail

    def exporting(self, context) -> None:
        self.calls.append(f"{self.name}:exporting")
        if self.fail:
            raise RuntimeError(f"{self.name} broke")


class TestExportEventHandler:
    """Test the handler base class."""

    def test_defaults_are_noops(self):
        handler = ExportEventHandler()
        assert handler.exporting(None) is None
        assert handler.exported(None) is None


class TestInvokeHandlers:
    """Test ordered fan-out with failure isolation."""

    def test_registration_order(self):
        calls: list[str] = []
        handlers = [RecordingHandler("a", calls), RecordingHandler("b", calls)]
        failures = invoke_handlers(handlers, lambda h: h.exporting(None), "exporting")
        assert failures == 0
        assert calls == ["a:exporting", "b:exporting"]

    def test_failure_does_not_stop_later_handlers(self):
        calls: list[str] = []
        handlers = [
            RecordingHandler("a", calls, fail=True),
            RecordingHandler("b", calls),
            RecordingHandler("c", calls, fail=True),
        ]
        failures = invoke_handlers(handlers, lambda h: h.exporting(None), "exporting")
        assert failures == 2
        assert calls == ["a:exporting", "b:exporting", "c:exporting"]

    def test_failure_is_logged(self, caplog):
        calls: list[str] = []
        with caplog.at_level(logging.WARNING, logger="sitecrate.hooks"):
            invoke_handlers(
                [RecordingHandler("a", calls, fail=True)],
                lambda h: h.exporting(None),
                "exporting",
            )
        assert "RecordingHandler failed during exporting" in caplog.text
        assert "a broke" in caplog.text

    def test_no_handlers(self):
        assert invoke_handlers([], lambda h: h.exported(None)) == 0
