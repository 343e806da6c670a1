import io
import logging

import pytest

from docsync.logging.logger import Log


class TestLogContext:
    def test_appends_context_pairs(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="docsync")

        Log.info("Upload complete", task="t1", document="d1")

        assert caplog.messages == ["Upload complete task=t1 document=d1"]

    def test_skips_empty_context(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="docsync")

        Log.error("Sync failed", document=None)

        assert caplog.messages == ["Sync failed"]

    def test_respects_level(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="docsync")

        Log.debug("hidden", task="t1")

        assert caplog.messages == []


class TestLogConfigure:
    def test_writes_formatted_lines_to_stream(self) -> None:
        logger = logging.getLogger("docsync")
        saved_handlers, saved_level = logger.handlers[:], logger.level
        logger.handlers.clear()
        stream = io.StringIO()
        try:
            Log.configure("warning", stream=stream)
            Log.warning("Skipped 1 table(s)", file="report.docx")
            Log.info("not shown")
        finally:
            logger.handlers[:] = saved_handlers
            logger.setLevel(saved_level)

        output = stream.getvalue()
        assert "[WARNING] Skipped 1 table(s) file=report.docx" in output
        assert "not shown" not in output
