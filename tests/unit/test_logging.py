"""Unit tests for logging setup."""

import json

import pytest
import structlog

from toyen.core.config import Config
from toyen.core.logging import bind_context, clear_context, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for routing events to stderr."""

    def test_level_filters_events(self, capsys):
        """Test level filtering.

        Verifies that debug events are dropped at INFO and that events go to
        stderr, never stdout.
        """
        setup_logging(Config(host_triple="x86_64-linux", log_level="INFO"), json_output=False)
        logger = get_logger("toyen.test")

        logger.debug("hidden_event")
        logger.info("shown_event")

        captured = capsys.readouterr()
        assert "shown_event" in captured.err
        assert "hidden_event" not in captured.err
        assert captured.out == ""

    def test_json_output_carries_bound_context(self, capsys):
        setup_logging(Config(host_triple="x86_64-linux", log_level="DEBUG"), json_output=True)
        bind_context(run_id="abc123")

        get_logger("toyen.test").debug("compiled")

        err = capsys.readouterr().err
        assert '"abc123"' in err
        assert '"compiled"' in err

    def test_json_renderer_emits_objects(self):
        """Test the JSON renderer chain directly, without terminal wrapping."""
        setup_logging(json_output=True)
        processors = structlog.get_config()["processors"]
        rendered = processors[-1](None, "info", {"event": "loaded", "files": 2})
        assert json.loads(rendered) == {"event": "loaded", "files": 2}
