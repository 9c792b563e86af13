"""Tests for logging configuration, formatters and the component adapter."""

import io
import json
import logging

import pytest

from tuneit.config.models import LogFormat, LogLevel
from tuneit.logging import ComponentLoggerAdapter, get_logger
from tuneit.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from tuneit.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(**extra) -> logging.LogRecord:
    return logging.getLogger("tuneit.test").makeRecord(
        "tuneit.test", logging.INFO, "test.py", 1, "Salary extracted", (), None, extra=extra
    )


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_mandatory_fields(self):
        log_obj = json.loads(JSONFormatter().format(make_record()))

        assert log_obj["level"] == "INFO"
        assert log_obj["logger"] == "tuneit.test"
        assert log_obj["message"] == "Salary extracted"
        assert "name" not in log_obj

    def test_extra_fields(self):
        record = make_record(event="salary.extract.matched", salary_min=120000, has_salary=True)

        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["event"] == "salary.extract.matched"
        assert log_obj["salary_min"] == 120000
        assert log_obj["has_salary"] is True

    def test_non_ascii_is_kept(self):
        record = make_record(match_text="£45k–£55k")

        output = JSONFormatter().format(record)

        assert "£45k–£55k" in output

    def test_timestamp_format(self):
        timestamp = json.loads(JSONFormatter().format(make_record()))["timestamp"]

        assert timestamp.endswith("Z")
        assert len(timestamp) == 24  # 2025-11-04T10:30:00.123Z


class TestKeyValueFormatter:
    """Tests for KeyValueFormatter."""

    @pytest.fixture
    def formatter(self):
        return KeyValueFormatter("[%(levelname)s] %(name)s: %(message)s")

    def test_extras_are_sorted_pairs(self, formatter):
        record = make_record(event="salary.normalize.bounds_swapped", salary_max=150000)

        output = formatter.format(record)

        assert output == (
            "[INFO] tuneit.test: Salary extracted "
            "event=salary.normalize.bounds_swapped salary_max=150000"
        )

    def test_value_quoting(self, formatter):
        record = make_record(match_text="$40 - $50 an hour", flag=False, missing=None)

        output = formatter.format(record)

        assert 'match_text="$40 - $50 an hour"' in output
        assert "flag=false" in output
        assert "missing=null" in output

    def test_service_fields_are_hidden(self, formatter):
        record = make_record()
        ContextualFilter(environment="test").filter(record)

        assert formatter.format(record) == "[INFO] tuneit.test: Salary extracted"


class TestContextualFilter:
    """Tests for ContextualFilter."""

    def test_static_fields(self):
        record = make_record()

        assert ContextualFilter(service="tuneit-test", environment="ci").filter(record)
        assert record.service == "tuneit-test"
        assert record.environment == "ci"

    def test_context_fields(self):
        with log_context(job_id=7, command="save"):
            record = make_record()
            ContextualFilter().filter(record)

        assert record.job_id == 7
        assert record.command == "save"

    def test_explicit_extra_wins_over_context(self):
        with log_context(job_id=7):
            record = make_record(job_id=8)
            ContextualFilter().filter(record)

        assert record.job_id == 8


class TestComponentLoggerAdapter:
    """Tests for get_logger and ComponentLoggerAdapter."""

    def test_plain_logger_without_component(self):
        assert isinstance(get_logger("tuneit.test"), logging.Logger)

    def test_component_is_added(self, caplog):
        adapter = get_logger("tuneit.test.adapter", component="salary")

        with caplog.at_level(logging.INFO, logger="tuneit.test.adapter"):
            adapter.info("Salary found", extra={"event": "salary.extract.matched"})

        record = caplog.records[-1]
        assert isinstance(adapter, ComponentLoggerAdapter)
        assert record.component == "salary"
        assert record.event == "salary.extract.matched"

    def test_call_extra_overrides_component(self, caplog):
        adapter = get_logger("tuneit.test.adapter", component="salary")

        with caplog.at_level(logging.INFO, logger="tuneit.test.adapter"):
            adapter.info("Configured", extra={"component": "logging"})

        assert caplog.records[-1].component == "logging"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            configure_logging(format_type="xml")

    def test_enum_level_and_format(self, restore_root_logger):
        """Test config enum members are accepted as well as plain strings."""
        configure_logging(level=LogLevel.DEBUG, format_type=LogFormat.JSON, stream=io.StringIO())

        assert restore_root_logger.level == logging.DEBUG
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_json_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

        with log_context(command="extract"):
            get_logger("tuneit.test.json", component="cli").info(
                "Running command", extra={"event": "cli.command.starting"}
            )

        log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert log_obj["event"] == "cli.command.starting"
        assert log_obj["component"] == "cli"
        assert log_obj["command"] == "extract"
        assert log_obj["service"] == "tuneit"
        assert log_obj["environment"] == "test"

    def test_key_value_handler(self, restore_root_logger):
        configure_logging(level="WARNING", format_type="key-value", stream=io.StringIO())

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, KeyValueFormatter)

    def test_level_filters_records(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="WARNING", stream=stream)

        logging.getLogger("tuneit.test.level").info("hidden")
        logging.getLogger("tuneit.test.level").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
