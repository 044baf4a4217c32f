import json

import structlog

from bootwrap.utils.logging import bind_child_context, clear_child_context, setup_logging


def test_structured_logs_include_child_context(capsys):
    setup_logging("INFO", "json")
    bind_child_context("Go server", 4321)

    logger = structlog.get_logger()
    logger.info("test_event", foo="bar")
    err = capsys.readouterr().err.strip().splitlines()[-1]
    data = json.loads(err)
    assert data["event"] == "test_event"
    assert data["level"] == "info"
    assert data["child"] == "Go server"
    assert data["child_pid"] == 4321
    assert data["foo"] == "bar"
    assert "timestamp" in data


def test_diagnostics_never_reach_stdout(capsys):
    setup_logging("INFO", "json")
    structlog.get_logger().info("diagnostic_only")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "diagnostic_only" in captured.err


def test_clear_child_context(capsys):
    setup_logging("INFO", "json")
    bind_child_context("Go server", 4321)
    clear_child_context()

    structlog.get_logger().info("after_clear")
    data = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert "child" not in data
    assert "child_pid" not in data


def test_redaction(capsys):
    setup_logging("INFO", "json")
    logger = structlog.get_logger()
    logger.info("leak_test", password="secret", token="abc")
    data = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert data["password"] == "[REDACTED]"
    assert data["token"] == "[REDACTED]"


def test_level_filtering(capsys):
    setup_logging("WARNING", "json")
    logger = structlog.get_logger()
    logger.info("hidden")
    logger.warning("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_console_format(capsys):
    setup_logging("INFO", "console")
    structlog.get_logger().info("Go server exited with code 0", exit_code=0)
    err = capsys.readouterr().err
    assert "Go server exited with code 0" in err
    assert "exit_code=0" in err
