from __future__ import annotations

import json

import pytest
from loguru import logger as loguru_logger

from infrastructure.logging.log_setup import add_file_sink, remove_sink
from infrastructure.logging.loguru_logger import LoguruLogger


@pytest.fixture
def captured():
    messages = []
    handler_id = loguru_logger.add(lambda msg: messages.append(msg.record), level="DEBUG")
    yield messages
    loguru_logger.remove(handler_id)


def test_loguru_logger_formats_event_and_payload(captured) -> None:
    LoguruLogger().bind(use_case="CreatePost").info("use_case.start", params=["title"])

    record = captured[-1]
    event, payload = record["message"].split(" ", 1)
    assert event == "use_case.start"
    assert json.loads(payload) == {"use_case": "CreatePost", "params": ["title"], "type": "use_case.start"}
    assert record["level"].name == "INFO"
    assert record["extra"]["use_case"] == "CreatePost"


def test_loguru_logger_levels(captured) -> None:
    log = LoguruLogger()
    log.debug("a")
    log.warning("b")
    log.error("c")

    assert [r["level"].name for r in captured[-3:]] == ["DEBUG", "WARNING", "ERROR"]


def test_file_sink_only_receives_its_records(tmp_path) -> None:
    log_file = tmp_path / "log" / "services" / "mailer.log"
    handler_id = add_file_sink(log_file, sink_id="mailer")
    try:
        LoguruLogger(sink_id="mailer").info("mail.sent", to="x@example.com")
        LoguruLogger(sink_id="other").info("not.for.mailer")
    finally:
        remove_sink(handler_id)

    content = log_file.read_text(encoding="utf-8")
    assert "mail.sent" in content
    assert "not.for.mailer" not in content


def test_setup_console_logging_prints_at_level(capsys) -> None:
    from infrastructure.logging.log_setup import setup_console_logging

    setup_console_logging(level="INFO")
    log = LoguruLogger()
    log.debug("too.quiet")
    log.info("loud.enough", n=1)

    out = capsys.readouterr().out
    assert "loud.enough" in out
    assert "too.quiet" not in out
