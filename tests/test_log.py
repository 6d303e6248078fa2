import json
import logging

import pytest

from itemdesk import log


@pytest.fixture
def fresh_logger(monkeypatch):
    saved = list(log.logger.handlers)
    for handler in saved:
        log.logger.removeHandler(handler)
    monkeypatch.setattr(log, "_log_dir", None)
    yield log.logger
    for handler in list(log.logger.handlers):
        log.logger.removeHandler(handler)
        handler.close()
    for handler in saved:
        log.logger.addHandler(handler)


def test_configure_logging_writes_text_and_jsonl(tmp_path, fresh_logger):
    log.configure_logging(log_dir=tmp_path)
    log.log_event("item_dialog.submit", {"mode": "create"})
    for handler in fresh_logger.handlers:
        handler.flush()

    assert log.get_log_directory() == tmp_path.resolve()
    text_path = tmp_path / "itemdesk.log"
    json_path = tmp_path / "itemdesk.jsonl"
    assert "item_dialog.submit" in text_path.read_text(encoding="utf-8")
    record = json.loads(json_path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["event"] == "item_dialog.submit"
    assert record["payload"] == {"mode": "create"}
    assert "timestamp" in record


def test_configure_logging_is_idempotent(tmp_path, fresh_logger):
    log.configure_logging(log_dir=tmp_path)
    count = len(fresh_logger.handlers)
    log.configure_logging(log_dir=tmp_path)
    assert len(fresh_logger.handlers) == count


def test_log_dir_from_environment(tmp_path, monkeypatch, fresh_logger):
    monkeypatch.setenv(log.LOG_DIR_ENV, str(tmp_path / "env-logs"))
    log.configure_logging()
    assert log.get_log_directory() == (tmp_path / "env-logs").resolve()


def test_console_formatter_appends_event_payload():
    record = logging.LogRecord("itemdesk", logging.INFO, __file__, 1, "saved", (), None)
    record.json = {"event": "saved", "payload": {"id": "x"}}
    assert log.ConsoleFormatter().format(record) == 'INFO: saved {"id": "x"}'


def test_console_formatter_plain_message():
    record = logging.LogRecord("itemdesk", logging.WARNING, __file__, 1, "plain %s", ("text",), None)
    assert log.ConsoleFormatter().format(record) == "WARNING: plain text"
