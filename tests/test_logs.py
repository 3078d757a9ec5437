"""Log sink configuration."""

from __future__ import annotations

import logging
import re
import threading

from deployhook.logs import LOGGER_NAME, configure_logging

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] \[(\w+)\] (.*)$")


def test_writes_timestamped_level_tagged_lines(tmp_path):
    log_file = tmp_path / "nested" / "dir" / "webhook.log"
    logger = configure_logging(log_file, "INFO")
    logger.info("first")
    logger.warning("second")
    logger.debug("hidden")

    lines = log_file.read_text().splitlines()
    assert [LINE.match(line).groups() for line in lines] == [("INFO", "first"), ("WARNING", "second")]


def test_appends_to_existing_file(tmp_path):
    log_file = tmp_path / "webhook.log"
    log_file.write_text("[2024-01-01 00:00:00] [INFO] earlier\n")
    configure_logging(log_file).info("later")
    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0] == "[2024-01-01 00:00:00] [INFO] earlier"
    assert lines[1].endswith("[INFO] later")


def test_reconfigure_replaces_handlers(tmp_path):
    configure_logging(tmp_path / "a.log")
    logger = configure_logging(tmp_path / "b.log")
    assert len(logger.handlers) == 1
    logger.info("only in b")
    assert "only in b" not in (tmp_path / "a.log").read_text()
    assert "only in b" in (tmp_path / "b.log").read_text()


def test_unknown_level_falls_back_to_info(tmp_path):
    logger = configure_logging(tmp_path / "webhook.log", "chatty")
    assert logger.level == logging.INFO
    assert logger.name == LOGGER_NAME


def test_unwritable_location_falls_back_to_stderr(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("")
    logger = configure_logging(blocker / "webhook.log")
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert not isinstance(logger.handlers[0], logging.FileHandler)
    assert "cannot open log file" in capsys.readouterr().err


def test_concurrent_writers_produce_whole_lines(tmp_path):
    log_file = tmp_path / "webhook.log"
    logger = configure_logging(log_file)

    def write(worker):
        for n in range(200):
            logger.info(f"worker {worker} entry {n} " + "x" * 256)

    threads = [threading.Thread(target=write, args=(w,)) for w in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = log_file.read_text().splitlines()
    assert len(lines) == 1600
    assert all(LINE.match(line) for line in lines)
    for w in range(8):
        assert sum(line.count(f"] worker {w} entry ") for line in lines) == 200
