# -*- coding: utf-8 -*-
"""日志测试 (Logger tests)"""

import logging

import pytest

from pidctrl.utils import logger as logger_module
from pidctrl.utils.logger import Logger


def test_format_message():
    assert Logger._format_message("hello", {}) == "hello"
    assert Logger._format_message("set", {'kp': 1.5, 'ki': 0}) == "set (kp=1.5, ki=0)"


def test_logger_namespaces_and_levels(caplog):
    caplog.set_level(logging.DEBUG)
    log = Logger("Test")
    log.debug("d")
    log.info("i", x=1)
    log.warning("w")
    log.error("e")
    log.critical("c")

    records = [r for r in caplog.records if r.name == "pidctrl.Test"]
    assert [r.levelname for r in records] == ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    assert records[1].getMessage() == "i (x=1)"


def test_global_shortcuts(caplog):
    caplog.set_level(logging.DEBUG, logger="pidctrl.System")
    logger_module.info("started", loop="pid")
    logger_module.warning("slow")

    messages = [r.getMessage() for r in caplog.records if r.name == "pidctrl.System"]
    assert messages == ["started (loop=pid)", "slow"]


@pytest.fixture
def fresh_root(monkeypatch):
    monkeypatch.setattr(Logger, "_initialized", False)
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        formatter = handler.formatter
        if formatter is not None and formatter._fmt.startswith('[%(asctime)s] [%(name)s]'):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_setup_logging_writes_file(tmp_path, fresh_root):
    log_file = Logger.setup_logging(level=logging.INFO, log_to_file=True, log_dir=tmp_path)

    assert log_file is not None and log_file.parent == tmp_path
    Logger("File").info("to file", n=3)
    for handler in fresh_root.handlers:
        handler.flush()
    assert "[pidctrl.File] [INFO] to file (n=3)" in log_file.read_text(encoding='utf-8')

    # 第二次调用不再生效
    assert Logger.setup_logging(log_to_file=True, log_dir=tmp_path) is None


def test_setup_logging_console_only(fresh_root):
    before = len(fresh_root.handlers)
    assert Logger.setup_logging() is None
    assert len(fresh_root.handlers) == before + 1
    assert fresh_root.level == logging.DEBUG
