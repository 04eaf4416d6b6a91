# -*- coding: utf-8 -*-
"""
结构化日志工具 (Structured Logger)

[功能]
- 统一的日志格式
- 不同级别的日志（DEBUG, INFO, WARNING, ERROR）
- 输出到控制台，可选同时写入文件

[使用方法]
from pidctrl.utils.logger import Logger

Logger.setup_logging()              # 应用程序启动时调用一次
logger = Logger("PID")
logger.info("控制器初始化完成")
logger.warning("参数被忽略", kp=-1.0)

作为库使用时不会自动添加任何 handler，由应用程序决定日志去向。
"""

import logging
import sys
from pathlib import Path
from datetime import datetime


class Logger:
    """结构化日志器"""

    # 全局设置
    _initialized = False
    _log_dir = Path("logs")

    def __init__(self, name):
        """
        初始化日志器
        :param name: 模块名称
        """
        self.logger = logging.getLogger(f"pidctrl.{name}")

    @classmethod
    def setup_logging(cls, level=logging.DEBUG, log_to_file=False, log_dir=None):
        """
        设置全局日志配置（只生效一次）
        :param level: 根日志级别
        :param log_to_file: 是否同时写入文件
        :param log_dir: 日志目录（默认 ./logs）
        :return: 日志文件路径，未写文件时为 None
        """
        if cls._initialized:
            return None
        cls._initialized = True

        # 日志格式
        formatter = logging.Formatter(
            '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )

        # 控制台处理器
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.addHandler(console_handler)

        # 文件处理器（可选）
        if not log_to_file:
            return None

        log_dir = Path(log_dir) if log_dir is not None else cls._log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"pid_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        root_logger.info(f"日志文件: {log_file}")
        return log_file

    def debug(self, message, **kwargs):
        """调试信息"""
        self.logger.debug(self._format_message(message, kwargs))

    def info(self, message, **kwargs):
        """一般信息"""
        self.logger.info(self._format_message(message, kwargs))

    def warning(self, message, **kwargs):
        """警告信息"""
        self.logger.warning(self._format_message(message, kwargs))

    def error(self, message, **kwargs):
        """错误信息"""
        self.logger.error(self._format_message(message, kwargs))

    def critical(self, message, **kwargs):
        """严重错误"""
        self.logger.critical(self._format_message(message, kwargs))

    @staticmethod
    def _format_message(message, kwargs):
        """格式化消息（添加键值对参数）"""
        if not kwargs:
            return message

        params = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        return f"{message} ({params})"


# 快捷方式（全局日志器）
_global_logger = Logger("System")

def debug(message, **kwargs):
    _global_logger.debug(message, **kwargs)

def info(message, **kwargs):
    _global_logger.info(message, **kwargs)

def warning(message, **kwargs):
    _global_logger.warning(message, **kwargs)

def error(message, **kwargs):
    _global_logger.error(message, **kwargs)

def critical(message, **kwargs):
    _global_logger.critical(message, **kwargs)
