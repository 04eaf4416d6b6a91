# -*- coding: utf-8 -*-
"""
工具模块导出 (Utilities)

提供调试和开发辅助工具。
"""

from .data_recorder import DataRecorder, QuickPlotter
from .logger import Logger, debug, info, warning, error, critical

__all__ = [
    # 数据记录
    'DataRecorder',
    'QuickPlotter',

    # 日志
    'Logger',
    'debug',
    'info',
    'warning',
    'error',
    'critical'
]
