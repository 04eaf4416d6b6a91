# -*- coding: utf-8 -*-
"""
pidctrl - 离散时间 PID 控制器 (Discrete-time PID Controller)

[模块 Modules]
- core:   PID 控制器与数值后端（float / numpy / 定点数）
- config: 参数配置与 JSON 加载
- utils:  日志与数据记录
- gui:    PyQt6 调参面板（可选，需要 gui 扩展）
"""

from .core import (
    ControllerDirection,
    ControllerNotInitializedError,
    FixedPoint,
    InvalidConfigurationError,
    OutputMode,
    PIDController,
    PIDError,
)

__version__ = "1.0.0"

__all__ = [
    'PIDController',
    'ControllerDirection',
    'OutputMode',
    'FixedPoint',
    'PIDError',
    'InvalidConfigurationError',
    'ControllerNotInitializedError',
]
