# -*- coding: utf-8 -*-
"""
控制核心 (Control Core)

PID 控制器与数值后端。
"""

from .numeric import BACKENDS, FixedPoint, Numeric, clamp, fixed_point_type, get_backend
from .pid import (
    DEBUG_BUFF_SIZE,
    RUN_COUNT_MAX,
    ControllerDirection,
    ControllerNotInitializedError,
    InvalidConfigurationError,
    OutputMode,
    PIDController,
    PIDError,
)

__all__ = [
    # 控制器
    'PIDController',
    'ControllerDirection',
    'OutputMode',
    'DEBUG_BUFF_SIZE',
    'RUN_COUNT_MAX',

    # 异常
    'PIDError',
    'InvalidConfigurationError',
    'ControllerNotInitializedError',

    # 数值后端
    'Numeric',
    'FixedPoint',
    'fixed_point_type',
    'BACKENDS',
    'get_backend',
    'clamp',
]
