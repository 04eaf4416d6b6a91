# -*- coding: utf-8 -*-
"""
GUI 组件导出 (Widget Exports)
"""

from .pid_tuner import PIDTuner

__all__ = [
    'PIDTuner'
]
