# -*- coding: utf-8 -*-
"""
PID 控制参数配置 (PID Control Configuration)

[调参指南 Tuning Guide]
- Kp (比例): 主要动力，越大响应越快，但容易震荡
- Ki (积分): 消除稳态误差，单位 1/秒（内部按采样周期缩放）
- Kd (微分): 阻尼作用，抑制震荡，单位 秒（内部按采样周期缩放）

[调参流程]
1. 先调 Kp: 从小到大，直到出现轻微震荡
2. 再加 Kd: 消除震荡，平滑响应
3. 最后调 Ki: 如果有稳态误差才加

[方向 Direction]
- DIRECT:  +误差 -> +输出（例如加热器）
- REVERSE: +误差 -> -输出（例如制冷）
"""

from ..core.numeric import get_backend
from ..core.pid import ControllerDirection, OutputMode, PIDController


class PIDConfig:
    """PID 控制参数 (PID Control Parameters)"""

    # ==========================
    # PID 三要素
    # ==========================
    KP = 1.0    # 比例系数 (Proportional Gain)
    KI = 0.0    # 积分系数 (Integral Gain)
    KD = 0.0    # 微分系数 (Derivative Gain)

    # ==========================
    # 模式
    # ==========================
    DIRECTION = ControllerDirection.DIRECT
    OUTPUT_MODE = OutputMode.DONT_ACCUMULATE

    # ==========================
    # 采样与限幅
    # ==========================
    SAMPLE_PERIOD_MS = 10   # 采样周期（毫秒）
    OUT_MIN = -100.0        # 输出下限
    OUT_MAX = 100.0         # 输出上限
    SETPOINT = 0.0          # 设定值

    # ==========================
    # 数值后端
    # ==========================
    # float / float32 / float64 / fraction / fixed
    NUMERIC = "float"

    @classmethod
    def get_tuning_dict(cls):
        """
        返回当前参数字典
        Returns current parameters as dict
        """
        return {
            'KP': cls.KP,
            'KI': cls.KI,
            'KD': cls.KD,
            'DIRECTION': cls.DIRECTION.name,
            'OUTPUT_MODE': cls.OUTPUT_MODE.name,
            'SAMPLE_PERIOD_MS': cls.SAMPLE_PERIOD_MS,
            'OUT_MIN': cls.OUT_MIN,
            'OUT_MAX': cls.OUT_MAX,
            'SETPOINT': cls.SETPOINT,
            'NUMERIC': cls.NUMERIC,
        }

    @classmethod
    def update_from_dict(cls, data):
        """
        从字典更新参数（未知键忽略）
        Update parameters from dict. DIRECTION / OUTPUT_MODE accept enum names.
        """
        # 先解析枚举，名称错误时不修改任何参数
        direction = ControllerDirection[data['DIRECTION']] if 'DIRECTION' in data else cls.DIRECTION
        output_mode = OutputMode[data['OUTPUT_MODE']] if 'OUTPUT_MODE' in data else cls.OUTPUT_MODE
        numeric = data.get('NUMERIC', cls.NUMERIC)
        get_backend(numeric)

        cls.KP = data.get('KP', cls.KP)
        cls.KI = data.get('KI', cls.KI)
        cls.KD = data.get('KD', cls.KD)
        cls.SAMPLE_PERIOD_MS = data.get('SAMPLE_PERIOD_MS', cls.SAMPLE_PERIOD_MS)
        cls.OUT_MIN = data.get('OUT_MIN', cls.OUT_MIN)
        cls.OUT_MAX = data.get('OUT_MAX', cls.OUT_MAX)
        cls.SETPOINT = data.get('SETPOINT', cls.SETPOINT)
        cls.DIRECTION = direction
        cls.OUTPUT_MODE = output_mode
        cls.NUMERIC = numeric

    @classmethod
    def create_controller(cls, debug_sink=None):
        """
        按当前参数创建并初始化控制器
        Build an initialized PIDController from the current values.
        """
        pid = PIDController(get_backend(cls.NUMERIC), debug_sink=debug_sink)
        pid.init(
            cls.KP, cls.KI, cls.KD,
            cls.DIRECTION, cls.OUTPUT_MODE, cls.SAMPLE_PERIOD_MS,
            cls.OUT_MIN, cls.OUT_MAX, cls.SETPOINT,
        )
        return pid
