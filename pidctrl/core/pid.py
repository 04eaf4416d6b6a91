# -*- coding: utf-8 -*-
"""
PID 控制器核心 (PID Controller Core)

[职责 Responsibility]
离散时间 PID 控制器，每个采样周期调用一次 run()。
- 积分限幅 (Anti-windup)：积分项单独限幅，与输出限幅分开
- 微分先行 (Derivative on measurement)：微分对测量值求导，设定值跳变不会产生冲击
- 首次运行不计算微分（没有上一次的输入）
- 运行计数饱和，不会溢出

[使用方法 Usage]
pid = PIDController()
pid.init(kp=1.0, ki=0.5, kd=0.1,
         direction=ControllerDirection.DIRECT,
         output_mode=OutputMode.DONT_ACCUMULATE,
         sample_period_ms=10, out_min=-100, out_max=100, setpoint=50)
while True:
    out = pid.run(read_sensor())
"""

from enum import Enum

from .numeric import clamp
from ..utils.logger import Logger


# 调试信息最大长度（字符）
DEBUG_BUFF_SIZE = 200

# 运行计数上限 (uint32)
RUN_COUNT_MAX = 2**32 - 1


class ControllerDirection(Enum):
    """控制方向 (Controller direction)"""
    DIRECT = 0      # 正作用：+误差 -> +输出
    REVERSE = 1     # 反作用：+误差 -> -输出


class OutputMode(Enum):
    """
    输出模式 (Output mode)
    DONT_ACCUMULATE: 位置式，每次重新计算输出（距离控制）
    ACCUMULATE:      增量式，输出 = 上次输出 + 本次增量（速度控制）
    """
    DONT_ACCUMULATE = 0
    ACCUMULATE = 1
    DISTANCE_PID = 0
    VELOCITY_PID = 1


class PIDError(Exception):
    """PID 模块异常基类"""


class InvalidConfigurationError(PIDError, ValueError):
    """init() 参数无效（没有可回退的旧配置）"""


class ControllerNotInitializedError(PIDError, RuntimeError):
    """在 init() 之前调用了 run() / set_tunings() / set_sample_period()"""


_logger = Logger("PID")


class PIDController:
    """
    通用 PID 控制器 (Generic PID Controller)

    :param numeric_type: 数值类型，见 pidctrl.core.numeric（默认 float）
    :param debug_sink: 调试信息输出，接受一个字符串的可调用对象（默认写入日志）
    """

    def __init__(self, numeric_type=float, debug_sink=None):
        self.num = numeric_type
        self.debug_sink = debug_sink if debug_sink is not None else _logger.debug
        self.initialized = False

        zero = self.num(0)

        # 调参参数
        self.actual_kp = zero
        self.actual_ki = zero
        self.actual_kd = zero
        self.zkp = zero
        self.zki = zero
        self.zkd = zero

        # 模式
        self.direction = ControllerDirection.DIRECT
        self.output_mode = OutputMode.DONT_ACCUMULATE

        # 运行状态
        self.setpoint = zero
        self.prev_input = zero
        self.prev_output = zero
        self.error = zero
        self.p_term = zero
        self.i_term = zero
        self.d_term = zero
        self.output = zero

        self.out_min = None
        self.out_max = None
        self.sample_period_ms = None
        self.run_count = 0

    # ==========================
    # 配置 (Configuration)
    # ==========================
    def init(self, kp, ki, kd, direction, output_mode, sample_period_ms,
             out_min, out_max, setpoint):
        """
        初始化控制器，必须在第一次 run() 之前调用。

        参数无效时抛出 InvalidConfigurationError，且不修改任何字段。
        """
        try:
            kp, ki, kd = self.num(kp), self.num(ki), self.num(kd)
            out_min, out_max = self.num(out_min), self.num(out_max)
            setpoint = self.num(setpoint)
            direction = ControllerDirection(direction)
            output_mode = OutputMode(output_mode)
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(f"invalid init argument: {e}") from e

        if out_min >= out_max:
            raise InvalidConfigurationError(f"out_min ({out_min}) must be < out_max ({out_max})")
        if not sample_period_ms > 0:
            raise InvalidConfigurationError(f"sample_period_ms must be > 0, got {sample_period_ms}")
        if kp < 0 or ki < 0 or kd < 0:
            raise InvalidConfigurationError(f"gains must be >= 0, got kp={kp}, ki={ki}, kd={kd}")

        self.set_output_limits(out_min, out_max)
        self.sample_period_ms = sample_period_ms
        self.direction = direction
        self.output_mode = output_mode
        self.set_tunings(kp, ki, kd)
        self.setpoint = setpoint

        zero = self.num(0)
        self.prev_input = zero
        self.prev_output = zero
        self.error = zero
        self.p_term = zero
        self.i_term = zero
        self.d_term = zero
        self.output = zero
        self.run_count = 0

        self.initialized = True

    def set_tunings(self, kp, ki, kd):
        """
        设置 PID 参数，可以在运行中随时调用。
        任一参数为负时忽略本次设置，返回 False。
        """
        self._require_sample_period()
        kp, ki, kd = self.num(kp), self.num(ki), self.num(kd)
        if kp < 0 or ki < 0 or kd < 0:
            return False

        self.actual_kp = kp
        self.actual_ki = ki
        self.actual_kd = kd

        # 按采样周期缩放 (time-step scaled gains)
        period_s = self.num(self.sample_period_ms / 1000.0)
        self.zkp = kp
        self.zki = ki * period_s
        self.zkd = kd / period_s

        if self.direction == ControllerDirection.REVERSE:
            self.zkp = -self.zkp
            self.zki = -self.zki
            self.zkd = -self.zkd

        self.print_debug(
            f"PID: Tuning parameters set. Kp = {float(kp):.1f}, Ki = {float(ki):.1f}, "
            f"Kd = {float(kd):.1f}, Zp = {float(self.zkp):.1f}, Zi = {float(self.zki):.1f}, "
            f"Zd = {float(self.zkd):.1f}, with sample period = {float(self.sample_period_ms):.1f}ms"
        )
        return True

    def set_output_limits(self, out_min, out_max):
        """
        设置输出范围。out_min >= out_max 时忽略，返回 False。
        新范围从下一次 run() 开始生效。
        """
        out_min, out_max = self.num(out_min), self.num(out_max)
        if out_min >= out_max:
            return False
        self.out_min = out_min
        self.out_max = out_max
        return True

    def set_controller_direction(self, direction):
        """
        设置控制方向。方向改变时把缩放后的参数取反（只取反一次）。
        :return: 是否发生了翻转
        """
        direction = ControllerDirection(direction)
        changed = direction != self.direction
        if changed:
            self.zkp = -self.zkp
            self.zki = -self.zki
            self.zkd = -self.zkd
        self.direction = direction
        return changed

    def set_sample_period(self, new_sample_period_ms):
        """
        修改采样周期，按比例重新缩放 zki/zkd，保持物理意义上的增益不变。
        """
        self._require_sample_period()
        if not new_sample_period_ms > 0:
            return False
        ratio = self.num(new_sample_period_ms / self.sample_period_ms)
        self.zki = self.zki * ratio
        self.zkd = self.zkd / ratio
        self.sample_period_ms = new_sample_period_ms
        return True

    def _require_sample_period(self):
        if self.sample_period_ms is None:
            raise ControllerNotInitializedError("init() must be called before changing tunings or sample period")

    # ==========================
    # 读取参数 (Accessors)
    # ==========================
    def get_kp(self):
        return self.actual_kp

    def get_ki(self):
        return self.actual_ki

    def get_kd(self):
        return self.actual_kd

    def get_zp(self):
        return self.zkp

    def get_zi(self):
        return self.zki

    def get_zd(self):
        return self.zkd

    kp = property(get_kp)
    ki = property(get_ki)
    kd = property(get_kd)
    zp = property(get_zp)
    zi = property(get_zi)
    zd = property(get_zd)

    # ==========================
    # 计算 (Computation)
    # ==========================
    def run(self, input_value):
        """
        计算一次 PID 输出，每个采样周期调用一次。
        :param input_value: 当前测量值
        :return: 限幅后的控制输出
        """
        if not self.initialized:
            raise ControllerNotInitializedError("init() must be called before run()")

        input_value = self.num(input_value)

        self.error = self.setpoint - input_value

        # 积分项 + 积分限幅
        self.i_term = clamp(self.i_term + self.zki * self.error, self.out_min, self.out_max)

        # 微分项：第一次运行时跳过
        if self.run_count > 0:
            self.d_term = -self.zkd * (input_value - self.prev_input)

        self.p_term = self.zkp * self.error

        if self.output_mode == OutputMode.ACCUMULATE:
            output = self.prev_output + self.p_term + self.i_term + self.d_term
        else:
            output = self.p_term + self.i_term + self.d_term

        self.output = clamp(output, self.out_min, self.out_max)

        self.prev_input = input_value
        self.prev_output = self.output

        if self.run_count < RUN_COUNT_MAX:
            self.run_count += 1

        return self.output

    # ==========================
    # 调试 (Debug)
    # ==========================
    def print_debug(self, msg):
        """输出调试信息（超长截断）"""
        self.debug_sink(msg[:DEBUG_BUFF_SIZE])

    def __repr__(self):
        return (f"PIDController(kp={self.actual_kp}, ki={self.actual_ki}, kd={self.actual_kd}, "
                f"direction={self.direction.name}, output_mode={self.output_mode.name}, "
                f"initialized={self.initialized})")
