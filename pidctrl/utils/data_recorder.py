# -*- coding: utf-8 -*-
"""
数据记录器 (Data Recorder)

⭐ PID 调试神器！

[功能]
- 每个控制周期记录设定值、输入、误差、P/I/D 三项和输出
- 自动保存为 CSV 文件
- 方便用 Excel 或 Python 绘图分析

[使用方法]
with DataRecorder("step_test") as recorder:
    for sample in samples:
        pid.run(sample)
        recorder.record(pid, sample)
# 保存到 logs/step_test_20260210_143052.csv
"""

import csv
import time
from pathlib import Path
from datetime import datetime

from .logger import Logger

_logger = Logger("Recorder")


class DataRecorder:
    """数据记录器"""

    # CSV 列定义
    FIELDNAMES = [
        'timestamp',     # 时间戳（秒）
        'setpoint',      # 设定值
        'input',         # 测量值
        'error',         # 误差
        'p_term',        # 比例项
        'i_term',        # 积分项（已限幅）
        'd_term',        # 微分项
        'output',        # 输出（已限幅）
        'kp',            # 当前 Kp 值
        'ki',            # 当前 Ki 值
        'kd'             # 当前 Kd 值
    ]

    def __init__(self, session_name="pid_debug", auto_save_interval=100, log_dir="logs"):
        """
        初始化记录器
        :param session_name: 会话名称（用于文件命名）
        :param auto_save_interval: 自动保存间隔（记录条数），0 或 None 表示只在 save/close 时保存
        :param log_dir: 输出目录
        """
        if auto_save_interval is not None and auto_save_interval < 0:
            raise ValueError(f"auto_save_interval must be >= 0, got {auto_save_interval}")

        self.session_name = session_name
        self.auto_save_interval = auto_save_interval

        # 数据缓冲区
        self.buffer = []
        self.record_count = 0

        # 汇总统计（累计值，不保存历史）
        self._abs_error_sum = 0.0
        self._max_abs_error = 0.0
        self._max_abs_output = 0.0

        # 开始时间
        self.start_time = time.time()

        # 确保日志目录存在
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # 生成文件名
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.filename = self.log_dir / f"{session_name}_{timestamp}.csv"

        _logger.info("📊 数据记录器已启动", file=self.filename)

    def record(self, controller, input_value):
        """
        记录控制器当前状态（在 run() 之后调用）
        :param controller: PIDController 实例
        :param input_value: 本次 run() 的输入
        """
        self.log(
            setpoint=float(controller.setpoint),
            input_value=float(input_value),
            error=float(controller.error),
            p_term=float(controller.p_term),
            i_term=float(controller.i_term),
            d_term=float(controller.d_term),
            output=float(controller.output),
            kp=float(controller.get_kp()),
            ki=float(controller.get_ki()),
            kd=float(controller.get_kd()),
        )

    def log(self, setpoint=0.0, input_value=0.0, error=0.0, p_term=0.0, i_term=0.0,
            d_term=0.0, output=0.0, kp=0.0, ki=0.0, kd=0.0):
        """
        记录一条数据
        """
        timestamp = time.time() - self.start_time

        record = {
            'timestamp': f"{timestamp:.3f}",
            'setpoint': f"{setpoint:.4f}",
            'input': f"{input_value:.4f}",
            'error': f"{error:.4f}",
            'p_term': f"{p_term:.4f}",
            'i_term': f"{i_term:.4f}",
            'd_term': f"{d_term:.4f}",
            'output': f"{output:.4f}",
            'kp': f"{kp:.3f}",
            'ki': f"{ki:.3f}",
            'kd': f"{kd:.3f}"
        }

        self.buffer.append(record)
        self.record_count += 1
        self._abs_error_sum += abs(error)
        self._max_abs_error = max(self._max_abs_error, abs(error))
        self._max_abs_output = max(self._max_abs_output, abs(output))

        # 自动保存
        if self.auto_save_interval and self.record_count % self.auto_save_interval == 0:
            self.save()

    def save(self):
        """保存缓冲区数据到文件"""
        if not self.buffer:
            return

        # 判断文件是否存在（决定是否写表头）
        file_exists = self.filename.exists()

        with open(self.filename, 'a', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.FIELDNAMES)

            # 第一次写入时添加表头
            if not file_exists:
                writer.writeheader()

            writer.writerows(self.buffer)

        _logger.debug(f"✓ 已保存 {len(self.buffer)} 条记录 (总计 {self.record_count})")
        self.buffer.clear()

    def summary(self):
        """
        汇总统计
        :return: dict(count, mean_abs_error, max_abs_error, max_abs_output)
        """
        if not self.record_count:
            return {'count': 0, 'mean_abs_error': 0.0, 'max_abs_error': 0.0, 'max_abs_output': 0.0}

        return {
            'count': self.record_count,
            'mean_abs_error': self._abs_error_sum / self.record_count,
            'max_abs_error': self._max_abs_error,
            'max_abs_output': self._max_abs_output,
        }

    def close(self):
        """关闭记录器（保存剩余数据）"""
        self.save()
        duration = time.time() - self.start_time
        _logger.info("📊 记录完成！", records=self.record_count,
                     duration=f"{duration:.1f}s", file=self.filename)

    def __enter__(self):
        """支持 with 语句"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """退出时自动保存"""
        self.close()


class QuickPlotter:
    """
    快速绘图工具（需要 pandas + matplotlib，安装 plot 扩展）

    [使用方法]
    QuickPlotter.plot_csv("logs/step_test_20260210_143052.csv")
    """

    @staticmethod
    def plot_csv(csv_file, show_plot=True, save_fig=True):
        """
        从 CSV 文件绘制 PID 曲线
        :param csv_file: CSV 文件路径
        :param show_plot: 是否显示图形
        :param save_fig: 是否保存图片
        :return: matplotlib Figure
        """
        import pandas as pd
        import matplotlib.pyplot as plt

        # 读取数据
        df = pd.read_csv(csv_file)

        # 创建图形
        fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)
        fig.suptitle(f'PID 调试数据分析 - {Path(csv_file).name}', fontsize=14)

        # 子图1: 设定值 / 测量值
        axes[0].plot(df['timestamp'], df['setpoint'], label='Setpoint', color='gray', linestyle='--')
        axes[0].plot(df['timestamp'], df['input'], label='Input', color='red', alpha=0.7)
        axes[0].set_title('设定值与测量值 (Setpoint / Input)')
        axes[0].legend()
        axes[0].grid(True, alpha=0.3)

        # 子图2: P/I/D 三项
        axes[1].plot(df['timestamp'], df['p_term'], label='P', color='orange', alpha=0.7)
        axes[1].plot(df['timestamp'], df['i_term'], label='I', color='green', alpha=0.7)
        axes[1].plot(df['timestamp'], df['d_term'], label='D', color='blue', alpha=0.7)
        axes[1].axhline(y=0, color='gray', linestyle='--', alpha=0.5)
        axes[1].set_title('PID 分项 (Terms)')
        axes[1].legend()
        axes[1].grid(True, alpha=0.3)

        # 子图3: 输出
        axes[2].plot(df['timestamp'], df['output'], label='Output', color='purple', alpha=0.7)
        axes[2].set_xlabel('时间 (秒)')
        axes[2].set_title('PID 输出曲线 (Output)')
        axes[2].legend()
        axes[2].grid(True, alpha=0.3)

        plt.tight_layout()

        # 保存图片
        if save_fig:
            img_file = Path(csv_file).with_suffix('.png')
            fig.savefig(img_file, dpi=150)
            _logger.info(f"✓ 图表已保存: {img_file}")

        # 显示图形
        if show_plot:
            plt.show()

        return fig
