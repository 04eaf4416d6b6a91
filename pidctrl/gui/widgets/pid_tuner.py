# -*- coding: utf-8 -*-
"""
PID 调参面板 (PID Tuning Panel)

⭐ 这是在线调试 PID 的核心组件！

[功能]
1. 实时调整 Kp、Ki、Kd 参数
2. 切换控制方向（正作用 / 反作用）
3. 重置为初始参数

[使用技巧]
- 调用 bind(pid) 后，拖动滑块会直接调用 pid.set_tunings()
- 勾选"反作用"会调用 pid.set_controller_direction()
- 参数只在内存中生效，不会保存到文件
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QSlider, QPushButton, QCheckBox
)
from PyQt6.QtCore import Qt, pyqtSignal

from ...core.pid import ControllerDirection


class PIDTuner(QWidget):
    """PID 调参面板"""

    # 信号：PID 参数改变
    pid_changed = pyqtSignal(float, float, float)  # (kp, ki, kd)

    # 信号：方向改变
    direction_changed = pyqtSignal(bool)  # reverse

    # 信号：重置PID
    reset_requested = pyqtSignal()

    def __init__(self, initial_kp=1.0, initial_ki=0.0, initial_kd=0.0,
                 reverse=False, parent=None):
        super().__init__(parent)

        self.kp = initial_kp
        self.ki = initial_ki
        self.kd = initial_kd

        # 重置时恢复的值
        self._defaults = (initial_kp, initial_ki, initial_kd)
        self._default_reverse = reverse

        self.controller = None

        self.init_ui(reverse)
        self.update_sliders()

    def init_ui(self, reverse):
        """初始化UI"""
        layout = QVBoxLayout(self)

        # 标题
        title = QLabel("<b>⚙️ PID 参数调节</b>")
        title.setStyleSheet("color: #4CAF50; font-size: 14px;")
        layout.addWidget(title)

        # Kp: 0.00 - 10.00, Ki: 0.00 - 10.00, Kd: 0.000 - 1.000
        self.slider_kp, self.label_kp_val = self._add_slider(
            layout, "Kp:", 1000, self._on_kp_changed, "#FFA726", "↑ 比例项：响应速度（过大会震荡）")
        self.slider_ki, self.label_ki_val = self._add_slider(
            layout, "Ki:", 1000, self._on_ki_changed, "#66BB6A", "↑ 积分项：消除稳态误差 (1/s)")
        self.slider_kd, self.label_kd_val = self._add_slider(
            layout, "Kd:", 1000, self._on_kd_changed, "#42A5F5", "↑ 微分项：阻尼作用 (s)")

        layout.addSpacing(10)

        # ==========================
        # 方向设置
        # ==========================
        self.chk_reverse = QCheckBox("反作用 (Reverse)")
        self.chk_reverse.setChecked(reverse)
        self.chk_reverse.stateChanged.connect(self._on_direction_changed)
        layout.addWidget(self.chk_reverse)

        layout.addSpacing(10)

        # ==========================
        # 按钮
        # ==========================
        self.btn_reset = QPushButton("🔄 重置 PID")
        self.btn_reset.clicked.connect(self._on_reset_clicked)
        layout.addWidget(self.btn_reset)

    def _add_slider(self, layout, name, maximum, slot, color, hint):
        """添加一行滑块 + 数值标签 + 说明"""
        row = QHBoxLayout()
        row.addWidget(QLabel(name))

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(0, maximum)
        slider.valueChanged.connect(slot)
        row.addWidget(slider)

        label = QLabel()
        label.setMinimumWidth(50)
        label.setStyleSheet(f"color: {color}; font-weight: bold;")
        row.addWidget(label)

        layout.addLayout(row)

        hint_label = QLabel(hint)
        hint_label.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(hint_label)

        return slider, label

    def bind(self, controller):
        """
        绑定控制器，之后所有修改都直接作用到控制器上
        :param controller: 已初始化的 PIDController
        """
        self.controller = controller
        self.set_pid_values(float(controller.get_kp()), float(controller.get_ki()),
                            float(controller.get_kd()))
        self.chk_reverse.blockSignals(True)
        self.chk_reverse.setChecked(controller.direction == ControllerDirection.REVERSE)
        self.chk_reverse.blockSignals(False)

    def update_sliders(self):
        """更新滑块位置和显示"""
        # 阻止信号，避免setValue触发valueChanged导致值被覆盖
        self.slider_kp.blockSignals(True)
        self.slider_ki.blockSignals(True)
        self.slider_kd.blockSignals(True)

        self.slider_kp.setValue(round(self.kp * 100))
        self.slider_ki.setValue(round(self.ki * 100))
        self.slider_kd.setValue(round(self.kd * 1000))

        self.slider_kp.blockSignals(False)
        self.slider_ki.blockSignals(False)
        self.slider_kd.blockSignals(False)

        self._update_labels()

    def _update_labels(self):
        self.label_kp_val.setText(f"{self.kp:.2f}")
        self.label_ki_val.setText(f"{self.ki:.2f}")
        self.label_kd_val.setText(f"{self.kd:.3f}")

    # 每个滑块只更新自己的参数；超出滑块范围的绑定值保持不变
    def _on_kp_changed(self, value):
        self.kp = value / 100.0
        self._on_gain_changed()

    def _on_ki_changed(self, value):
        self.ki = value / 100.0
        self._on_gain_changed()

    def _on_kd_changed(self, value):
        self.kd = value / 1000.0
        self._on_gain_changed()

    def _on_gain_changed(self):
        """滑块值改变"""
        self._update_labels()
        self._apply_tunings()

        # 发射信号
        self.pid_changed.emit(self.kp, self.ki, self.kd)

    def _apply_tunings(self):
        if self.controller is not None:
            self.controller.set_tunings(self.kp, self.ki, self.kd)

    def _on_direction_changed(self):
        """方向设置改变"""
        reverse = self.chk_reverse.isChecked()
        if self.controller is not None:
            self.controller.set_controller_direction(
                ControllerDirection.REVERSE if reverse else ControllerDirection.DIRECT)
        self.direction_changed.emit(reverse)

    def _on_reset_clicked(self):
        """重置按钮点击（参数和方向都恢复初始值）"""
        self.kp, self.ki, self.kd = self._defaults
        self.update_sliders()
        self._apply_tunings()
        if self.chk_reverse.isChecked() != self._default_reverse:
            # 触发 _on_direction_changed，同步控制器方向
            self.chk_reverse.setChecked(self._default_reverse)
        self.reset_requested.emit()

    def set_pid_values(self, kp, ki, kd):
        """外部设置 PID 值（不会触发 pid_changed）"""
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.update_sliders()
