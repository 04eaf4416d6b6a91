# -*- coding: utf-8 -*-
import os

import pytest

from pidctrl.config import PIDConfig

# GUI 测试在无显示环境下运行
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def sink():
    """收集调试信息，用 messages.append 作为 sink"""
    return []


@pytest.fixture
def restore_pid_config():
    """测试结束后恢复 PIDConfig 的类属性"""
    saved = {k: v for k, v in vars(PIDConfig).items() if k.isupper()}
    yield PIDConfig
    for k, v in saved.items():
        setattr(PIDConfig, k, v)
