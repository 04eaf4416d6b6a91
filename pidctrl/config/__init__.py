# -*- coding: utf-8 -*-
"""
配置模块统一接口 (Configuration Module)

[使用方法 Usage]
    from pidctrl.config import PIDConfig, ConfigManager

    ConfigManager().load_config("pid_config.json")
    pid = PIDConfig.create_controller()

[配置文件格式]
{
    "PID": {"KP": 1.2, "KI": 0.5, "KD": 0.01, "DIRECTION": "REVERSE"}
}

配置文件只读，运行中修改的参数不会写回文件。
"""

import json
import os

from .pid_config import PIDConfig
from ..utils.logger import Logger

_logger = Logger("Config")


class ConfigManager:
    """
    配置管理器 (Configuration Manager)
    从 JSON 文件加载 PIDConfig
    """

    CONFIG_FILE = "pid_config.json"

    def load_config(self, config_file=None):
        """
        从 JSON 文件加载配置
        Load configuration from file. Missing or broken files keep the defaults.
        :return: 是否成功加载
        """
        config_file = config_file or ConfigManager.CONFIG_FILE
        if not os.path.exists(config_file):
            _logger.info("配置文件不存在，使用默认值", file=config_file)
            return False

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            PIDConfig.update_from_dict(data.get('PID', data))
        except (OSError, ValueError, KeyError, AttributeError) as e:
            _logger.error("加载失败", file=config_file, reason=repr(e))
            return False

        _logger.info(f"已加载配置: {config_file}")
        _logger.info(f"PID: Kp={PIDConfig.KP:.2f}, Ki={PIDConfig.KI:.3f}, Kd={PIDConfig.KD:.2f}")
        return True


__all__ = [
    'PIDConfig',        # PID 参数
    'ConfigManager'     # 配置管理器
]
