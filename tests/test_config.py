# -*- coding: utf-8 -*-
"""配置测试 (Configuration tests)"""

import json
import logging

import pytest

from pidctrl.config import ConfigManager, PIDConfig
from pidctrl.core.numeric import FixedPoint
from pidctrl.core.pid import ControllerDirection, OutputMode


def test_tuning_dict_round_trips_through_update(restore_pid_config):
    PIDConfig.KP = 2.5
    PIDConfig.DIRECTION = ControllerDirection.REVERSE
    data = PIDConfig.get_tuning_dict()

    assert data['KP'] == 2.5
    assert data['DIRECTION'] == "REVERSE"

    PIDConfig.KP = 0.0
    PIDConfig.DIRECTION = ControllerDirection.DIRECT
    PIDConfig.update_from_dict(data)

    assert PIDConfig.KP == 2.5
    assert PIDConfig.DIRECTION is ControllerDirection.REVERSE


def test_update_ignores_unknown_keys(restore_pid_config):
    PIDConfig.update_from_dict({'KI': 0.75, 'MAX_STEP': 12})
    assert PIDConfig.KI == 0.75
    assert not hasattr(PIDConfig, 'MAX_STEP')


@pytest.mark.parametrize("bad", [
    {'KP': 9.0, 'DIRECTION': "SIDEWAYS"},
    {'KP': 9.0, 'OUTPUT_MODE': "BOTH"},
    {'KP': 9.0, 'NUMERIC': "decimal"},
])
def test_update_with_bad_names_changes_nothing(restore_pid_config, bad):
    before = PIDConfig.get_tuning_dict()
    with pytest.raises(KeyError):
        PIDConfig.update_from_dict(bad)
    assert PIDConfig.get_tuning_dict() == before


def test_create_controller(restore_pid_config):
    PIDConfig.update_from_dict({
        'KP': 1.0, 'KI': 0.0, 'KD': 0.0,
        'OUTPUT_MODE': "VELOCITY_PID",
        'SAMPLE_PERIOD_MS': 100,
        'OUT_MIN': -10, 'OUT_MAX': 10,
        'SETPOINT': 5,
        'NUMERIC': "fixed",
    })
    pid = PIDConfig.create_controller(debug_sink=lambda msg: None)

    assert pid.initialized
    assert pid.output_mode is OutputMode.ACCUMULATE
    assert isinstance(pid.setpoint, FixedPoint)
    assert pid.run(0) == 5
    assert pid.run(0) == 10


def test_load_config(tmp_path, restore_pid_config):
    config_file = tmp_path / "pid.json"
    config_file.write_text(json.dumps({'PID': {'KP': 1.2, 'KI': 0.5, 'KD': 0.01,
                                               'DIRECTION': "REVERSE"}}), encoding='utf-8')

    assert ConfigManager().load_config(str(config_file)) is True
    assert PIDConfig.KP == 1.2
    assert PIDConfig.KI == 0.5
    assert PIDConfig.KD == 0.01
    assert PIDConfig.DIRECTION is ControllerDirection.REVERSE


def test_load_flat_config(tmp_path, restore_pid_config):
    config_file = tmp_path / "pid.json"
    config_file.write_text(json.dumps({'SAMPLE_PERIOD_MS': 20}), encoding='utf-8')

    assert ConfigManager().load_config(str(config_file)) is True
    assert PIDConfig.SAMPLE_PERIOD_MS == 20


def test_load_missing_config_keeps_defaults(tmp_path, restore_pid_config, caplog):
    caplog.set_level(logging.INFO, logger="pidctrl.Config")
    before = PIDConfig.get_tuning_dict()

    assert ConfigManager().load_config(str(tmp_path / "nope.json")) is False
    assert PIDConfig.get_tuning_dict() == before
    assert "配置文件不存在" in caplog.text


@pytest.mark.parametrize("content", ["{not json", '{"PID": {"DIRECTION": "UP"}}', "[1, 2]"])
def test_load_broken_config_keeps_defaults(tmp_path, restore_pid_config, caplog, content):
    config_file = tmp_path / "pid.json"
    config_file.write_text(content, encoding='utf-8')
    before = PIDConfig.get_tuning_dict()

    assert ConfigManager().load_config(str(config_file)) is False
    assert PIDConfig.get_tuning_dict() == before
    assert any(r.levelno == logging.ERROR for r in caplog.records)
