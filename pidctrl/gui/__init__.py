# -*- coding: utf-8 -*-
"""
图形界面 (GUI)

需要安装 gui 扩展: pip install pidctrl[gui]
"""
