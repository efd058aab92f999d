#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
串口配置错误定义模块

定义配置解析与转换中使用的异常类和错误枚举。
绝大多数字符串设置项遇到非法输入时静默回退为默认值，不会抛出异常；
唯一对调用方可见的解析错误是波特率的数字格式错误。
"""

from enum import Enum
from typing import Any, Optional


class ConfigErrorType(Enum):
    """配置错误类型枚举"""
    BAUD_RATE_FORMAT = "baud_rate_format"
    UNSUPPORTED_SETTING = "unsupported_setting"
    FILE_FORMAT = "file_format"


class ConfigException(Exception):
    """配置异常基类"""
    def __init__(self, error_type: ConfigErrorType, message: str):
        self.error_type = error_type
        super().__init__(f"[{error_type.value}] {message}")


class BaudRateFormatError(ConfigException, ValueError):
    """波特率字符串不是合法的整数字面量"""
    def __init__(self, token: Optional[str]):
        self.token = token
        super().__init__(ConfigErrorType.BAUD_RATE_FORMAT, f"无效的波特率: {token!r}")


class UnsupportedSettingError(ConfigException):
    """设置值无法映射到底层串口驱动"""
    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = value
        super().__init__(ConfigErrorType.UNSUPPORTED_SETTING, f"不支持的{field_name}: {value!r}")


class ConfigFileFormatError(ConfigException):
    """配置文件内容无法解析为扁平属性表"""
    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"第 {line_number} 行: {message}"
        super().__init__(ConfigErrorType.FILE_FORMAT, message)
