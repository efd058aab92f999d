# core/__init__.py

# config_errors 必须最先导入，utils.token_maps 依赖它
from .config_errors import (
    ConfigErrorType,
    ConfigException,
    BaudRateFormatError,
    UnsupportedSettingError,
    ConfigFileFormatError,
)
from .serial_config import SerialConfig
from .serial_adapter import to_pyserial_settings, apply_to_port, from_pyserial_settings

__all__ = [
    "ConfigErrorType",
    "ConfigException",
    "BaudRateFormatError",
    "UnsupportedSettingError",
    "ConfigFileFormatError",
    "SerialConfig",
    "to_pyserial_settings",
    "apply_to_port",
    "from_pyserial_settings",
]
