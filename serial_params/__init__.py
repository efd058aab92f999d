# serial_params/__init__.py

from .core import (
    SerialConfig,
    ConfigErrorType,
    ConfigException,
    BaudRateFormatError,
    UnsupportedSettingError,
    ConfigFileFormatError,
)
from .utils import Constants, FlowControl, Parity, StopBits, ErrorLogger
from .utils.config_manager import ConfigManager

__version__ = "1.0.0"

__all__ = [
    "SerialConfig",
    "ConfigErrorType",
    "ConfigException",
    "BaudRateFormatError",
    "UnsupportedSettingError",
    "ConfigFileFormatError",
    "Constants",
    "FlowControl",
    "Parity",
    "StopBits",
    "ErrorLogger",
    "ConfigManager",
]
