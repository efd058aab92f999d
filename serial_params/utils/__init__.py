# utils/__init__.py

# config_manager 依赖 core.serial_config，这里不导入以避免循环导入

from .constants import Constants, FlowControl, Parity, StopBits
from .logger import ErrorLogger

__all__ = [
    "Constants",
    "FlowControl",
    "Parity",
    "StopBits",
    "ErrorLogger",
]
