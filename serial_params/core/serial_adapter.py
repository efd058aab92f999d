"""SerialConfig 与 pyserial 设置之间的转换

只构造设置字典，或把设置应用到调用方提供的 serial.Serial 对象上，本模块从不打开串口。
"""

from typing import Any, Dict, Mapping, Optional

import serial

from serial_params.core.config_errors import UnsupportedSettingError
from serial_params.core.serial_config import SerialConfig
from serial_params.utils.constants import FlowControl, Parity, StopBits
from serial_params.utils.logger import ErrorLogger

PYSERIAL_PARITY = {
    Parity.NONE: serial.PARITY_NONE,
    Parity.EVEN: serial.PARITY_EVEN,
    Parity.ODD: serial.PARITY_ODD,
    Parity.MARK: serial.PARITY_MARK,
    Parity.SPACE: serial.PARITY_SPACE,
}

PYSERIAL_STOP_BITS = {
    StopBits.ONE: serial.STOPBITS_ONE,
    StopBits.ONE_POINT_FIVE: serial.STOPBITS_ONE_POINT_FIVE,
    StopBits.TWO: serial.STOPBITS_TWO,
}

PYSERIAL_BYTE_SIZES = (serial.FIVEBITS, serial.SIXBITS, serial.SEVENBITS, serial.EIGHTBITS)

_XONXOFF_FLAGS = FlowControl.XONXOFF_IN_ENABLED | FlowControl.XONXOFF_OUT_ENABLED
_RTSCTS_FLAGS = FlowControl.RTS_ENABLED | FlowControl.CTS_ENABLED
_DSRDTR_FLAGS = FlowControl.DSR_ENABLED | FlowControl.DTR_ENABLED


def to_pyserial_settings(config: SerialConfig) -> Dict[str, Any]:
    """把 SerialConfig 转换为 serial.Serial.apply_settings 可接受的字典

    流控制布尔量取输入、输出两个方向标志位的并集。

    Raises:
        UnsupportedSettingError: 校验位、停止位或数据位无法映射到 pyserial
    """
    parity = PYSERIAL_PARITY.get(config.parity)
    if parity is None:
        raise UnsupportedSettingError("校验位", config.parity)
    stop_bits = PYSERIAL_STOP_BITS.get(config.stop_bits)
    if stop_bits is None:
        raise UnsupportedSettingError("停止位", config.stop_bits)
    if config.data_bits not in PYSERIAL_BYTE_SIZES:
        raise UnsupportedSettingError("数据位", config.data_bits)

    flags = int(config.flow_control_in) | int(config.flow_control_out)
    return {
        "baudrate": config.baud_rate,
        "bytesize": config.data_bits,
        "parity": parity,
        "stopbits": stop_bits,
        "xonxoff": bool(flags & _XONXOFF_FLAGS),
        "rtscts": bool(flags & _RTSCTS_FLAGS),
        "dsrdtr": bool(flags & _DSRDTR_FLAGS),
    }


def apply_to_port(config: SerialConfig, port: serial.Serial,
                  error_logger: Optional[ErrorLogger] = None) -> None:
    """把配置应用到 pyserial 端口对象。端口未打开时同时设置端口名，不会打开端口。"""
    settings = to_pyserial_settings(config)
    if not port.is_open:
        port.port = config.port_name or None
    elif config.port_name and port.port != config.port_name:
        if error_logger:
            error_logger.log_warning(
                f"端口 {port.port} 已打开，忽略端口名 {config.port_name}", "CONNECTION")
    port.apply_settings(settings)
    if error_logger:
        error_logger.log_info(
            f"串口参数已应用: {config.port_name} @ {config.baud_rate} "
            f"{config.data_bits}{settings['parity']}{settings['stopbits']}", "CONNECTION")


def from_pyserial_settings(settings: Mapping[str, Any], port_name: str = "") -> SerialConfig:
    """由 pyserial 设置字典（例如 Serial.get_settings() 的结果）构造 SerialConfig

    xonxoff 在输入方向映射为 XONXOFF_IN，输出方向映射为 XONXOFF_OUT；
    rtscts / dsrdtr 在两个方向都映射为组合编码。
    """
    config = SerialConfig(port_name=port_name)
    if "baudrate" in settings:
        config.baud_rate = int(settings["baudrate"])
    if "bytesize" in settings:
        config.data_bits = int(settings["bytesize"])
    if "parity" in settings:
        config.parity = _reverse_lookup(PYSERIAL_PARITY, settings["parity"], "校验位")
    if "stopbits" in settings:
        config.stop_bits = _reverse_lookup(PYSERIAL_STOP_BITS, settings["stopbits"], "停止位")

    flow_in = FlowControl.DISABLED
    flow_out = FlowControl.DISABLED
    if settings.get("xonxoff"):
        flow_in |= FlowControl.XONXOFF_IN_ENABLED
        flow_out |= FlowControl.XONXOFF_OUT_ENABLED
    if settings.get("rtscts"):
        flow_in |= _RTSCTS_FLAGS
        flow_out |= _RTSCTS_FLAGS
    if settings.get("dsrdtr"):
        flow_in |= _DSRDTR_FLAGS
        flow_out |= _DSRDTR_FLAGS
    config.flow_control_in = flow_in
    config.flow_control_out = flow_out
    return config


def _reverse_lookup(table: Mapping, value: Any, field_name: str):
    for code, pyserial_value in table.items():
        if pyserial_value == value:
            return code
    raise UnsupportedSettingError(field_name, value)
