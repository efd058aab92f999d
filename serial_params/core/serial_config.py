#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
串口通信参数模块

SerialConfig 保存一个串口端点的全部通信参数（端口名、波特率、数据位、停止位、
校验位、流控制、编码方式、RS-485 回显），提供默认值，并在枚举编码与便于
属性文件/界面使用的字符串令牌之间互相转换。

本模块不做任何 I/O，也不打开串口。

已知的不对称行为：流控制字符串 "rts/cts" / "dsr/dtr" 解析为两个方向同时启用的
组合编码，但渲染时只识别单标志编码（CTS_ENABLED / DTR_ENABLED），因此组合编码
会渲染为 "none"。外部使用方可能依赖这些确切编码，这里保持原样。
"""

from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional

from serial_params.utils.constants import Constants, FlowControl
from serial_params.utils.logger import ErrorLogger
from serial_params.utils import token_maps

_error_logger = ErrorLogger()


def _resolve(field_label: str, token: Optional[str], matched, default):
    """返回识别出的值；无法识别时记录 debug 日志并返回默认值"""
    if matched is None:
        _error_logger.log_debug(f"无法识别的{field_label} {token!r}，使用默认值 {default!r}", "CONFIG")
        return default
    return matched


@dataclass
class SerialConfig:
    """串口参数数据类

    类型化访问直接读写属性，不做校验；*_string 属性按令牌表解析/渲染。
    """
    port_name: str = Constants.DEFAULT_PORT_NAME
    baud_rate: int = Constants.DEFAULT_BAUD_RATE
    flow_control_in: int = Constants.DEFAULT_FLOW_CONTROL
    flow_control_out: int = Constants.DEFAULT_FLOW_CONTROL
    data_bits: int = Constants.DEFAULT_DATA_BITS
    stop_bits: int = Constants.DEFAULT_STOP_BITS
    parity: int = Constants.DEFAULT_PARITY
    echo: bool = Constants.DEFAULT_ECHO
    encoding: str = Constants.DEFAULT_SERIAL_ENCODING

    @classmethod
    def from_properties(cls, props: Mapping[str, str], prefix: Optional[str] = None) -> "SerialConfig":
        """从扁平属性表构造。

        Args:
            props: 键值均为字符串的映射
            prefix: 键前缀（嵌入其他属性文件时使用），None 视为空前缀

        Returns:
            新的 SerialConfig。缺失的键使用默认值；存在的键经由对应的字符串设置器解析。
            echo 仅当原始值恰好为 "true" 时为 True。

        Raises:
            BaudRateFormatError: baudRate 存在但不是合法整数
        """
        if prefix is None:
            prefix = ""
        config = cls()

        def lookup(key: str) -> Optional[str]:
            return props.get(prefix + key)

        port_name = lookup(Constants.KEY_PORT_NAME)
        if port_name is not None:
            config.port_name = port_name
        baud_rate = lookup(Constants.KEY_BAUD_RATE)
        if baud_rate is not None:
            config.baud_rate_string = baud_rate
        flow_in = lookup(Constants.KEY_FLOW_CONTROL_IN)
        if flow_in is not None:
            config.flow_control_in_string = flow_in
        flow_out = lookup(Constants.KEY_FLOW_CONTROL_OUT)
        if flow_out is not None:
            config.flow_control_out_string = flow_out
        parity = lookup(Constants.KEY_PARITY)
        if parity is not None:
            config.parity_string = parity
        data_bits = lookup(Constants.KEY_DATA_BITS)
        if data_bits is not None:
            config.data_bits_string = data_bits
        stop_bits = lookup(Constants.KEY_STOP_BITS)
        if stop_bits is not None:
            config.stop_bits_string = stop_bits
        encoding = lookup(Constants.KEY_ENCODING)
        if encoding is not None:
            config.encoding_string = encoding
        config.echo = lookup(Constants.KEY_ECHO) == Constants.ECHO_TRUE_TOKEN
        return config

    def to_properties(self, prefix: Optional[str] = None) -> Dict[str, str]:
        """导出为扁平属性表（from_properties 的逆操作，使用各字段的字符串渲染）"""
        if prefix is None:
            prefix = ""
        return {
            prefix + Constants.KEY_PORT_NAME: self.port_name,
            prefix + Constants.KEY_BAUD_RATE: self.baud_rate_string,
            prefix + Constants.KEY_FLOW_CONTROL_IN: self.flow_control_in_string,
            prefix + Constants.KEY_FLOW_CONTROL_OUT: self.flow_control_out_string,
            prefix + Constants.KEY_PARITY: self.parity_string,
            prefix + Constants.KEY_DATA_BITS: self.data_bits_string,
            prefix + Constants.KEY_STOP_BITS: self.stop_bits_string,
            prefix + Constants.KEY_ENCODING: self.encoding_string,
            prefix + Constants.KEY_ECHO: "true" if self.echo else "false",
        }

    def copy(self) -> "SerialConfig":
        return replace(self)

    # --- 字符串访问器 ---

    @property
    def baud_rate_string(self) -> str:
        return str(self.baud_rate)

    @baud_rate_string.setter
    def baud_rate_string(self, rate: str) -> None:
        self.baud_rate = token_maps.parse_baud_rate(rate)

    @property
    def flow_control_in_string(self) -> str:
        return token_maps.flow_control_to_string(self.flow_control_in)

    @flow_control_in_string.setter
    def flow_control_in_string(self, flow_control: str) -> None:
        self.flow_control_in = self._parse_flow_control(flow_control)

    @property
    def flow_control_out_string(self) -> str:
        return token_maps.flow_control_to_string(self.flow_control_out)

    @flow_control_out_string.setter
    def flow_control_out_string(self, flow_control: str) -> None:
        self.flow_control_out = self._parse_flow_control(flow_control)

    @property
    def data_bits_string(self) -> str:
        return str(self.data_bits)

    @data_bits_string.setter
    def data_bits_string(self, data_bits: str) -> None:
        self.data_bits = _resolve("数据位", data_bits, token_maps.match_data_bits(data_bits),
                                  Constants.DEFAULT_DATA_BITS)

    @property
    def stop_bits_string(self) -> str:
        return token_maps.stop_bits_to_string(self.stop_bits)

    @stop_bits_string.setter
    def stop_bits_string(self, stop_bits: str) -> None:
        self.stop_bits = _resolve("停止位", stop_bits, token_maps.match_stop_bits(stop_bits),
                                  Constants.DEFAULT_STOP_BITS)

    @property
    def parity_string(self) -> str:
        return token_maps.parity_to_string(self.parity)

    @parity_string.setter
    def parity_string(self, parity: str) -> None:
        self.parity = _resolve("校验位", parity, token_maps.match_parity(parity),
                               Constants.DEFAULT_PARITY)

    @property
    def encoding_string(self) -> str:
        return self.encoding

    @encoding_string.setter
    def encoding_string(self, encoding: str) -> None:
        self.encoding = _resolve("编码方式", encoding, token_maps.match_encoding(encoding),
                                 Constants.DEFAULT_SERIAL_ENCODING)

    @staticmethod
    def _parse_flow_control(flow_control: Optional[str]) -> FlowControl:
        return _resolve("流控制", flow_control, token_maps.match_flow_control(flow_control),
                        Constants.DEFAULT_FLOW_CONTROL)

    def __str__(self) -> str:
        return ("SerialConfig{"
                f"portName='{self.port_name}'"
                f", baudRate={self.baud_rate}"
                f", flowControlIn={self.flow_control_in}"
                f", flowControlOut={self.flow_control_out}"
                f", databits={self.data_bits}"
                f", stopbits={self.stop_bits}"
                f", parity={self.parity}"
                f", encoding='{self.encoding}'"
                f", echo={self.echo}"
                "}")

