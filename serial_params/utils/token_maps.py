"""串口参数的字符串令牌与枚举编码之间的双向映射表

每个字段两张表：令牌 -> 编码（解析），编码 -> 令牌（渲染）。
除波特率外，所有解析函数遇到无法识别的输入都返回该字段的默认值。
"""

import re
from typing import Optional

from serial_params.core.config_errors import BaudRateFormatError
from serial_params.utils.constants import Constants, FlowControl, Parity, StopBits

_DIGITS_RE = re.compile(r"[0-9]+")
_SIGNED_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1

PARITY_TOKENS = {
    "none": Parity.NONE,
    "even": Parity.EVEN,
    "odd": Parity.ODD,
    "mark": Parity.MARK,
    "space": Parity.SPACE,
}
PARITY_NAMES = {code: token for token, code in PARITY_TOKENS.items()}

STOP_BITS_TOKENS = {
    "1": StopBits.ONE,
    "1.5": StopBits.ONE_POINT_FIVE,
    "2": StopBits.TWO,
}
STOP_BITS_NAMES = {code: token for token, code in STOP_BITS_TOKENS.items()}

# "rts/cts" 与 "dsr/dtr" 解析为两个方向同时启用的组合编码
FLOW_CONTROL_TOKENS = {
    "none": FlowControl.DISABLED,
    "xon/xoff out": FlowControl.XONXOFF_OUT_ENABLED,
    "xon/xoff in": FlowControl.XONXOFF_IN_ENABLED,
    "rts/cts": FlowControl.RTS_ENABLED | FlowControl.CTS_ENABLED,
    "dsr/dtr": FlowControl.DSR_ENABLED | FlowControl.DTR_ENABLED,
}
# 渲染方向只按单标志编码查表，组合编码查不到，渲染为 "none"
FLOW_CONTROL_NAMES = {
    FlowControl.DISABLED: "none",
    FlowControl.XONXOFF_OUT_ENABLED: "xon/xoff out",
    FlowControl.XONXOFF_IN_ENABLED: "xon/xoff in",
    FlowControl.CTS_ENABLED: "rts/cts",
    FlowControl.DTR_ENABLED: "dsr/dtr",
}

ENCODING_TOKENS = (Constants.SERIAL_ENCODING_ASCII, Constants.SERIAL_ENCODING_RTU)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# match_* 返回识别出的编码；空白输入视为已识别并返回默认值；无法识别的非空白输入返回 None

def match_parity(token: Optional[str]) -> Optional[Parity]:
    if is_blank(token):
        return Constants.DEFAULT_PARITY
    return PARITY_TOKENS.get(token.lower())


def match_stop_bits(token: Optional[str]) -> Optional[StopBits]:
    if is_blank(token):
        return Constants.DEFAULT_STOP_BITS
    return STOP_BITS_TOKENS.get(token)


def match_flow_control(token: Optional[str]) -> Optional[FlowControl]:
    if is_blank(token):
        return Constants.DEFAULT_FLOW_CONTROL
    return FLOW_CONTROL_TOKENS.get(token.lower())


def match_encoding(token: Optional[str]) -> Optional[str]:
    """返回小写规范形式的编码令牌"""
    if is_blank(token):
        return Constants.DEFAULT_SERIAL_ENCODING
    lowered = token.lower()
    return lowered if lowered in ENCODING_TOKENS else None


def match_data_bits(token: Optional[str]) -> Optional[int]:
    if is_blank(token):
        return Constants.DEFAULT_DATA_BITS
    return int(token) if _DIGITS_RE.fullmatch(token) else None


def _or_default(matched, default):
    return default if matched is None else matched


def parse_parity(token: Optional[str]) -> Parity:
    return _or_default(match_parity(token), Constants.DEFAULT_PARITY)


def parity_to_string(parity: int) -> str:
    return PARITY_NAMES.get(parity, "none")


def parse_stop_bits(token: Optional[str]) -> StopBits:
    return _or_default(match_stop_bits(token), Constants.DEFAULT_STOP_BITS)


def stop_bits_to_string(stop_bits: int) -> str:
    return STOP_BITS_NAMES.get(stop_bits, "1")


def parse_flow_control(token: Optional[str]) -> FlowControl:
    return _or_default(match_flow_control(token), Constants.DEFAULT_FLOW_CONTROL)


def flow_control_to_string(flow_control: int) -> str:
    return FLOW_CONTROL_NAMES.get(flow_control, "none")


def parse_encoding(token: Optional[str]) -> str:
    """返回小写规范形式的编码令牌，无法识别时返回默认编码"""
    return _or_default(match_encoding(token), Constants.DEFAULT_SERIAL_ENCODING)


def parse_data_bits(token: Optional[str]) -> int:
    return _or_default(match_data_bits(token), Constants.DEFAULT_DATA_BITS)


def parse_baud_rate(token: Optional[str]) -> int:
    """解析波特率字符串。

    与其他字段不同，非法输入不会回退为默认值，而是抛出 BaudRateFormatError（ValueError 子类）。
    只接受可选正负号加 ASCII 数字（32 位有符号范围内），不接受空白、下划线或小数。
    """
    if token is None or not _SIGNED_INT_RE.fullmatch(token):
        raise BaudRateFormatError(token)
    value = int(token)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise BaudRateFormatError(token)
    return value
