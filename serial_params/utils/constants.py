from enum import IntEnum, IntFlag


class FlowControl(IntFlag):
    """流控制标志位（输入/输出两个方向共用同一组编码）"""
    DISABLED = 0
    RTS_ENABLED = 0x00000001
    CTS_ENABLED = 0x00000010
    DSR_ENABLED = 0x00000100
    DTR_ENABLED = 0x00001000
    XONXOFF_IN_ENABLED = 0x00010000
    XONXOFF_OUT_ENABLED = 0x00100000


class Parity(IntEnum):
    NONE = 0
    ODD = 1
    EVEN = 2
    MARK = 3
    SPACE = 4


class StopBits(IntEnum):
    ONE = 1
    ONE_POINT_FIVE = 2
    TWO = 3


class Constants:
    """串口参数常量定义"""
    DEFAULT_PORT_NAME: str = ""
    DEFAULT_BAUD_RATE: int = 9600
    DEFAULT_DATA_BITS: int = 8
    DEFAULT_FLOW_CONTROL: FlowControl = FlowControl.DISABLED
    DEFAULT_STOP_BITS: StopBits = StopBits.ONE
    DEFAULT_PARITY: Parity = Parity.NONE
    DEFAULT_ECHO: bool = False

    SERIAL_ENCODING_ASCII: str = "ascii"
    SERIAL_ENCODING_RTU: str = "rtu"
    DEFAULT_SERIAL_ENCODING: str = SERIAL_ENCODING_RTU

    CONFIG_FILE_NAME: str = "serial_params.json"
    LOG_FILE_PREFIX: str = "serial_params_"
    LOGGER_NAME: str = "serial_params"

    # 属性源中的键名（可带前缀）。databits/stopbits 为小写，与历史配置文件保持一致
    KEY_PORT_NAME: str = "portName"
    KEY_BAUD_RATE: str = "baudRate"
    KEY_FLOW_CONTROL_IN: str = "flowControlIn"
    KEY_FLOW_CONTROL_OUT: str = "flowControlOut"
    KEY_PARITY: str = "parity"
    KEY_DATA_BITS: str = "databits"
    KEY_STOP_BITS: str = "stopbits"
    KEY_ENCODING: str = "encoding"
    KEY_ECHO: str = "echo"

    PROPERTY_KEYS = (
        KEY_PORT_NAME,
        KEY_BAUD_RATE,
        KEY_FLOW_CONTROL_IN,
        KEY_FLOW_CONTROL_OUT,
        KEY_PARITY,
        KEY_DATA_BITS,
        KEY_STOP_BITS,
        KEY_ENCODING,
        KEY_ECHO,
    )

    ECHO_TRUE_TOKEN: str = "true"
