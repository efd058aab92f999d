"""SerialConfig测试模块"""

import logging
import sys
import os

import pytest

# 添加项目根目录到Python路径
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from serial_params.core.serial_config import SerialConfig
from serial_params.core.config_errors import BaudRateFormatError, ConfigErrorType
from serial_params.utils.constants import Constants, FlowControl, Parity, StopBits


class TestDefaults:
    """默认构造的测试"""

    def test_default_values(self):
        """测试默认构造的各字段取值"""
        config = SerialConfig()
        assert config.port_name == ""
        assert config.baud_rate == 9600
        assert config.flow_control_in == FlowControl.DISABLED
        assert config.flow_control_out == FlowControl.DISABLED
        assert config.data_bits == 8
        assert config.stop_bits == StopBits.ONE
        assert config.parity == Parity.NONE
        assert config.encoding == Constants.DEFAULT_SERIAL_ENCODING
        assert config.encoding == "rtu"
        assert config.echo is False

    def test_full_construction_stores_verbatim(self):
        """测试全参数构造不做校验"""
        config = SerialConfig("/dev/ttyUSB0", 115200, FlowControl.XONXOFF_IN_ENABLED,
                              FlowControl.XONXOFF_OUT_ENABLED, 7, StopBits.TWO, Parity.EVEN, True)
        assert config.port_name == "/dev/ttyUSB0"
        assert config.baud_rate == 115200
        assert config.flow_control_in == FlowControl.XONXOFF_IN_ENABLED
        assert config.flow_control_out == FlowControl.XONXOFF_OUT_ENABLED
        assert config.data_bits == 7
        assert config.stop_bits == StopBits.TWO
        assert config.parity == Parity.EVEN
        assert config.echo is True
        assert config.encoding == "rtu"

        odd = SerialConfig(baud_rate=-1, data_bits=42, parity=99)
        assert odd.baud_rate == -1
        assert odd.data_bits == 42
        assert odd.parity == 99

    def test_copy_is_independent(self):
        """测试复制后的对象互不影响"""
        original = SerialConfig(port_name="COM3", baud_rate=19200)
        duplicate = original.copy()
        assert duplicate == original
        duplicate.baud_rate = 38400
        assert original.baud_rate == 19200
        assert duplicate != original


class TestBaudRate:
    """波特率字符串访问器的测试"""

    def test_numeric_token(self):
        config = SerialConfig()
        config.baud_rate_string = "19200"
        assert config.baud_rate == 19200
        assert config.baud_rate_string == "19200"

    def test_signed_token(self):
        config = SerialConfig()
        config.baud_rate_string = "+4800"
        assert config.baud_rate == 4800

    @pytest.mark.parametrize("token", ["fast", "", " 9600", "9600 ", "96.00", "9_600", None, "99999999999"])
    def test_invalid_token_raises(self, token):
        """测试非整数令牌抛出数字格式错误"""
        config = SerialConfig(baud_rate=1200)
        with pytest.raises(BaudRateFormatError) as exc_info:
            config.baud_rate_string = token
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.error_type is ConfigErrorType.BAUD_RATE_FORMAT
        assert exc_info.value.token == token
        assert config.baud_rate == 1200


class TestDataBits:
    """数据位字符串访问器的测试"""

    def test_valid_token(self):
        config = SerialConfig()
        config.data_bits_string = "7"
        assert config.data_bits == 7
        assert config.data_bits_string == "7"

    @pytest.mark.parametrize("token", ["", "   ", None, "seven", "-7", "7.0", " 7"])
    def test_invalid_token_defaults(self, token):
        config = SerialConfig(data_bits=5)
        config.data_bits_string = token
        assert config.data_bits == 8


class TestStopBits:
    """停止位字符串访问器的测试"""

    @pytest.mark.parametrize("token,expected", [
        ("1", StopBits.ONE),
        ("1.5", StopBits.ONE_POINT_FIVE),
        ("2", StopBits.TWO),
    ])
    def test_canonical_round_trip(self, token, expected):
        config = SerialConfig()
        config.stop_bits_string = token
        assert config.stop_bits == expected
        assert config.stop_bits_string == token

    @pytest.mark.parametrize("token", ["", None, "3", "one", "1.50"])
    def test_invalid_token_defaults(self, token):
        config = SerialConfig(stop_bits=StopBits.TWO)
        config.stop_bits_string = token
        assert config.stop_bits == StopBits.ONE

    def test_unknown_code_renders_one(self):
        config = SerialConfig(stop_bits=17)
        assert config.stop_bits_string == "1"


class TestParity:
    """校验位字符串访问器的测试"""

    @pytest.mark.parametrize("token,expected", [
        ("none", Parity.NONE),
        ("even", Parity.EVEN),
        ("odd", Parity.ODD),
        ("mark", Parity.MARK),
        ("space", Parity.SPACE),
    ])
    def test_canonical_round_trip(self, token, expected):
        config = SerialConfig()
        config.parity_string = token
        assert config.parity == expected
        assert config.parity_string == token

    def test_case_insensitive(self):
        """测试大小写不敏感并折叠为小写规范形式"""
        config = SerialConfig()
        config.parity_string = "EVEN"
        assert config.parity == Parity.EVEN
        assert config.parity_string == "even"

    @pytest.mark.parametrize("token", ["", None, "0", "parity", " odd"])
    def test_invalid_token_defaults(self, token):
        config = SerialConfig(parity=Parity.ODD)
        config.parity_string = token
        assert config.parity == Parity.NONE

    def test_unknown_code_renders_none(self):
        assert SerialConfig(parity=12).parity_string == "none"


class TestFlowControl:
    """流控制字符串访问器的测试"""

    def test_xonxoff_tokens(self):
        config = SerialConfig()
        config.flow_control_in_string = "xon/xoff in"
        config.flow_control_out_string = "XON/XOFF OUT"
        assert config.flow_control_in == FlowControl.XONXOFF_IN_ENABLED
        assert config.flow_control_out == FlowControl.XONXOFF_OUT_ENABLED
        assert config.flow_control_in_string == "xon/xoff in"
        assert config.flow_control_out_string == "xon/xoff out"

    def test_rts_cts_maps_to_combined_code(self):
        """测试 rts/cts 解析为 RTS|CTS 组合编码，且渲染为 none"""
        config = SerialConfig()
        config.flow_control_in_string = "rts/cts"
        assert config.flow_control_in == FlowControl.RTS_ENABLED | FlowControl.CTS_ENABLED
        assert config.flow_control_in == 0x11
        assert config.flow_control_in_string == "none"

    def test_dsr_dtr_maps_to_combined_code(self):
        config = SerialConfig()
        config.flow_control_out_string = "dsr/dtr"
        assert config.flow_control_out == FlowControl.DSR_ENABLED | FlowControl.DTR_ENABLED
        assert config.flow_control_out_string == "none"

    def test_single_flag_codes_render(self):
        config = SerialConfig(flow_control_in=FlowControl.CTS_ENABLED,
                              flow_control_out=FlowControl.DTR_ENABLED)
        assert config.flow_control_in_string == "rts/cts"
        assert config.flow_control_out_string == "dsr/dtr"

    @pytest.mark.parametrize("token", ["", None, "hardware", "rts", "xon/xoff"])
    def test_invalid_token_defaults(self, token):
        config = SerialConfig(flow_control_in=FlowControl.XONXOFF_IN_ENABLED)
        config.flow_control_in_string = token
        assert config.flow_control_in == FlowControl.DISABLED


class TestEncoding:
    """编码方式字符串访问器的测试"""

    def test_case_folds_to_canonical(self):
        config = SerialConfig()
        config.encoding_string = "ASCII"
        assert config.encoding == "ascii"
        assert config.encoding_string == "ascii"
        config.encoding_string = "Rtu"
        assert config.encoding_string == "rtu"

    @pytest.mark.parametrize("token", ["", None, "bin", "tcp", "ascii "])
    def test_invalid_token_defaults(self, token):
        config = SerialConfig(encoding="ascii")
        config.encoding_string = token
        assert config.encoding == Constants.DEFAULT_SERIAL_ENCODING

    def test_fallback_is_logged_at_debug(self, caplog):
        """测试无法识别的令牌以 debug 级别记录"""
        caplog.set_level(logging.DEBUG, logger=Constants.LOGGER_NAME)
        config = SerialConfig()
        config.encoding_string = "bin"
        assert any("[CONFIG]" in record.getMessage() and "'bin'" in record.getMessage()
                   for record in caplog.records)

    def test_blank_fallback_is_not_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger=Constants.LOGGER_NAME)
        config = SerialConfig()
        config.parity_string = ""
        assert not caplog.records

    def test_logging_follows_data_bits_parse_result(self, caplog):
        """测试数据位是否记录回退日志与解析结果一致"""
        caplog.set_level(logging.DEBUG, logger=Constants.LOGGER_NAME)
        config = SerialConfig()
        config.data_bits_string = "007"
        assert config.data_bits == 7
        assert not caplog.records

        config.data_bits_string = "٧"
        assert config.data_bits == 8
        assert len(caplog.records) == 1
        assert "[CONFIG]" in caplog.records[0].getMessage()


class TestFromProperties:
    """从属性表构造的测试"""

    def test_empty_source_gives_defaults(self):
        assert SerialConfig.from_properties({}) == SerialConfig()

    def test_prefixed_single_key(self):
        """测试前缀 dev1. 且只有 baudRate 键时其余字段为默认值"""
        config = SerialConfig.from_properties({"dev1.baudRate": "19200"}, "dev1.")
        expected = SerialConfig(baud_rate=19200)
        assert config == expected

    def test_unprefixed_keys_ignored_with_prefix(self):
        config = SerialConfig.from_properties({"baudRate": "19200"}, "dev1.")
        assert config.baud_rate == 9600

    def test_none_prefix_is_empty(self):
        config = SerialConfig.from_properties({"portName": "COM7"}, None)
        assert config.port_name == "COM7"

    def test_all_keys(self):
        props = {
            "portName": "/dev/ttyS1",
            "baudRate": "57600",
            "flowControlIn": "xon/xoff in",
            "flowControlOut": "rts/cts",
            "parity": "Odd",
            "databits": "7",
            "stopbits": "2",
            "encoding": "ascii",
            "echo": "true",
        }
        config = SerialConfig.from_properties(props)
        assert config.port_name == "/dev/ttyS1"
        assert config.baud_rate == 57600
        assert config.flow_control_in == FlowControl.XONXOFF_IN_ENABLED
        assert config.flow_control_out == FlowControl.RTS_ENABLED | FlowControl.CTS_ENABLED
        assert config.parity == Parity.ODD
        assert config.data_bits == 7
        assert config.stop_bits == StopBits.TWO
        assert config.encoding == "ascii"
        assert config.echo is True

    def test_invalid_values_fall_back(self):
        props = {"parity": "bogus", "databits": "x", "stopbits": "9", "encoding": "bin",
                 "flowControlIn": "?", "flowControlOut": ""}
        assert SerialConfig.from_properties(props) == SerialConfig()

    def test_invalid_baud_rate_raises(self):
        with pytest.raises(BaudRateFormatError):
            SerialConfig.from_properties({"baudRate": "fast"})

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("True", False),
        ("TRUE", False),
        ("1", False),
        ("yes", False),
        ("", False),
    ])
    def test_echo_requires_exact_true(self, raw, expected):
        assert SerialConfig.from_properties({"echo": raw}).echo is expected

    def test_echo_absent_is_false(self):
        assert SerialConfig.from_properties({"portName": "COM1"}).echo is False


class TestToProperties:
    """导出属性表的测试"""

    def test_default_tokens(self):
        assert SerialConfig().to_properties() == {
            "portName": "",
            "baudRate": "9600",
            "flowControlIn": "none",
            "flowControlOut": "none",
            "parity": "none",
            "databits": "8",
            "stopbits": "1",
            "encoding": "rtu",
            "echo": "false",
        }

    def test_prefix_and_round_trip(self):
        config = SerialConfig("COM4", 38400, FlowControl.XONXOFF_IN_ENABLED, FlowControl.XONXOFF_OUT_ENABLED,
                              7, StopBits.ONE_POINT_FIVE, Parity.MARK, True, "ascii")
        props = config.to_properties("plc.")
        assert set(props) == {"plc." + key for key in Constants.PROPERTY_KEYS}
        assert props["plc.echo"] == "true"
        assert SerialConfig.from_properties(props, "plc.") == config


class TestStr:
    """诊断字符串的测试"""

    def test_default_dump(self):
        assert str(SerialConfig()) == (
            "SerialConfig{portName='', baudRate=9600, flowControlIn=0, flowControlOut=0, "
            "databits=8, stopbits=1, parity=0, encoding='rtu', echo=False}"
        )

    def test_field_order(self):
        text = str(SerialConfig(port_name="COM1", echo=True))
        labels = ["portName=", "baudRate=", "flowControlIn=", "flowControlOut=", "databits=",
                  "stopbits=", "parity=", "encoding=", "echo="]
        positions = [text.index(label) for label in labels]
        assert positions == sorted(positions)
        assert "\n" not in text
        assert text.endswith("echo=True}")
