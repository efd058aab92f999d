import json
import re
from pathlib import Path
from typing import Optional, Dict, Any, Union

from serial_params.core.config_errors import ConfigFileFormatError
from serial_params.core.serial_config import SerialConfig
from serial_params.utils.constants import Constants
from serial_params.utils.logger import ErrorLogger

PROPERTIES_SUFFIX = ".properties"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPE_CHARS = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_WRITE_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f",
                  "=": "\\=", ":": "\\:", "#": "\\#", "!": "\\!"}


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str):
    """按行尾奇数个反斜杠合并续行，跳过空行与注释行，返回 (起始行号, 逻辑行)"""
    buffer: Optional[str] = None
    start_line = 0
    for line_number, raw_line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        line = raw_line.lstrip(_WHITESPACE)
        if buffer is None and (not line or line[0] in "#!"):
            continue
        continued = _ends_with_continuation(line)
        if continued:
            line = line[:-1]
        if buffer is None:
            buffer, start_line = line, line_number
        else:
            buffer += line
        if not continued:
            yield start_line, buffer
            buffer = None
    if buffer is not None:
        yield start_line, buffer


def _unescape(text: str, line_number: int) -> str:
    chars = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != "\\" or index >= len(text):
            chars.append(char)
            continue
        char = text[index]
        index += 1
        if char == "u":
            digits = text[index:index + 4]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ConfigFileFormatError(f"非法的 \\uXXXX 转义: {digits!r}", line_number)
            chars.append(chr(int(digits, 16)))
            index += 4
        else:
            chars.append(_ESCAPE_CHARS.get(char, char))
    return "".join(chars)


def _split_key_value(line: str):
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    while index < len(line) and line[index] in _WHITESPACE:
        index += 1
    if index < len(line) and line[index] in _SEPARATORS:
        index += 1
    while index < len(line) and line[index] in _WHITESPACE:
        index += 1
    return key, line[index:]


def parse_properties(text: str) -> Dict[str, str]:
    """解析 Java 风格的 .properties 文本

    键在第一个未转义的 =、: 或空白处结束；分隔符两侧空白忽略，值的行尾空白保留。
    支持 # 与 ! 注释行、行尾反斜杠续行，以及 \\t \\n \\r \\f \\uXXXX 和 \\x 转义。
    """
    result: Dict[str, str] = {}
    for line_number, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        key = _unescape(raw_key, line_number)
        if not key:
            raise ConfigFileFormatError("缺少属性键", line_number)
        result[key] = _unescape(raw_value, line_number)
    return result


def _escape(text: str, is_key: bool) -> str:
    chars = []
    for index, char in enumerate(text):
        if char == " " and (is_key or index == 0):
            chars.append("\\ ")
        else:
            chars.append(_WRITE_ESCAPES.get(char, char))
    return "".join(chars)


def format_properties(config: Dict[str, str]) -> str:
    """生成属性文本，键和值按 parse_properties 的规则转义，二者互为逆操作"""
    return "".join(f"{_escape(key, True)}={_escape(value, False)}\n" for key, value in config.items())


def _to_property_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class ConfigManager:
    """扁平属性源的加载与保存

    文件名以 .properties 结尾时按属性文本读写，否则按 JSON 对象读写。
    """

    def __init__(self, filename: Union[str, Path] = Constants.CONFIG_FILE_NAME,
                 error_logger: Optional[ErrorLogger] = None):
        self.config_file = Path(filename)
        self.error_logger = error_logger
        self.default_config: Dict[str, str] = SerialConfig().to_properties()

    @property
    def is_properties_file(self) -> bool:
        return self.config_file.suffix.lower() == PROPERTIES_SUFFIX

    def _read_file(self) -> Dict[str, str]:
        text = self.config_file.read_text(encoding='utf-8')
        if self.is_properties_file:
            return parse_properties(text)
        loaded = json.loads(text)
        if not isinstance(loaded, dict):
            raise ConfigFileFormatError("JSON 顶层必须是对象")
        return {str(key): _to_property_value(value) for key, value in loaded.items()}

    def load_config(self) -> Dict[str, str]:
        if self.config_file.exists():
            try:
                loaded_config = self._read_file()
                # 以默认配置为基础，文件中的键覆盖默认值；默认配置中没有的键（例如带前缀的设备段）原样保留
                config_to_return = self.default_config.copy()
                config_to_return.update(loaded_config)
                if self.error_logger:
                    self.error_logger.log_info(f"配置已从 '{self.config_file}' 加载。")
                return config_to_return
            except (OSError, ValueError, ConfigFileFormatError) as e:
                if self.error_logger:
                    self.error_logger.log_error(f"加载配置文件 '{self.config_file}' 失败: {e}. 使用默认配置。", "CONFIG")
                return self.default_config.copy()

        if self.error_logger:
            self.error_logger.log_info(f"配置文件 '{self.config_file}' 未找到。使用默认配置。")
        return self.default_config.copy()

    def save_config(self, config: Dict[str, Any]) -> bool:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            flat = {str(key): _to_property_value(value) for key, value in config.items()}
            with open(self.config_file, 'w', encoding='utf-8') as f:
                if self.is_properties_file:
                    f.write(format_properties(flat))
                else:
                    json.dump(flat, f, indent=4, ensure_ascii=False)
            if self.error_logger:
                self.error_logger.log_info(f"配置已保存到 '{self.config_file}'。")
            return True
        except OSError as e:
            if self.error_logger:
                self.error_logger.log_error(f"保存配置文件到 '{self.config_file}' 失败: {e}", "CONFIG")
            return False

    def load_serial_config(self, prefix: Optional[str] = None) -> SerialConfig:
        """读取配置文件并构造 SerialConfig（非法波特率会抛出 BaudRateFormatError）"""
        return SerialConfig.from_properties(self.load_config(), prefix)

    def save_serial_config(self, serial_config: SerialConfig, prefix: Optional[str] = None) -> bool:
        """把 SerialConfig 合并写入配置文件，保留文件中其他前缀的设备段"""
        config = self.load_config()
        config.update(serial_config.to_properties(prefix))
        return self.save_config(config)
