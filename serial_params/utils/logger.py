import logging
from pathlib import Path
from datetime import datetime
from typing import Optional, Union
from serial_params.utils.constants import Constants

LOG_FORMAT = '%(asctime)s-%(levelname)s-%(module)s-%(funcName)s-%(message)s'


class ErrorLogger:
    """日志记录封装。

    默认只获取命名 logger，不安装任何 handler；传入 log_dir 时额外写入按日期命名的日志文件。
    """

    def __init__(self, name: str = Constants.LOGGER_NAME,
                 log_dir: Optional[Union[str, Path]] = None,
                 log_file_prefix: str = Constants.LOG_FILE_PREFIX,
                 level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.log_file: Optional[Path] = None
        self._file_handler: Optional[logging.FileHandler] = None
        if log_dir is not None:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self.log_file = log_path / f'{log_file_prefix}{datetime.now().strftime("%Y%m%d")}.log'
            self._file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
            self._file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(self._file_handler)
            self.logger.setLevel(level)

    def log_error(self, error_msg: str, error_type: str = "GENERAL", exc_info: bool = False) -> None:
        self.logger.error(f"[{error_type}] {error_msg}", exc_info=exc_info)

    def log_info(self, info_msg: str, info_type: str = "INFO", exc_info: bool = False) -> None:
        self.logger.info(f"[{info_type}] {info_msg}", exc_info=exc_info)

    def log_debug(self, debug_msg: str, debug_type: str = "DEBUG", exc_info: bool = False) -> None:
        self.logger.debug(f"[{debug_type}] {debug_msg}", exc_info=exc_info)

    def log_warning(self, warn_msg: str, warn_type: str = "WARNING", exc_info: bool = False) -> None:
        self.logger.warning(f"[{warn_type}] {warn_msg}", exc_info=exc_info)

    def close(self) -> None:
        """移除并关闭本实例添加的文件 handler"""
        if self._file_handler is None:
            return
        self.logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None
