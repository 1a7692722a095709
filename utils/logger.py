"""
日志模块（stream_math）

按等级输出到不同的轮转日志文件，兼容 Windows 下文件被占用时的轮转失败。
"""

import logging
import os
from logging.handlers import RotatingFileHandler


# 单个日志文件上限与保留份数
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

DETAIL_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
BRIEF_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    安全的日志轮转处理器。

    日志文件被其他进程占用时轮转会失败，此时继续写当前文件。
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except (PermissionError, OSError):
            # 文件被占用，保留当前文件继续写入
            pass


class Logger:
    """
    日志管理器。

    - debug/info/warning/error 各自一个日志文件。
    - logger 名称默认为 "stream_math"。
    """

    # (等级, 文件后缀, 格式)
    LEVELS = (
        (logging.DEBUG, "debug", DETAIL_FORMAT),
        (logging.INFO, "info", BRIEF_FORMAT),
        (logging.WARNING, "warning", BRIEF_FORMAT),
        (logging.ERROR, "error", DETAIL_FORMAT),
    )

    def __init__(self, log_dir: str = "logs", name: str = "stream_math") -> None:
        """
        初始化日志管理器。

        Args:
            log_dir: 日志输出目录，默认 "logs"。
            name: logger 名称，同时作为日志文件名前缀。
        """
        self.log_dir = log_dir
        self.name = name

        os.makedirs(log_dir, exist_ok=True)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # 避免重复添加 handler
        if not self.logger.handlers:
            for level, suffix, fmt in self.LEVELS:
                self.logger.addHandler(self._make_handler(level, suffix, fmt))

    def _make_handler(self, level: int, suffix: str, fmt: str) -> logging.Handler:
        handler = SafeRotatingFileHandler(
            os.path.join(self.log_dir, f"{self.name}_{suffix}.log"),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        return handler

    def get_logger(self) -> logging.Logger:
        """获取底层 logger 实例。"""
        return self.logger

    def close(self) -> None:
        """
        刷新并关闭所有 handler。

        进程退出前调用，释放日志文件句柄。
        """
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)


_LOGGER_INSTANCE: Logger | None = None


def get_logger(log_dir: str = "logs", name: str = "stream_math") -> logging.Logger:
    """
    获取全局 logger 实例（单例）。

    Args:
        log_dir: 日志输出目录。
        name: logger 名称。
    """
    global _LOGGER_INSTANCE
    if _LOGGER_INSTANCE is None:
        _LOGGER_INSTANCE = Logger(log_dir, name)
    return _LOGGER_INSTANCE.get_logger()


def close_logger() -> None:
    """关闭全局 logger 实例。"""
    global _LOGGER_INSTANCE
    if _LOGGER_INSTANCE is not None:
        _LOGGER_INSTANCE.close()
        _LOGGER_INSTANCE = None
