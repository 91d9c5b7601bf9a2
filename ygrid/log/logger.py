"""
日志工具模块
提供简化的日志配置功能
"""

import inspect
import logging
import logging.handlers
import os
import time
from typing import Optional, Any, Protocol, runtime_checkable


@runtime_checkable
class LoggingConfigProtocol(Protocol):
    """日志配置协议

    定义日志配置对象需要提供的属性，LoggingSettings 实现了这些属性。
    """
    level: str
    file_path: Optional[str]
    file_backup_count: int
    file_encoding: str

    @property
    def parsed_file_max_bytes(self) -> int: ...


class MicrosecondFormatter(logging.Formatter):
    """支持微秒精度的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = time.strftime("%Y-%m-%d %H:%M:%S", ct)
        return "%s.%06d" % (s, (record.created - int(record.created)) * 1000000)


# 默认日志格式
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"

# SQL 日志格式
SQL_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def create_formatter(
    log_format: str = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    use_microseconds: bool = True
) -> logging.Formatter:
    """创建日志格式化器

    Args:
        log_format: 日志格式字符串
        datefmt: 时间格式
        use_microseconds: 是否使用微秒精度
    """
    fmt = log_format or DEFAULT_LOG_FORMAT
    if use_microseconds:
        return MicrosecondFormatter(fmt=fmt, datefmt=datefmt)
    return logging.Formatter(fmt, datefmt=datefmt)


def setup_logger(
    name: str = None,
    level: str = "INFO",
    log_file: str = None,
    log_format: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    propagate: bool = True,
    max_bytes: int = 0,
    backup_count: int = 5,
    encoding: str = "utf-8",
) -> logging.Logger:
    """设置并返回配置好的日志记录器

    Args:
        name: 日志记录器名称，默认为 root logger
        level: 日志级别，可选：DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_file: 日志文件路径，如果不指定则不写入文件
        log_format: 日志格式，如果不指定则使用默认格式
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度时间戳
        propagate: 是否传播到父日志器
        max_bytes: 单个日志文件最大字节数，大于 0 时按大小轮转
        backup_count: 轮转保留的备份文件数量
        encoding: 日志文件编码

    Returns:
        配置好的日志记录器

    使用示例:
        from ygrid.log import setup_logger

        logger = setup_logger("ygrid.grid", level="DEBUG")

        logger = setup_logger(
            "ygrid",
            log_file="logs/grid.log",
            max_bytes=10*1024*1024,
            backup_count=5,
        )
    """
    _logger = logging.getLogger(name) if name else logging.getLogger()
    _logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    _logger.propagate = propagate

    # 清除现有的处理器
    _logger.handlers.clear()

    formatter = create_formatter(log_format, use_microseconds=use_microseconds)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        if max_bytes > 0:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding=encoding,
            )
        else:
            file_handler = logging.FileHandler(log_file, encoding=encoding)

        file_handler.setFormatter(formatter)
        _logger.addHandler(file_handler)

    return _logger


def _load_logging_config_from_file(config_path: str, base_dir: str = None) -> Any:
    """从 YAML 配置文件的 logging 段加载日志配置"""
    from ..config import ConfigLoader, LoggingSettings

    config_data = ConfigLoader.load(config_path, base_dir=base_dir)
    return LoggingSettings(**config_data.get("logging", {}))


def setup_sql_logger(config: Any = None, level: str = "DEBUG", log_file: str = None) -> Optional[logging.Logger]:
    """设置 SQLAlchemy SQL 日志记录器

    表格的排序写入都是直接的 UPDATE 语句，排查顺序问题时打开 SQL 日志最直观。

    Returns:
        SQL 日志记录器，如果 config.sql_log_enabled 为 False 则返回 None
    """
    if config is not None:
        if not getattr(config, "sql_log_enabled", True):
            return None
        level = getattr(config, "sql_log_level", level)
        log_file = getattr(config, "sql_log_file_path", log_file)

    return setup_logger(
        name="sqlalchemy.engine",
        level=level,
        log_file=log_file,
        log_format=SQL_LOG_FORMAT,
        console=log_file is None,
        propagate=False,
    )


def setup_root_logger(
    level: str = "INFO",
    log_file: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    config: Any = None,
    config_path: str = None,
    config_base_dir: str = None,
) -> logging.Logger:
    """设置根日志记录器

    子日志器会自动继承根日志器的处理器配置。

    Args:
        level: 日志级别（如果提供 config/config_path 则忽略）
        log_file: 日志文件路径（如果提供 config/config_path 则忽略）
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度
        config: 日志配置对象（LoggingSettings）
        config_path: 配置文件路径（YAML）
        config_base_dir: 配置文件基础目录

    使用示例:
        logger = setup_root_logger(level="INFO", log_file="logs/app.log")
        logger = setup_root_logger(config=settings.logging)
        logger = setup_root_logger(config_path="config/settings.yaml")
    """
    if config_path is not None:
        config = _load_logging_config_from_file(config_path, config_base_dir)

    max_bytes = 0
    backup_count = 5
    encoding = "utf-8"
    if config is not None:
        level = getattr(config, "level", level)
        log_file = getattr(config, "file_path", log_file)
        console = getattr(config, "enable_console", console)
        max_bytes = getattr(config, "parsed_file_max_bytes", max_bytes)
        backup_count = getattr(config, "file_backup_count", backup_count)
        encoding = getattr(config, "file_encoding", encoding)

        if getattr(config, "sql_log_enabled", False):
            setup_sql_logger(config)

    return setup_logger(
        name=None,
        level=level,
        log_file=log_file,
        console=console,
        use_microseconds=use_microseconds,
        propagate=False,
        max_bytes=max_bytes,
        backup_count=backup_count,
        encoding=encoding,
    )


def get_logger(name: str = None) -> logging.Logger:
    """获取日志记录器，支持自动推断模块名

    无参数调用时，自动从调用栈获取模块的 __name__ 作为日志器名称。
    有参数调用时，简写名称自动添加 'ygrid.' 前缀。

    使用示例:
        from ygrid.log import get_logger

        logger = get_logger()
        # 在 ygrid/grid/orderable_rows.py 中 -> "ygrid.grid.orderable_rows"

        logger = get_logger("grid")                # -> "ygrid.grid"
        logger = get_logger("sqlalchemy.engine")   # -> "sqlalchemy.engine"
    """
    if name is None:
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            name = frame.f_back.f_globals.get('__name__', 'ygrid')
        else:
            name = 'ygrid'
    elif not name.startswith('ygrid.') and name != 'ygrid' and '.' not in name:
        # 包含点号的名称（如 "sqlalchemy.engine"）不添加前缀
        name = f"ygrid.{name}"

    return logging.getLogger(name)


# ==================== 模块日志记录器 ====================
grid_logger = get_logger("grid")
orm_logger = get_logger("orm")
api_logger = get_logger("api")

# 通用日志记录器
logger = logging.getLogger("ygrid")
