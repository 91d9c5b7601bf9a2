"""日志模块

使用示例:
    from ygrid.log import setup_logger, get_logger

    logger = setup_logger("ygrid", level="DEBUG", log_file="logs/grid.log")

    logger = get_logger()
"""

from .logger import (
    LoggingConfigProtocol,
    setup_logger,
    setup_root_logger,
    setup_sql_logger,
    create_formatter,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    grid_logger,
    orm_logger,
    api_logger,
    logger,
    get_logger,
)

__all__ = [
    "LoggingConfigProtocol",
    "setup_logger",
    "setup_root_logger",
    "setup_sql_logger",
    "create_formatter",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "grid_logger",
    "orm_logger",
    "api_logger",
    "logger",
    "get_logger",
]
