"""配置模块

提供配置管理功能：
- AppSettings: 应用基础配置，支持 YAML + 环境变量
- GridSettings: 排序字段、菜单、分页等表格配置
- ConfigLoader: YAML 配置加载器

快速开始:
    from ygrid.config import AppSettings, load_yaml_config, configure_grid

    settings = load_yaml_config("config/settings.yaml", AppSettings)
    configure_grid(settings.grid)

配置优先级: 环境变量 > YAML 文件 > 默认值
"""

from .settings import (
    AppSettings,
    GridSettings,
    DatabaseSettings,
    LoggingSettings,
    DEFAULT_SORT_FIELD,
    DEFAULT_ITEMS_PER_PAGE,
    get_grid_settings,
    configure_grid,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    "AppSettings",
    "GridSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "DEFAULT_SORT_FIELD",
    "DEFAULT_ITEMS_PER_PAGE",
    "get_grid_settings",
    "configure_grid",
    "ConfigLoader",
    "load_yaml_config",
]
