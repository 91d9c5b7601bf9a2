"""
YGrid - 可排序的记录表格

提供拖拽排序、跨页移动、更多操作菜单（标签页链接、发布/下线/删除）的表格组件，
以及把表格挂载为 FastAPI 路由的工厂函数。
"""

__version__ = "0.1.0"

# 导出响应模块
from .response import (
    Resp,
    OK,
    Fragment,
    BadRequest,
    Forbidden,
    NotFound,
    InternalServerError,
)

# 导出异常
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    SortFieldNotFoundError,
    register_exception_handlers,
)

# 导出配置
from .config import (
    AppSettings,
    GridSettings,
    load_yaml_config,
    get_grid_settings,
    configure_grid,
)

# 导出日志
from .log import get_logger, setup_logger, setup_root_logger

# 导出ORM
from .orm import (
    CoreModel,
    SortFieldMixin,
    VersionedMixin,
    DataList,
    ManyManyList,
    init_database,
    get_db,
)

# 导出表单
from .forms import FormField, Tab, TabSet, FieldList, CMSFieldsMixin

# 导出表格
from .grid import (
    GridField,
    GridFieldConfig,
    GridRequestContext,
    GridFieldDataColumns,
    GridFieldSortableHeader,
    GridFieldPaginator,
    GridFieldOrderableRows,
    GridFieldMeatballMenuComponent,
    GridFieldRecordActionHandler,
)

# 导出路由
from .api import create_grid_router

__all__ = [
    "__version__",

    # 响应
    "Resp",
    "OK",
    "Fragment",
    "BadRequest",
    "Forbidden",
    "NotFound",
    "InternalServerError",

    # 异常
    "Err",
    "ErrorCode",
    "BusinessException",
    "SortFieldNotFoundError",
    "register_exception_handlers",

    # 配置
    "AppSettings",
    "GridSettings",
    "load_yaml_config",
    "get_grid_settings",
    "configure_grid",

    # 日志
    "get_logger",
    "setup_logger",
    "setup_root_logger",

    # ORM
    "CoreModel",
    "SortFieldMixin",
    "VersionedMixin",
    "DataList",
    "ManyManyList",
    "init_database",
    "get_db",

    # 表单
    "FormField",
    "Tab",
    "TabSet",
    "FieldList",
    "CMSFieldsMixin",

    # 表格
    "GridField",
    "GridFieldConfig",
    "GridRequestContext",
    "GridFieldDataColumns",
    "GridFieldSortableHeader",
    "GridFieldPaginator",
    "GridFieldOrderableRows",
    "GridFieldMeatballMenuComponent",
    "GridFieldRecordActionHandler",

    # 路由
    "create_grid_router",
]
