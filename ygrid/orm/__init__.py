"""ORM 模块

提供表格数据源所需的模型基类、会话管理与有序列表。

使用示例:
    from ygrid.orm import CoreModel, SortFieldMixin, DataList, init_database, get_db

    class Slide(CoreModel, SortFieldMixin):
        title: Mapped[str] = mapped_column(String(100))

    init_database("sqlite:///./cms.db")
"""

from .core_model import Base, CoreModel, to_snake_case
from .db_session import (
    db_manager,
    DatabaseManager,
    init_database,
    get_engine,
    get_db,
    db_session_scope,
    on_request_end,
)
from .lists import DataList, ManyManyList
from .sortable import (
    SortFieldMixin,
    SortLocation,
    RelationSortLocationProvider,
    resolve_sort_location,
)
from .versioned import VersionedMixin, is_versioned

__all__ = [
    # 模型
    "Base",
    "CoreModel",
    "to_snake_case",

    # 会话
    "db_manager",
    "DatabaseManager",
    "init_database",
    "get_engine",
    "get_db",
    "db_session_scope",
    "on_request_end",

    # 列表
    "DataList",
    "ManyManyList",

    # 排序
    "SortFieldMixin",
    "SortLocation",
    "RelationSortLocationProvider",
    "resolve_sort_location",

    # 发布/草稿
    "VersionedMixin",
    "is_versioned",
]
