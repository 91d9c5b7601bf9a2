"""排序模块

导出:
    - SortFieldMixin: 排序字段 Mixin（提供 sort 字段）
    - SortLocation: 排序值的存放位置（表、列、定位键）
    - RelationSortLocationProvider: 关联排序定位能力协议
    - resolve_sort_location: 解析列表的排序值存放位置

使用示例:
    from ygrid.orm.sortable import SortFieldMixin, resolve_sort_location

    class Slide(CoreModel, SortFieldMixin):
        title = mapped_column(String(100))

    location = resolve_sort_location(DataList(session, Slide), "sort")
    location.table_name  # "slide"
"""

from .sortable_fields import SortFieldMixin
from .sort_location import (
    SortLocation,
    RelationSortLocationProvider,
    resolve_sort_location,
)

__all__ = [
    "SortFieldMixin",
    "SortLocation",
    "RelationSortLocationProvider",
    "resolve_sort_location",
]
