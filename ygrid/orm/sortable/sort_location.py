"""排序字段定位

确定排序值实际存放的表与列：

1. 列表是多对多关系，且排序字段是关联表上的额外字段 -> 关联表，按 local_key 定位记录
2. 否则沿模型的继承链自顶向下，第一个自身声明了该列的表 -> 该表，按主键定位记录
3. 都找不到 -> SortFieldNotFoundError（配置错误）

使用示例:
    from ygrid.orm.sortable import resolve_sort_location

    location = resolve_sort_location(data_list, "sort")
    stmt = (
        update(location.table)
        .where(*location.clause_for_ids(record_id))
        .values({location.field: 3})
    )
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Iterable, Optional, Protocol, Tuple, Union, runtime_checkable

from sqlalchemy import Column, Table, inspect

from ygrid.exceptions import SortFieldNotFoundError


@dataclass(frozen=True)
class SortLocation:
    """排序值的存放位置

    属性:
        table: 存放排序值的表（模型表或关联表）
        field: 排序列名
        key_column: 定位记录的列名（模型表为主键，关联表为 local_key）
        scope: 额外的限定条件（关联表上限定到当前所属记录）
    """
    table: Table
    field: str
    key_column: str
    scope: Tuple[Any, ...] = dataclass_field(default=())

    @property
    def table_name(self) -> str:
        return self.table.name

    @property
    def column(self) -> Column:
        return self.table.c[self.field]

    @property
    def key(self) -> Column:
        return self.table.c[self.key_column]

    @property
    def is_relation(self) -> bool:
        """排序值是否存放在关联表上"""
        return bool(self.scope)

    def clause_for_ids(self, ids: Union[int, Iterable[int]]) -> Tuple[Any, ...]:
        """构造定位记录的 WHERE 条件（含限定条件）"""
        if isinstance(ids, int):
            return (self.key == ids, *self.scope)
        return (self.key.in_(list(ids)), *self.scope)


@runtime_checkable
class RelationSortLocationProvider(Protocol):
    """关联排序定位能力

    由能够自行说明关联表与额外字段的列表实现（如 ManyManyList），
    排序定位不再需要从外部探查列表的内部状态。
    """

    def relation_sort_location(self, field: str) -> Optional[SortLocation]:
        """返回 field 在关联表上的位置；field 不是关联表额外字段时返回 None"""
        ...


def _table_location(model_class: type, field: str) -> Optional[SortLocation]:
    mapper = inspect(model_class)
    # iterate_to_root 从子类到根类，这里需要自顶向下
    for current in reversed(list(mapper.iterate_to_root())):
        table = current.local_table
        column = None
        if field in current.column_attrs:
            candidate = current.column_attrs[field].columns[0]
            if candidate.table is table:
                column = candidate
        elif field in table.c:
            column = table.c[field]
        if column is None:
            continue
        key = list(table.primary_key.columns)[0]
        return SortLocation(table=table, field=column.name, key_column=key.name)
    return None


def resolve_sort_location(data_list: Any, field: str) -> SortLocation:
    """解析列表的排序值存放位置

    Args:
        data_list: DataList 或其子类
        field: 排序字段名

    Raises:
        SortFieldNotFoundError: 没有任何表声明该字段
    """
    if isinstance(data_list, RelationSortLocationProvider):
        location = data_list.relation_sort_location(field)
        if location is not None:
            return location

    location = _table_location(data_list.data_class, field)
    if location is None:
        raise SortFieldNotFoundError(field, data_list.data_class)
    return location


__all__ = [
    "SortLocation",
    "RelationSortLocationProvider",
    "resolve_sort_location",
]
