"""有序数据列表

表格的数据源。列表本身不可变：where / sort / limit / by_ids 都返回新的列表，
查询语句在迭代、count、map 时才真正构造并执行。

- DataList: 单个模型的记录列表
- ManyManyList: 多对多关系的一侧，关联表上可以有额外字段（如关系内排序）

使用示例:
    from ygrid.orm import DataList, ManyManyList

    slides = DataList(session, Slide).sort("sort")
    first_page = slides.limit(10, offset=0)
    first_page.map("id", "sort")  # {3: 1, 1: 2, ...}

    images = ManyManyList.for_relationship(session, gallery, "images")
    images.sort("sort").column("id")  # 按关联表上的 sort 排序
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from sqlalchemy import Table, func, inspect, select
from sqlalchemy.orm import Session

from .sortable.sort_location import SortLocation


class DataList:
    """单个模型的记录列表

    Args:
        session: 数据库会话
        model_class: 记录的模型类
    """

    def __init__(self, session: Session, model_class: type):
        self.session = session
        self.model_class = model_class
        self._criteria: Tuple[Any, ...] = ()
        self._ordering: Tuple[Any, ...] = ()
        self._limit: Optional[int] = None
        self._offset: int = 0

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.model_class.__name__}>"

    @property
    def data_class(self) -> type:
        """列表中记录的模型类"""
        return self.model_class

    def _copy(self, **changes) -> "DataList":
        clone = copy.copy(self)
        for name, value in changes.items():
            setattr(clone, name, value)
        return clone

    # ==================== 字段解析 ====================

    def field_expression(self, name: Any):
        """字段名对应的列表达式（已是表达式时原样返回）

        Raises:
            ValueError: 模型上没有该字段
        """
        if not isinstance(name, str):
            return name
        if name not in inspect(self.model_class).column_attrs:
            raise ValueError(f"{self.model_class.__name__} 没有字段 '{name}'")
        return getattr(self.model_class, name)

    # ==================== 列表变换 ====================

    def where(self, *criteria) -> "DataList":
        """追加过滤条件"""
        return self._copy(_criteria=self._criteria + tuple(criteria))

    def sort(self, *fields, direction: str = "asc") -> "DataList":
        """替换排序（字段名或列表达式）

        Args:
            fields: 排序字段，依次作为排序键
            direction: asc 或 desc
        """
        ordering = []
        for field in fields:
            expression = self.field_expression(field)
            ordering.append(expression.desc() if direction.lower() == "desc" else expression.asc())
        return self._copy(_ordering=tuple(ordering))

    def limit(self, limit: Optional[int], offset: int = 0) -> "DataList":
        """限制返回条数与偏移"""
        return self._copy(_limit=limit, _offset=max(offset, 0))

    def by_ids(self, ids: Iterable[int]) -> "DataList":
        """只保留指定主键的记录"""
        return self.where(self.model_class.id.in_(list(ids)))

    @property
    def is_sorted(self) -> bool:
        return bool(self._ordering)

    @property
    def limit_value(self) -> Optional[int]:
        return self._limit

    @property
    def offset_value(self) -> int:
        return self._offset

    # ==================== 语句构造 ====================

    def _base_select(self, *entities):
        # 只查询列时也以模型（含继承的父表）为 FROM
        return select(*(entities or (self.model_class,))).select_from(self.model_class)

    def _statement(self, *entities):
        stmt = self._base_select(*entities)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        if self._ordering:
            # 排序值相同时按主键稳定排序
            stmt = stmt.order_by(*self._ordering, self.model_class.id.asc())
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        if self._offset:
            stmt = stmt.offset(self._offset)
        return stmt

    # ==================== 读取 ====================

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return self.count()

    def to_list(self) -> List[Any]:
        return list(self.session.scalars(self._statement()).all())

    def first(self) -> Optional[Any]:
        return self.session.scalars(self.limit(1, self._offset)._statement()).first()

    def by_id(self, record_id: int) -> Optional[Any]:
        return self.where(self.model_class.id == record_id).first()

    def count(self) -> int:
        subquery = self._statement(self.model_class.id).subquery()
        return self.session.scalar(select(func.count()).select_from(subquery)) or 0

    def exists(self) -> bool:
        return self.count() > 0

    def column(self, name: Any = "id") -> List[Any]:
        """单列取值列表（按当前排序）"""
        return list(self.session.scalars(self._statement(self.field_expression(name))).all())

    def map(self, key: Any = "id", value: Any = "title") -> Dict[Any, Any]:
        """两列取值为字典（插入顺序即当前排序）

        直接查询列值，不经过 ORM 对象，读到的是数据库中的最新值。
        """
        rows = self.session.execute(
            self._statement(self.field_expression(key), self.field_expression(value))
        ).all()
        return {row[0]: row[1] for row in rows}


class ManyManyList(DataList):
    """多对多关系列表

    Args:
        session: 数据库会话
        model_class: 列表中记录的模型类
        join_table: 关联表
        local_key: 关联表上指向列表记录的列名
        foreign_key: 关联表上指向所属记录的列名
        foreign_id: 所属记录的主键
        extra_fields: 关联表上的额外字段名（关系内数据，如排序）

    使用示例:
        images = ManyManyList(
            session, Image,
            join_table=gallery_images,
            local_key="image_id",
            foreign_key="gallery_id",
            foreign_id=gallery.id,
            extra_fields=("sort",),
        )
    """

    def __init__(
        self,
        session: Session,
        model_class: type,
        join_table: Table,
        local_key: str,
        foreign_key: str,
        foreign_id: Any,
        extra_fields: Sequence[str] = (),
    ):
        super().__init__(session, model_class)
        self.join_table = join_table
        self.local_key = local_key
        self.foreign_key = foreign_key
        self.foreign_id = foreign_id
        self.extra_fields = tuple(extra_fields)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} {self.model_class.__name__} "
            f"via {self.join_table.name} {self.foreign_key}={self.foreign_id}>"
        )

    @classmethod
    def for_relationship(cls, session: Session, owner: Any, relationship_name: str) -> "ManyManyList":
        """根据 SQLAlchemy relationship(secondary=...) 构造关系列表

        关联表上除两个外键以外的列都视为额外字段。

        Raises:
            ValueError: 关系不是多对多
        """
        owner_mapper = inspect(type(owner))
        relationship = owner_mapper.relationships[relationship_name]
        if relationship.secondary is None:
            raise ValueError(f"{type(owner).__name__}.{relationship_name} 不是多对多关系")

        join_table = relationship.secondary
        owner_column, foreign_column = relationship.synchronize_pairs[0]
        _, local_column = relationship.secondary_synchronize_pairs[0]
        foreign_id = getattr(owner, owner_mapper.get_property_by_column(owner_column).key)

        keys = {foreign_column.name, local_column.name}
        extra_fields = [column.name for column in join_table.columns if column.name not in keys]

        return cls(
            session,
            relationship.mapper.class_,
            join_table=join_table,
            local_key=local_column.name,
            foreign_key=foreign_column.name,
            foreign_id=foreign_id,
            extra_fields=extra_fields,
        )

    def field_expression(self, name: Any):
        # 额外字段优先解析为关联表上的列
        if isinstance(name, str) and name in self.extra_fields:
            return self.join_table.c[name]
        return super().field_expression(name)

    def _base_select(self, *entities):
        return (
            super()._base_select(*entities)
            .join(self.join_table, self.join_table.c[self.local_key] == self.model_class.id)
            .where(self.join_table.c[self.foreign_key] == self.foreign_id)
        )

    def relation_sort_location(self, field: str) -> Optional[SortLocation]:
        """排序字段是关联表额外字段时，返回关联表上的位置"""
        if field not in self.extra_fields:
            return None
        return SortLocation(
            table=self.join_table,
            field=field,
            key_column=self.local_key,
            scope=(self.join_table.c[self.foreign_key] == self.foreign_id,),
        )
