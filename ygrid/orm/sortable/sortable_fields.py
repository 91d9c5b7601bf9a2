"""排序字段定义

提供标准的排序字段定义 Mixin，简化模型定义。

使用示例:
    from ygrid.orm import CoreModel
    from ygrid.orm.sortable import SortFieldMixin

    class Slide(CoreModel, SortFieldMixin):
        title: Mapped[str] = mapped_column(String(100))
        # sort 字段由 SortFieldMixin 自动提供
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class SortFieldMixin:
    """排序字段 Mixin

    字段说明:
        - sort: 排序序号，默认为0（表示尚未排序），值越小越靠前

    使用示例:
        class Slide(CoreModel, SortFieldMixin):
            title: Mapped[str]

        DataList(session, Slide).sort("sort")
    """

    sort: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="排序序号"
    )


__all__ = [
    "SortFieldMixin",
]
