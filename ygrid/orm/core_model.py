"""
ORM基础模型

提供表格记录的公共基类：自增主键、自动表名、序列化
"""

from __future__ import annotations

import re
from sqlalchemy import Integer, inspect
from sqlalchemy.orm import Mapped, mapped_column, declared_attr, declarative_base


Base = declarative_base()


def to_snake_case(name: str) -> str:
    """驼峰命名转下划线（支持 HTML、API 等连续大写缩写）

    使用示例:
        to_snake_case("GalleryImage")  # "gallery_image"
        to_snake_case("HTMLBlock")     # "html_block"
    """
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()


class CoreModel(Base):
    """ORM基础模型类

    提供功能：
    - 自增整数主键 id
    - 自动表名生成（驼峰转下划线）
    - 数据序列化方法

    使用示例:
        from ygrid.orm import CoreModel, SortFieldMixin

        class Slide(CoreModel, SortFieldMixin):
            title: Mapped[str] = mapped_column(String(100))

    联表继承时，子类需要声明指向父表的主键:
        class BlogPage(Page):
            id: Mapped[int] = mapped_column(ForeignKey("page.id"), primary_key=True)
    """
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, comment="主键")

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return to_snake_case(cls.__name__)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id}>"

    def to_dict(self, exclude: set = None) -> dict:
        """转换为字典

        Args:
            exclude: 需要排除的字段集合
        """
        exclude = exclude or set()
        return {
            c.key: getattr(self, c.key)
            for c in inspect(self).mapper.column_attrs
            if c.key not in exclude
        }
