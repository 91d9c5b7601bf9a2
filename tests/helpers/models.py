"""测试模型

- SortSlide: 普通排序模型，只有 Main 一个标签页
- SortAnimal / SortDog: 联表继承，排序字段在父表
- SortGallery / SortImage: 多对多，排序字段在关联表
- SortPage: 发布/草稿生命周期 + 多个标签页
"""

from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ygrid.forms import CMSFieldsMixin, FieldList, FormField, Tab, TabSet
from ygrid.orm import Base, CoreModel, SortFieldMixin, VersionedMixin


class SortSlide(CoreModel, SortFieldMixin, CMSFieldsMixin):
    """轮播图"""
    __tablename__ = "test_grid_slide"

    title: Mapped[str] = mapped_column(String(100), comment="标题")


class SortAnimal(CoreModel, SortFieldMixin):
    """动物（联表继承父类）"""
    __tablename__ = "test_grid_animal"

    name: Mapped[str] = mapped_column(String(50))
    kind: Mapped[str] = mapped_column(String(20))

    __mapper_args__ = {
        "polymorphic_on": "kind",
        "polymorphic_identity": "animal",
    }


class SortDog(SortAnimal):
    """狗（联表继承子类，自身没有排序字段）"""
    __tablename__ = "test_grid_dog"

    id: Mapped[int] = mapped_column(ForeignKey("test_grid_animal.id"), primary_key=True)
    breed: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    __mapper_args__ = {"polymorphic_identity": "dog"}


gallery_images = Table(
    "test_grid_gallery_images",
    Base.metadata,
    Column("gallery_id", Integer, ForeignKey("test_grid_gallery.id"), primary_key=True),
    Column("image_id", Integer, ForeignKey("test_grid_image.id"), primary_key=True),
    Column("sort", Integer, nullable=True),
)


class SortImage(CoreModel):
    """图片（自身没有排序字段）"""
    __tablename__ = "test_grid_image"

    title: Mapped[str] = mapped_column(String(100))


class SortGallery(CoreModel):
    """相册"""
    __tablename__ = "test_grid_gallery"

    title: Mapped[str] = mapped_column(String(100))
    images: Mapped[List[SortImage]] = relationship(secondary=gallery_images)


class SortPage(CoreModel, SortFieldMixin, VersionedMixin, CMSFieldsMixin):
    """页面"""
    __tablename__ = "test_grid_page"

    title: Mapped[str] = mapped_column(String(100), comment="标题")
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="内容")

    def get_cms_fields(self) -> FieldList:
        return FieldList(
            TabSet("Root", [
                Tab("Main", "Main", fields=[FormField("title", "标题"), FormField("content", "内容")]),
                Tab("Settings", "Settings", fields=[FormField("sort", "排序")]),
            ])
        )
