"""发布/草稿生命周期 Mixin

记录分为草稿版本和线上版本：
- draft_version: 草稿版本号，内容字段变化时自动加一
- live_version: 已发布的版本号，None 表示未发布
- archived_at: 归档时间，None 表示未归档

使用示例:
    from ygrid.orm import CoreModel, VersionedMixin

    class Page(CoreModel, VersionedMixin):
        title: Mapped[str] = mapped_column(String(100))

    page = Page(title="首页")
    page.is_published()      # False
    page.publish()
    page.latest_published()  # True

    page.title = "新首页"
    session.flush()          # draft_version 加一
    page.latest_published()  # False，草稿有未发布的修改
"""

from datetime import datetime
from typing import Any, ClassVar, Optional, Set

from sqlalchemy import DateTime, Integer, event, inspect
from sqlalchemy.orm import Mapped, mapped_column


class VersionedMixin:
    """发布/草稿生命周期 Mixin

    可配置属性（子类可覆盖）:
        - __version_ignore_fields__: 变化时不产生新草稿的字段，默认只有排序字段
    """

    __version_ignore_fields__: ClassVar[Set[str]] = {"sort"}

    # 生命周期自身的字段，变化时从不产生新草稿
    _lifecycle_fields: ClassVar[Set[str]] = {"id", "draft_version", "live_version", "archived_at"}

    draft_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False, comment="草稿版本号")
    live_version: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=None, comment="已发布版本号")
    archived_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, default=None, comment="归档时间")

    def _current_draft(self) -> int:
        return self.draft_version or 1

    def is_published(self) -> bool:
        """当前是否有线上版本"""
        return self.live_version is not None

    def latest_published(self) -> bool:
        """最新草稿是否已经发布"""
        return self.live_version is not None and self.live_version == self._current_draft()

    def is_archived(self) -> bool:
        return self.archived_at is not None

    def publish(self) -> None:
        """发布当前草稿"""
        self.draft_version = self._current_draft()
        self.live_version = self.draft_version
        self.archived_at = None

    def unpublish(self) -> None:
        """下线，保留草稿"""
        self.live_version = None

    def archive(self) -> None:
        """下线并归档"""
        self.unpublish()
        self.archived_at = datetime.now()


def is_versioned(record_or_class: Any) -> bool:
    """记录（或模型类）是否具备发布/草稿生命周期"""
    cls = record_or_class if isinstance(record_or_class, type) else type(record_or_class)
    return issubclass(cls, VersionedMixin)


@event.listens_for(VersionedMixin, "before_update", propagate=True)
def event_bump_draft_version(mapper, connection, target):
    """内容字段变化时草稿版本号加一"""
    ignored = target._lifecycle_fields | set(getattr(target, "__version_ignore_fields__", set()))
    state = inspect(target)
    for attr in mapper.column_attrs:
        if attr.key in ignored:
            continue
        if state.attrs[attr.key].history.has_changes():
            target.draft_version = target._current_draft() + 1
            return
