"""发布/草稿生命周期模块

导出:
    - VersionedMixin: 草稿版本号、线上版本号、归档时间及发布/下线/归档方法
    - is_versioned: 判断记录或模型类是否具备该能力
"""

from .versioned_mixin import VersionedMixin, is_versioned

__all__ = [
    "VersionedMixin",
    "is_versioned",
]
