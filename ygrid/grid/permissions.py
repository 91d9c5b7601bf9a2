"""权限检查

表格把权限判断交给一个检查函数，签名为:

    checker(context, model_class, action, record=None) -> bool

action 取值: view, edit, publish, unpublish, archive
"""

from typing import Any, Callable, Optional

from .context import GridRequestContext


PermissionChecker = Callable[[GridRequestContext, type, str, Optional[Any]], bool]


def default_permission_checker(
    context: GridRequestContext,
    model_class: type,
    action: str,
    record: Any = None,
) -> bool:
    """默认权限检查

    记录（没有记录时为模型类）定义了 can_<action>(user) 就以其结果为准，
    否则放行。

    使用示例:
        class Page(CoreModel, VersionedMixin):
            @classmethod
            def can_edit(cls, user):
                return user is not None and user.is_admin
    """
    target = record if record is not None else model_class
    check = getattr(target, f"can_{action}", None)
    if check is None:
        return True
    return bool(check(context.user))


def allow_all(context: GridRequestContext, model_class: type, action: str, record: Any = None) -> bool:
    """全部放行（测试、内部工具使用）"""
    return True


def deny_all(context: GridRequestContext, model_class: type, action: str, record: Any = None) -> bool:
    """全部拒绝"""
    return False
