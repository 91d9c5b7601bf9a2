"""请求上下文

每个表格请求构造一个不可变的 GridRequestContext，组件之间只通过它共享
排序、分页、当前用户等状态；需要不同状态时用 with_state() 得到新的上下文。
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session


@dataclass(frozen=True)
class GridRequestContext:
    """表格请求上下文

    属性:
        session: 数据库会话
        user: 当前用户（交给权限检查函数判断）
        sort_column: 用户点击表头选择的排序列，为空表示未按表头排序
        sort_direction: asc 或 desc
        current_page: 当前页码，从 1 开始

    使用示例:
        context = GridRequestContext(session=db, user=current_user, current_page=2)
        next_page = context.with_state(current_page=3)
    """
    session: Session
    user: Any = None
    sort_column: Optional[str] = None
    sort_direction: str = "asc"
    current_page: int = 1

    @property
    def is_user_sorted(self) -> bool:
        """用户是否按表头排序"""
        return bool(self.sort_column)

    def with_state(self, **changes) -> "GridRequestContext":
        return replace(self, **changes)

    @classmethod
    def from_state(
        cls,
        session: Session,
        user: Any = None,
        state: Optional[Mapping[str, Any]] = None,
    ) -> "GridRequestContext":
        """从前端提交的表格状态构造上下文

        支持的键: sort_column, sort_direction, current_page（或 page）
        """
        state = state or {}
        page = state.get("current_page", state.get("page")) or 1
        try:
            page = max(int(page), 1)
        except (TypeError, ValueError):
            page = 1
        direction = str(state.get("sort_direction") or "asc").lower()
        return cls(
            session=session,
            user=user,
            sort_column=state.get("sort_column") or None,
            sort_direction="desc" if direction == "desc" else "asc",
            current_page=page,
        )


@dataclass(frozen=True)
class GridRequest:
    """组件处理器收到的请求数据

    属性:
        params: 路径参数（如 id）
        post_vars: 请求体
        query: 查询参数
    """
    params: Dict[str, Any] = field(default_factory=dict)
    post_vars: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)

    def param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def post_var(self, name: str, default: Any = None) -> Any:
        return self.post_vars.get(name, default)

    def query_var(self, name: str, default: Any = None) -> Any:
        return self.query.get(name, default)
