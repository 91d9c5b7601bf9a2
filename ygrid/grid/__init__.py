"""表格模块

使用示例:
    from ygrid.grid import GridField, GridFieldConfig, GridRequestContext

    grid = GridField(
        "slides",
        Slide,
        list_factory=lambda session: DataList(session, Slide),
        config=GridFieldConfig.record_editor(),
        base_url="/admin/slides",
    )
    html = grid.render(GridRequestContext(session=db))
"""

from .components import (
    GridFieldComponent,
    ColumnProvider,
    DataManipulator,
    URLHandler,
    HTMLProvider,
    HTMLFragments,
)
from .context import GridRequestContext, GridRequest
from .permissions import PermissionChecker, default_permission_checker, allow_all, deny_all
from .renderer import GridRenderer, create_environment
from .gridfield import GridField, GridFieldConfig
from .data_columns import GridFieldDataColumns
from .sortable_header import GridFieldSortableHeader
from .paginator import GridFieldPaginator
from .orderable_rows import GridFieldOrderableRows, MOVE_PREVIOUS, MOVE_NEXT
from .record_actions import GridFieldRecordActionHandler, RECORD_ACTIONS
from .meatball_menu import GridFieldMeatballMenuComponent, MenuAction, ActionGroups

__all__ = [
    # 组件接口
    "GridFieldComponent",
    "ColumnProvider",
    "DataManipulator",
    "URLHandler",
    "HTMLProvider",
    "HTMLFragments",

    # 请求
    "GridRequestContext",
    "GridRequest",

    # 权限与渲染
    "PermissionChecker",
    "default_permission_checker",
    "allow_all",
    "deny_all",
    "GridRenderer",
    "create_environment",

    # 表格
    "GridField",
    "GridFieldConfig",

    # 组件
    "GridFieldDataColumns",
    "GridFieldSortableHeader",
    "GridFieldPaginator",
    "GridFieldOrderableRows",
    "MOVE_PREVIOUS",
    "MOVE_NEXT",
    "GridFieldRecordActionHandler",
    "RECORD_ACTIONS",
    "GridFieldMeatballMenuComponent",
    "MenuAction",
    "ActionGroups",
]
