"""更多操作菜单

在表格最后加一列竖排三点按钮，展开后分组列出:

- rootlinks: 编辑表单的每个顶层标签页
- versioned: 发布 / 下线 / 删除（仅限具备发布生命周期的记录）

菜单数据以 JSON 形式交给模板，分组顺序即插入顺序。
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ygrid.config import get_grid_settings
from ygrid.exceptions import Err, ErrorCode
from ygrid.forms import FieldList
from ygrid.orm.versioned import is_versioned

from .components import ColumnProvider, URLHandler
from .context import GridRequest, GridRequestContext
from .record_actions import GridFieldRecordActionHandler


DEFAULT_LABELS = {
    "Publish": "Publish",
    "Unpublish": "Unpublish",
    "Delete": "Delete",
    "More Actions": "More Actions",
}

GROUP_ROOT_LINKS = "rootlinks"
GROUP_VERSIONED = "versioned"

TYPE_LINK = "link"
TYPE_VERSIONING = "versioning"


@dataclass(frozen=True)
class MenuAction:
    """菜单项"""
    title: str
    link: str
    type: str = TYPE_LINK

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "link": self.link, "type": self.type}


# 分组名 -> 菜单项，按插入顺序
ActionGroups = Dict[str, List[MenuAction]]


class GridFieldMeatballMenuComponent(ColumnProvider, URLHandler):
    """更多操作菜单组件

    Args:
        show_first_tab: 是否列出第一个标签页，默认取 GridSettings.show_first_tab
        labels: 菜单文案覆盖，如 {"Publish": "发布", "Delete": "删除"}
    """

    COLUMN = "Meatballs"

    def __init__(self, show_first_tab: Optional[bool] = None, labels: Optional[Dict[str, str]] = None):
        self._show_first_tab = show_first_tab
        self.labels = dict(labels or {})

    def get_show_first_tab(self) -> bool:
        if self._show_first_tab is None:
            return get_grid_settings().show_first_tab
        return self._show_first_tab

    def set_show_first_tab(self, show_first_tab: bool) -> "GridFieldMeatballMenuComponent":
        self._show_first_tab = show_first_tab
        return self

    def label(self, key: str) -> str:
        if key in self.labels:
            return self.labels[key]
        return get_grid_settings().menu_labels.get(key, DEFAULT_LABELS.get(key, key))

    # ==================== 菜单构造 ====================

    def build_actions(self, grid, record: Any) -> ActionGroups:
        """为一条记录构造分组菜单（每次调用返回新的结构）"""
        groups: ActionGroups = {}
        self.add_root_tab_actions(grid, record, groups)
        if is_versioned(record):
            self.add_versioned_actions(grid, record, groups)
        return groups

    def add_root_tab_actions(self, grid, record: Any, groups: ActionGroups) -> None:
        """每个顶层标签页一个编辑链接，第一个标签页的链接不带 tab 参数"""
        fields = self._get_cms_fields(record)
        tab_set = fields.root_tab_set()
        if tab_set is None:
            return

        edit_link = grid.link("item", record.id, "edit")
        for index, tab in enumerate(tab_set.tabs()):
            if index == 0 and not self.get_show_first_tab():
                continue
            link = edit_link if index == 0 else f"{edit_link}?tab={tab.id()}"
            groups.setdefault(GROUP_ROOT_LINKS, []).append(MenuAction(tab.title, link, TYPE_LINK))

    def add_versioned_actions(self, grid, record: Any, groups: ActionGroups) -> None:
        actions = groups.setdefault(GROUP_VERSIONED, [])
        if not record.latest_published():
            actions.append(MenuAction(self.label("Publish"), grid.link("item", record.id, "publish"), TYPE_VERSIONING))
        if record.is_published():
            actions.append(MenuAction(self.label("Unpublish"), grid.link("item", record.id, "unpublish"), TYPE_VERSIONING))
        actions.append(MenuAction(self.label("Delete"), grid.link("item", record.id, "archive"), TYPE_VERSIONING))

    @staticmethod
    def actions_to_json(groups: ActionGroups) -> str:
        return json.dumps(
            [[action.to_dict() for action in group] for group in groups.values()],
            ensure_ascii=False,
        )

    @staticmethod
    def _get_cms_fields(record: Any) -> FieldList:
        get_cms_fields = getattr(record, "get_cms_fields", None)
        return get_cms_fields() if get_cms_fields is not None else FieldList()

    # ==================== ColumnProvider ====================

    def augment_columns(self, grid, context, columns: List[str]) -> None:
        if self.COLUMN not in columns:
            columns.append(self.COLUMN)

    def get_columns_handled(self, grid) -> List[str]:
        return [self.COLUMN]

    def get_column_content(self, grid, context, record: Any, column: str) -> Any:
        return grid.renderer.render(
            "meatball_menu.html",
            record_id=record.id,
            title=self.label("More Actions"),
            actions=self.actions_to_json(self.build_actions(grid, record)),
        )

    def get_column_attributes(self, grid, context, record: Any, column: str) -> Dict[str, Any]:
        return {"class": "grid-field__col-compact meatball-menu"}

    def get_column_metadata(self, grid, column: str) -> Dict[str, Any]:
        if column == self.COLUMN:
            return {"title": self.label("More Actions")}
        return {}

    # ==================== URLHandler ====================

    def get_url_handlers(self, grid) -> Dict[str, str]:
        return {
            "POST item/{id}/publish": "handle_publish",
            "POST item/{id}/unpublish": "handle_unpublish",
            "POST item/{id}/archive": "handle_archive",
            "GET item/{id}/edit": "handle_record_link",
            "GET item/{id}": "handle_record_link",
        }

    def handle_record_link(self, grid, context: GridRequestContext, request: GridRequest) -> Dict[str, Any]:
        """记录编辑视图：记录数据、当前标签页、表单结构

        主键不存在时返回模型的空白记录，用于新建。
        """
        record_id = self._parse_id(request.param("id"))
        record = grid.get_list(context).by_id(record_id)
        if record is None:
            record = grid.model_class()
        grid.check_permission(context, "view", record)

        fields = self._get_cms_fields(record)
        tab_set = fields.root_tab_set()
        tab = None
        tab_param = request.query_var("tab")
        if tab_param and tab_set is not None:
            tab = tab_set.find_tab(tab_param)
        if tab is None and tab_set is not None and tab_set.tabs():
            tab = tab_set.tabs()[0]

        return {
            "id": record.id,
            "is_new": record.id is None,
            "tab": tab.id() if tab else None,
            "record": record,
            "fields": fields.to_dict(),
        }

    def handle_record_action(self, grid, context: GridRequestContext, request: GridRequest, action: str):
        record_id = self._parse_id(request.param("id"))
        record = grid.get_list(context).by_id(record_id)
        return GridFieldRecordActionHandler(grid, context, record).handle(action)

    def handle_publish(self, grid, context: GridRequestContext, request: GridRequest):
        return self.handle_record_action(grid, context, request, "publish")

    def handle_unpublish(self, grid, context: GridRequestContext, request: GridRequest):
        return self.handle_record_action(grid, context, request, "unpublish")

    def handle_archive(self, grid, context: GridRequestContext, request: GridRequest):
        return self.handle_record_action(grid, context, request, "archive")

    @staticmethod
    def _parse_id(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise Err.bad_request("无效的记录ID", code=ErrorCode.INVALID_PAYLOAD)
