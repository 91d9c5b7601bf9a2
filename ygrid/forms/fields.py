"""编辑表单结构

记录的 get_cms_fields() 返回 FieldList，顶层通常是一个名为 Root 的 TabSet。
更多操作菜单据此为每个顶层标签页生成编辑链接。

使用示例:
    from ygrid.forms import FieldList, TabSet, Tab, FormField

    def get_cms_fields(self):
        return FieldList(
            TabSet("Root", [
                Tab("Main", fields=[FormField("title", "标题")]),
                Tab("Settings", "设置", fields=[FormField("url_segment")]),
            ])
        )
"""

from typing import Any, Dict, Iterable, List, Optional


class FormField:
    """表单字段"""

    def __init__(self, name: str, title: Optional[str] = None):
        self.name = name
        self.title = title or name

    def __repr__(self):
        return f"<FormField {self.name}>"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "title": self.title}


class Tab:
    """标签页

    挂到 TabSet 后才有完整的 id（如 Root_Main）。
    """

    def __init__(self, name: str, title: Optional[str] = None, fields: Iterable[FormField] = ()):
        self.name = name
        self.title = title or name
        self.fields: List[FormField] = list(fields)
        self.tab_set: Optional["TabSet"] = None

    def __repr__(self):
        return f"<Tab {self.id()}>"

    def id(self) -> str:
        if self.tab_set is None:
            return self.name
        return f"{self.tab_set.name}_{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id(),
            "name": self.name,
            "title": self.title,
            "fields": [field.to_dict() for field in self.fields],
        }


class TabSet:
    """标签页集合"""

    def __init__(self, name: str, tabs: Iterable[Tab] = ()):
        self.name = name
        self._tabs: List[Tab] = []
        for tab in tabs:
            self.push(tab)

    def __repr__(self):
        return f"<TabSet {self.name} tabs={len(self._tabs)}>"

    def push(self, tab: Tab) -> "TabSet":
        tab.tab_set = self
        self._tabs.append(tab)
        return self

    def tabs(self) -> List[Tab]:
        return list(self._tabs)

    def find_tab(self, tab_id: str) -> Optional[Tab]:
        for tab in self._tabs:
            if tab.id() == tab_id or tab.name == tab_id:
                return tab
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tabs": [tab.to_dict() for tab in self._tabs]}


class FieldList(list):
    """顶层字段列表（元素为 TabSet 或 FormField）"""

    def __init__(self, *items: Any):
        super().__init__(items)

    def first(self) -> Optional[Any]:
        return self[0] if self else None

    def root_tab_set(self) -> Optional[TabSet]:
        """第一个 TabSet（即编辑表单的顶层标签页）"""
        for item in self:
            if isinstance(item, TabSet):
                return item
        return None

    def find_tab(self, tab_id: str) -> Optional[Tab]:
        tab_set = self.root_tab_set()
        return tab_set.find_tab(tab_id) if tab_set else None

    def to_dict(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self]


class CMSFieldsMixin:
    """编辑表单脚手架

    默认生成只有 Main 一个标签页的表单，包含模型自身的内容列。
    模型需要更多标签页时覆盖 get_cms_fields()。
    """

    # 不出现在编辑表单中的字段
    __cms_exclude_fields__ = {"id", "sort", "draft_version", "live_version", "archived_at"}

    def get_cms_fields(self) -> FieldList:
        exclude = set(getattr(self, "__cms_exclude_fields__", ()))
        fields = [
            FormField(column.key, column.comment or column.key)
            for column in self.__table__.columns
            if column.key not in exclude
        ]
        return FieldList(TabSet("Root", [Tab("Main", fields=fields)]))
