"""表格

GridField 组装组件：数据列表经过各 DataManipulator 变换，列由各 ColumnProvider
增加并渲染，路由由各 URLHandler 声明。表格本身是配置对象，可在多个请求间共享；
请求相关的状态全部在 GridRequestContext 中。

使用示例:
    from ygrid.grid import GridField, GridFieldConfig
    from ygrid.orm import DataList

    pages_grid = GridField(
        "pages",
        Page,
        list_factory=lambda session: DataList(session, Page),
        config=GridFieldConfig.record_editor(),
        display_fields={"title": "标题"},
        base_url="/admin/pages",
    )

    html = pages_grid.render(GridRequestContext(session=db))
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from markupsafe import Markup

from ygrid.exceptions import Err, ErrorCode
from ygrid.log import get_logger

from .components import (
    ColumnProvider,
    DataManipulator,
    GridFieldComponent,
    HTMLFragments,
    HTMLProvider,
    URLHandler,
)
from .context import GridRequestContext
from .permissions import PermissionChecker, default_permission_checker
from .renderer import GridRenderer

logger = get_logger()

C = TypeVar("C", bound=GridFieldComponent)


class GridFieldConfig:
    """表格组件配置（有序）

    使用示例:
        config = GridFieldConfig().add_components(
            GridFieldDataColumns(),
            GridFieldOrderableRows("sort"),
            GridFieldPaginator(20),
        )
        config.get_component_by_type(GridFieldPaginator).items_per_page  # 20
    """

    def __init__(self, components: Iterable[GridFieldComponent] = ()):
        self._components: List[GridFieldComponent] = []
        self.add_components(*components)

    def __iter__(self):
        return iter(list(self._components))

    def __len__(self):
        return len(self._components)

    def add_component(self, component: GridFieldComponent, before: Optional[type] = None) -> "GridFieldConfig":
        """追加组件；指定 before 时插到第一个该类型组件之前"""
        if before is not None:
            for index, existing in enumerate(self._components):
                if isinstance(existing, before):
                    self._components.insert(index, component)
                    return self
        self._components.append(component)
        return self

    def add_components(self, *components: GridFieldComponent) -> "GridFieldConfig":
        for component in components:
            self.add_component(component)
        return self

    def remove_components_by_type(self, component_type: type) -> "GridFieldConfig":
        self._components = [c for c in self._components if not isinstance(c, component_type)]
        return self

    def get_components(self) -> List[GridFieldComponent]:
        return list(self._components)

    def get_components_by_type(self, component_type: Type[C]) -> List[C]:
        return [c for c in self._components if isinstance(c, component_type)]

    def get_component_by_type(self, component_type: Type[C]) -> Optional[C]:
        for component in self._components:
            if isinstance(component, component_type):
                return component
        return None

    @classmethod
    def record_editor(
        cls,
        sort_field: Optional[str] = None,
        items_per_page: Optional[int] = None,
        show_first_tab: Optional[bool] = None,
    ) -> "GridFieldConfig":
        """记录编辑表格预设：数据列 + 表头排序 + 拖拽排序 + 分页 + 更多操作菜单"""
        from .data_columns import GridFieldDataColumns
        from .sortable_header import GridFieldSortableHeader
        from .orderable_rows import GridFieldOrderableRows
        from .paginator import GridFieldPaginator
        from .meatball_menu import GridFieldMeatballMenuComponent

        return cls([
            GridFieldDataColumns(),
            GridFieldSortableHeader(),
            GridFieldOrderableRows(sort_field),
            GridFieldPaginator(items_per_page),
            GridFieldMeatballMenuComponent(show_first_tab),
        ])


class GridField:
    """表格

    Args:
        name: 表格名称（HTML id）
        model_class: 记录的模型类
        list_factory: session -> DataList，构造表格的数据源
        config: 组件配置
        renderer: 模板渲染器
        permission_checker: 权限检查函数
        display_fields: 数据列 {字段名: 标题}
        base_url: 表格路由的挂载路径
    """

    def __init__(
        self,
        name: str,
        model_class: type,
        list_factory: Callable[[Any], Any],
        config: Optional[GridFieldConfig] = None,
        renderer: Optional[GridRenderer] = None,
        permission_checker: Optional[PermissionChecker] = None,
        display_fields: Optional[Dict[str, str]] = None,
        base_url: str = "",
        empty_text: str = "暂无记录",
    ):
        self.name = name
        self.model_class = model_class
        self.list_factory = list_factory
        self.config = config if config is not None else GridFieldConfig()
        self.renderer = renderer or GridRenderer()
        self.permission_checker = permission_checker or default_permission_checker
        self.display_fields = dict(display_fields or {})
        self.base_url = base_url.rstrip("/")
        self.empty_text = empty_text

    def __repr__(self):
        return f"<GridField {self.name} {self.model_class.__name__}>"

    # ==================== 链接 ====================

    def link(self, *parts: Any) -> str:
        """表格下的链接，如 link("item", 3, "edit") -> /admin/pages/item/3/edit"""
        segments = [str(part).strip("/") for part in parts if part is not None and str(part) != ""]
        return "/".join([self.base_url] + segments) if segments else (self.base_url or "/")

    # ==================== 权限 ====================

    def can(self, context: GridRequestContext, action: str, record: Any = None) -> bool:
        return bool(self.permission_checker(context, self.model_class, action, record))

    def check_permission(self, context: GridRequestContext, action: str, record: Any = None) -> None:
        """没有权限时抛出 403"""
        if not self.can(context, action, record):
            logger.info(f"表格 {self.name} 拒绝 {action} 操作: user={context.user!r}")
            raise Err.forbidden(
                f"没有{action}权限",
                code=ErrorCode.PERMISSION_DENIED,
                grid=self.name,
                action=action,
            )

    # ==================== 数据 ====================

    def get_list(self, context: GridRequestContext):
        """未经变换的数据列表"""
        return self.list_factory(context.session)

    def get_manipulated_list(self, context: GridRequestContext):
        """依次经过各 DataManipulator 变换后的列表"""
        data_list = self.get_list(context)
        for component in self.config.get_components_by_type(DataManipulator):
            data_list = component.get_manipulated_data(self, context, data_list)
        return data_list

    # ==================== 列 ====================

    def get_columns(self, context: GridRequestContext) -> List[str]:
        columns: List[str] = []
        for component in self.config.get_components_by_type(ColumnProvider):
            component.augment_columns(self, context, columns)
        return columns

    def get_column_handler(self, column: str) -> ColumnProvider:
        """负责渲染该列的组件

        Raises:
            LookupError: 没有组件处理该列（配置错误）
        """
        for component in self.config.get_components_by_type(ColumnProvider):
            if column in component.get_columns_handled(self):
                return component
        raise LookupError(f"表格 {self.name} 没有组件处理列 '{column}'")

    # ==================== 路由 ====================

    def get_url_handlers(self) -> List[tuple]:
        """[(method, path, component, handler_name)]，按组件顺序"""
        handlers = []
        for component in self.config.get_components_by_type(URLHandler):
            for rule, handler_name in component.get_url_handlers(self).items():
                method, _, path = rule.partition(" ")
                handlers.append((method.upper(), path.strip("/"), component, handler_name))
        return handlers

    # ==================== 渲染 ====================

    def _html_fragments(self, context: GridRequestContext) -> HTMLFragments:
        fragments = HTMLFragments()
        for component in self.config.get_components_by_type(HTMLProvider):
            fragments = fragments.merge(component.get_html_fragments(self, context))
        return fragments

    def render(self, context: GridRequestContext) -> Markup:
        """渲染表格片段"""
        columns = self.get_columns(context)
        handlers = {column: self.get_column_handler(column) for column in columns}

        header = []
        for column in columns:
            metadata = handlers[column].get_column_metadata(self, column)
            header.append({"name": column, "title": metadata.get("title", column)})

        rows = []
        for record in self.get_manipulated_list(context):
            cells = []
            for column in columns:
                handler = handlers[column]
                cells.append({
                    "content": handler.get_column_content(self, context, record, column),
                    "attributes": handler.get_column_attributes(self, context, record, column),
                })
            rows.append({"id": record.id, "cells": cells})

        return self.renderer.render(
            "grid_field.html",
            name=self.name,
            link=self.link(),
            columns=header,
            rows=rows,
            fragments=self._html_fragments(context),
            empty_text=self.empty_text,
        )
