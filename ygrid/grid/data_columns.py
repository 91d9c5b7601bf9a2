"""数据列"""

from typing import Any, Dict, List, Optional

from .components import ColumnProvider


# 未指定数据列时不自动展示的字段
HIDDEN_FIELDS = {"id", "sort", "draft_version", "live_version", "archived_at"}


class GridFieldDataColumns(ColumnProvider):
    """按字段展示记录数据

    Args:
        display_fields: {字段名: 标题}；为空时使用表格的 display_fields，
            再为空时使用模型表上的内容列
    """

    def __init__(self, display_fields: Optional[Dict[str, str]] = None):
        self.display_fields = dict(display_fields or {})

    def get_display_fields(self, grid) -> Dict[str, str]:
        if self.display_fields:
            return self.display_fields
        if grid.display_fields:
            return grid.display_fields
        table = getattr(grid.model_class, "__table__", None)
        if table is None:
            return {}
        return {
            column.key: column.comment or column.key
            for column in table.columns
            if column.key not in HIDDEN_FIELDS
        }

    def augment_columns(self, grid, context, columns: List[str]) -> None:
        for name in self.get_display_fields(grid):
            if name not in columns:
                columns.append(name)

    def get_columns_handled(self, grid) -> List[str]:
        return list(self.get_display_fields(grid))

    def get_column_content(self, grid, context, record: Any, column: str) -> Any:
        value = getattr(record, column, None)
        return "" if value is None else str(value)

    def get_column_attributes(self, grid, context, record: Any, column: str) -> Dict[str, Any]:
        return {"class": f"col-{column}"}

    def get_column_metadata(self, grid, column: str) -> Dict[str, Any]:
        return {"title": self.get_display_fields(grid).get(column, column)}
