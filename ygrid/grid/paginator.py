"""分页"""

import math
from typing import Optional

from ygrid.config import get_grid_settings

from .components import DataManipulator, HTMLFragments, HTMLProvider


class GridFieldPaginator(DataManipulator, HTMLProvider):
    """按 context.current_page 截取一页数据，并在表格下方输出分页条

    Args:
        items_per_page: 每页条数，默认取 GridSettings.items_per_page
    """

    def __init__(self, items_per_page: Optional[int] = None):
        self._items_per_page = items_per_page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page or get_grid_settings().items_per_page

    def set_items_per_page(self, items_per_page: int) -> "GridFieldPaginator":
        self._items_per_page = items_per_page
        return self

    def get_offset(self, context) -> int:
        return (max(context.current_page, 1) - 1) * self.items_per_page

    def get_manipulated_data(self, grid, context, data_list):
        return data_list.limit(self.items_per_page, self.get_offset(context))

    def get_html_fragments(self, grid, context) -> HTMLFragments:
        total = grid.get_list(context).count()
        per_page = self.items_per_page
        total_pages = max(1, math.ceil(total / per_page))
        first_item = min(self.get_offset(context) + 1, total)
        last_item = min(self.get_offset(context) + per_page, total)
        html = grid.renderer.render(
            "paginator.html",
            link=grid.link(),
            current_page=context.current_page,
            total_pages=total_pages,
            items_per_page=per_page,
            total_items=total,
            first_item=first_item,
            last_item=last_item,
        )
        return HTMLFragments(after=[html])
