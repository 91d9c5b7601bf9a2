"""拖拽排序

在表格最前面加一列拖拽手柄，前端拖动后把新的主键顺序提交到 reorder，
或把一条记录拖到相邻页时提交到 movetopage。

重排序的核心是复用已有的排序值：

    current = {1: 10, 2: 20, 3: 30}      # 受影响记录当前的排序值
    order   = [3, 1, 2]                  # 期望顺序
    pool    = sorted(current.values())   # [10, 20, 30]
    # 第 i 个位置的记录取 pool[i]：3 -> 10, 1 -> 20, 2 -> 30

排序值的集合前后不变，只写入值发生变化的记录。

使用示例:
    config = GridFieldConfig().add_components(
        GridFieldDataColumns(),
        GridFieldOrderableRows("sort"),
        GridFieldPaginator(),
    )
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import func, select, update

from ygrid.config import get_grid_settings
from ygrid.exceptions import Err, ErrorCode
from ygrid.log import get_logger
from ygrid.orm.sortable import SortLocation, resolve_sort_location

from .components import ColumnProvider, DataManipulator, HTMLFragments, HTMLProvider, URLHandler
from .context import GridRequest, GridRequestContext

logger = get_logger()


MOVE_PREVIOUS = "prev"
MOVE_NEXT = "next"


class GridFieldOrderableRows(ColumnProvider, DataManipulator, URLHandler, HTMLProvider):
    """拖拽排序组件

    Args:
        sort_field: 排序字段名，默认取 GridSettings.sort_field
    """

    COLUMN = "Reorder"

    def __init__(self, sort_field: Optional[str] = None):
        self.sort_field = sort_field

    # ==================== 配置 ====================

    def get_sort_field(self) -> str:
        return self.sort_field or get_grid_settings().sort_field

    def set_sort_field(self, sort_field: str) -> "GridFieldOrderableRows":
        self.sort_field = sort_field
        return self

    def is_enabled(self, context: GridRequestContext) -> bool:
        """用户按表头排序时，行顺序与持久化的顺序无关，不能拖拽"""
        return not context.is_user_sorted

    def get_sort_location(self, data_list) -> SortLocation:
        return resolve_sort_location(data_list, self.get_sort_field())

    def get_sort_table(self, data_list) -> str:
        """排序值所在的表名（模型表或关联表）"""
        return self.get_sort_location(data_list).table_name

    # ==================== ColumnProvider ====================

    def augment_columns(self, grid, context, columns: List[str]) -> None:
        if self.is_enabled(context) and self.COLUMN not in columns:
            columns.insert(0, self.COLUMN)

    def get_columns_handled(self, grid) -> List[str]:
        return [self.COLUMN]

    def get_column_content(self, grid, context, record: Any, column: str) -> Any:
        return grid.renderer.render("orderable_rows_drag_handle.html", record_id=record.id, title="拖动排序")

    def get_column_attributes(self, grid, context, record: Any, column: str) -> Dict[str, Any]:
        return {"class": "col-reorder"}

    def get_column_metadata(self, grid, column: str) -> Dict[str, Any]:
        return {"title": ""}

    # ==================== DataManipulator ====================

    def get_manipulated_data(self, grid, context, data_list):
        if not self.is_enabled(context):
            return data_list
        return data_list.sort(self.get_sort_location(data_list).column)

    # ==================== HTMLProvider ====================

    def get_html_fragments(self, grid, context) -> HTMLFragments:
        return HTMLFragments(
            classes=["grid-field--orderable"],
            attributes={
                "data-url-reorder": grid.link("reorder"),
                "data-url-movetopage": grid.link("movetopage"),
            },
        )

    # ==================== URLHandler ====================

    def get_url_handlers(self, grid) -> Dict[str, str]:
        return {
            "POST reorder": "handle_reorder",
            "POST movetopage": "handle_move_to_page",
        }

    def handle_reorder(self, grid, context: GridRequestContext, request: GridRequest):
        """按提交的主键顺序重排，返回刷新后的表格片段

        请求体: {"order": [3, 1, 2], "state": {...}}
        """
        grid.check_permission(context, "edit")

        ids = self._parse_ids(request.post_var("order"))
        session = context.session
        session.flush()

        data_list = grid.get_list(context)
        location = self.get_sort_location(data_list)
        items = data_list.by_ids(ids).sort(location.column)
        if items.count() != len(ids):
            raise Err.not_found(
                "部分记录不存在",
                code=ErrorCode.RECORD_NOT_FOUND,
                requested=len(ids),
            )

        # 重复值在整个列表范围内判断
        self.populate_sort_values(data_list, ids)
        current = items.map("id", location.column)
        self.reorder_items(data_list, current, ids)

        session.expire_all()
        return grid.render(context)

    def handle_move_to_page(self, grid, context: GridRequestContext, request: GridRequest):
        """把一条记录移到相邻页的边界上，返回刷新后的表格片段

        请求体: {"move": {"id": 3, "page": "prev"}, "state": {"current_page": 2}}

        prev: 记录成为上一页的最后一条，原最后一条顺延为本页第一条
        next: 记录成为下一页的第一条，原第一条提前为本页最后一条
        """
        from .paginator import GridFieldPaginator

        paginator = grid.config.get_component_by_type(GridFieldPaginator)
        if paginator is None:
            raise Err.not_found("表格没有分页组件", code=ErrorCode.COMPONENT_NOT_FOUND)

        grid.check_permission(context, "edit")

        move = request.post_var("move") or {}
        if not isinstance(move, Mapping):
            raise Err.bad_request("移动参数格式错误", code=ErrorCode.INVALID_PAYLOAD)
        target = move.get("page")
        if target not in (MOVE_PREVIOUS, MOVE_NEXT):
            raise Err.bad_request("无效的目标页", code=ErrorCode.INVALID_MOVE_TARGET, target=target)
        record_id = self._parse_id(move.get("id"))

        session = context.session
        session.flush()

        data_list = grid.get_list(context)
        location = self.get_sort_location(data_list)
        if record_id not in grid.get_manipulated_list(context).column("id"):
            raise Err.bad_request("无效的记录ID", code=ErrorCode.INVALID_PAYLOAD, record_id=record_id)

        self.populate_sort_values(data_list)
        # 补全排序值后再读取本页的值
        values = grid.get_manipulated_list(context).map("id", location.column)
        if record_id not in values:
            # 补全后原本在 0 值记录之后的记录会前移到其他页
            values.update(data_list.by_ids([record_id]).map("id", location.column))

        page = context.current_page or 1
        per_page = paginator.items_per_page
        sorted_list = data_list.sort(location.column)
        if target == MOVE_PREVIOUS:
            offset = (page - 1) * per_page - 1
        else:
            offset = page * per_page

        swap = sorted_list.limit(1, offset).map("id", location.column) if offset >= 0 else {}
        if not swap:
            raise Err.bad_request("目标页不存在", code=ErrorCode.INVALID_MOVE_TARGET, target=target)
        swap_id, swap_value = next(iter(swap.items()))
        if swap_id == record_id:
            # 补全后记录已经位于目标页边界上
            session.expire_all()
            return grid.render(context)
        values[swap_id] = swap_value

        others = [existing_id for existing_id in values if existing_id not in (record_id, swap_id)]
        if target == MOVE_PREVIOUS:
            order = [record_id, swap_id] + others
        else:
            order = others + [swap_id, record_id]

        self.reorder_items(data_list, values, order)
        logger.info(f"表格 {grid.name} 记录 {record_id} 移到{'上' if target == MOVE_PREVIOUS else '下'}一页，与记录 {swap_id} 交换")

        session.expire_all()
        return grid.render(context)

    # ==================== 排序写入 ====================

    def populate_sort_values(self, data_list, ids: Optional[Sequence[int]] = None) -> int:
        """为排序值为空、为 0 或与其他记录重复的记录补上新值

        新值为排序表当前最大值加一，逐条立即写入。重复值保留主键最小的那条。
        补全后所有记录的排序值互不相同，再次调用不会有写入。

        Args:
            data_list: 判断空值与重复值的范围
            ids: 只补全这些记录，以及排序值与它们重复的记录；为空时补全整个列表

        Returns:
            写入的记录数
        """
        location = self.get_sort_location(data_list)
        session = data_list.session

        current = data_list.sort("id").map("id", location.column)
        seen = set()
        pending = []
        for record_id, value in current.items():
            if not value or value in seen:
                pending.append(record_id)
            else:
                seen.add(value)

        if ids is not None:
            targets = set(ids)
            target_values = {current[record_id] for record_id in targets if current.get(record_id)}
            pending = [
                record_id for record_id in pending
                if record_id in targets or current[record_id] in target_values
            ]

        for record_id in pending:
            next_value = self._max_sort_value(session, location) + 1
            self._write_sort_value(session, location, record_id, next_value)

        if pending:
            logger.info(f"补全排序值: {location.table_name}.{location.field} 共 {len(pending)} 条")
        return len(pending)

    def reorder_items(self, data_list, values: Mapping[int, Any], order: Sequence[int]) -> int:
        """按期望顺序重新分配已有的排序值

        Args:
            data_list: 数据列表（用于定位排序表）
            values: {主键: 当前排序值}，需包含 order 中的全部主键
            order: 期望顺序

        Returns:
            写入的记录数
        """
        location = self.get_sort_location(data_list)
        session = data_list.session

        pool = sorted(values.values())
        changed = 0
        for position, record_id in enumerate(order):
            target_value = pool[position]
            if values[record_id] != target_value:
                self._write_sort_value(session, location, record_id, target_value)
                changed += 1

        logger.debug(f"重排序完成: {location.table_name}.{location.field} 更新 {changed}/{len(order)} 条")
        return changed

    @staticmethod
    def _max_sort_value(session, location: SortLocation) -> int:
        stmt = select(func.max(location.column)).select_from(location.table)
        if location.scope:
            stmt = stmt.where(*location.scope)
        return session.scalar(stmt) or 0

    @staticmethod
    def _write_sort_value(session, location: SortLocation, record_id: int, value: int) -> None:
        session.execute(
            update(location.table)
            .where(*location.clause_for_ids(record_id))
            .values({location.field: value})
        )

    # ==================== 参数解析 ====================

    @staticmethod
    def _parse_id(value: Any) -> int:
        if isinstance(value, bool):
            raise Err.bad_request("无效的记录ID", code=ErrorCode.INVALID_PAYLOAD)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise Err.bad_request("无效的记录ID", code=ErrorCode.INVALID_PAYLOAD)

    @classmethod
    def _parse_ids(cls, value: Any) -> List[int]:
        if not isinstance(value, list):
            raise Err.bad_request("排序参数必须是主键列表", code=ErrorCode.INVALID_PAYLOAD)
        return [cls._parse_id(item) for item in value]
