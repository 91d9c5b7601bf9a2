"""表头排序

用户点击表头后按该列排序。按表头排序时拖拽排序自动关闭。
"""

from ygrid.exceptions import Err, ErrorCode

from .components import DataManipulator


class GridFieldSortableHeader(DataManipulator):
    """按 context.sort_column 排序"""

    def get_manipulated_data(self, grid, context, data_list):
        if not context.sort_column:
            return data_list
        try:
            return data_list.sort(context.sort_column, direction=context.sort_direction)
        except ValueError:
            raise Err.bad_request(
                f"无效的排序字段: {context.sort_column}",
                code=ErrorCode.INVALID_PAYLOAD,
            )
