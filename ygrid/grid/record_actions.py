"""记录操作处理

处理更多操作菜单里的发布、下线、归档请求。
"""

from typing import Any

from ygrid.exceptions import Err, ErrorCode
from ygrid.log import get_logger
from ygrid.orm.versioned import is_versioned

from .context import GridRequestContext

logger = get_logger()


RECORD_ACTIONS = ("publish", "unpublish", "archive")


class GridFieldRecordActionHandler:
    """对单条记录执行生命周期操作

    Args:
        grid: 所属表格
        context: 请求上下文
        record: 目标记录，不存在时为 None

    使用示例:
        handler = GridFieldRecordActionHandler(grid, context, page)
        html = handler.handle("publish")
    """

    def __init__(self, grid, context: GridRequestContext, record: Any):
        self.grid = grid
        self.context = context
        self.record = record

    def handle(self, action: str):
        """执行操作并返回刷新后的表格片段

        Raises:
            ResourceNotFoundException: 记录不存在
            BadRequestException: 未知操作或记录不支持发布
            AuthorizationException: 没有该操作的权限
        """
        if self.record is None:
            raise Err.not_found("记录不存在", code=ErrorCode.RECORD_NOT_FOUND)
        if action not in RECORD_ACTIONS:
            raise Err.bad_request(f"未知操作: {action}", code=ErrorCode.UNKNOWN_ACTION)
        if not is_versioned(self.record):
            raise Err.bad_request("该记录不支持发布", code=ErrorCode.NOT_VERSIONED, record_id=self.record.id)

        self.grid.check_permission(self.context, action, self.record)

        getattr(self.record, action)()
        self.context.session.flush()
        logger.info(f"表格 {self.grid.name} 记录 {self.record.id} 执行 {action}")

        return self.grid.render(self.context)
