"""表格 API 路由

使用示例:
    from ygrid.api import create_grid_router

    app.include_router(create_grid_router(slides_grid))
"""

from .grid_api import GridStatePayload, anonymous_user, create_grid_router, to_response

__all__ = [
    "create_grid_router",
    "GridStatePayload",
    "anonymous_user",
    "to_response",
]
