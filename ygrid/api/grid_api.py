"""表格路由

把一个 GridField 挂载为 FastAPI 路由。端点由表格组件声明：

    GET  {base_url}                         渲染表格
    POST {base_url}/reorder                 拖拽排序
    POST {base_url}/movetopage              移到相邻页
    GET  {base_url}/item/{id}               记录编辑视图
    GET  {base_url}/item/{id}/edit          记录编辑视图
    POST {base_url}/item/{id}/publish       发布
    POST {base_url}/item/{id}/unpublish     下线
    POST {base_url}/item/{id}/archive       归档

POST 请求体为 JSON，表格状态放在 state 中：

    {"order": [3, 1, 2], "state": {"sort_column": null, "current_page": 1}}

使用示例:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_grid_router(slides_grid, get_user=get_current_user))
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import APIRouter, Body, Depends, Request
from fastapi.params import Depends as DependsParam
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ygrid.exceptions import Err, ErrorCode
from ygrid.grid import GridField, GridRequest, GridRequestContext
from ygrid.log import get_logger
from ygrid.orm import get_db
from ygrid.response import Resp

logger = get_logger()


class GridStatePayload(BaseModel):
    """表格状态（查询参数或请求体中的 state）"""
    sort_column: Optional[str] = Field(default=None, description="按表头排序的列")
    sort_direction: str = Field(default="asc", description="asc 或 desc")
    current_page: int = Field(default=1, ge=1, description="当前页码")


def anonymous_user() -> Any:
    """未提供用户依赖时使用，当前用户为 None"""
    return None


def to_response(result: Any) -> Response:
    """处理器返回值转换为响应：HTML 片段、JSON 或原样返回"""
    if isinstance(result, Response):
        return result
    if isinstance(result, str):
        return Resp.Fragment(result)
    return Resp.OK(data=result)


def _create_endpoint(
    grid: GridField,
    handler: Callable,
    method: str,
    get_session: Callable,
    get_user: Callable,
) -> Callable:
    if method == "GET":
        def endpoint(
            request: Request,
            session: Session = Depends(get_session),
            user: Any = Depends(get_user),
        ):
            query = dict(request.query_params)
            context = GridRequestContext.from_state(session, user, query)
            grid_request = GridRequest(params=dict(request.path_params), query=query)
            return to_response(handler(grid, context, grid_request))
        return endpoint

    def endpoint(
        request: Request,
        payload: Optional[Dict[str, Any]] = Body(default=None),
        session: Session = Depends(get_session),
        user: Any = Depends(get_user),
    ):
        payload = payload or {}
        query = dict(request.query_params)
        state = payload.get("state")
        if state is not None and not isinstance(state, dict):
            raise Err.bad_request("state 必须是对象", code=ErrorCode.INVALID_PAYLOAD)
        context = GridRequestContext.from_state(session, user, state if state is not None else query)
        grid_request = GridRequest(params=dict(request.path_params), post_vars=payload, query=query)
        return to_response(handler(grid, context, grid_request))
    return endpoint


def create_grid_router(
    grid: GridField,
    get_session: Callable = get_db,
    get_user: Optional[Callable] = None,
    tags: Optional[List[str]] = None,
    dependencies: Optional[Sequence[DependsParam]] = None,
) -> APIRouter:
    """创建表格路由，挂载在 grid.base_url 下

    Args:
        grid: 表格
        get_session: 数据库会话依赖，默认 get_db（成功提交，异常回滚）
        get_user: 当前用户依赖，结果交给表格的权限检查函数
        tags: OpenAPI 标签
        dependencies: 路由级依赖（如登录校验）

    Returns:
        APIRouter
    """
    user_dependency = get_user or anonymous_user
    router = APIRouter(
        prefix=grid.base_url,
        tags=tags or [grid.name],
        dependencies=list(dependencies or []),
    )

    @router.get(
        "" if grid.base_url else "/",
        summary="渲染表格",
        response_class=HTMLResponse,
        name=f"{grid.name}_render",
    )
    def render_grid(
        state: GridStatePayload = Depends(),
        session: Session = Depends(get_session),
        user: Any = Depends(user_dependency),
    ):
        context = GridRequestContext.from_state(session, user, state.model_dump())
        return Resp.Fragment(grid.render(context))

    for method, path, component, handler_name in grid.get_url_handlers():
        router.add_api_route(
            f"/{path}",
            _create_endpoint(grid, getattr(component, handler_name), method, get_session, user_dependency),
            methods=[method],
            name=f"{grid.name}_{handler_name}_{method.lower()}_{path}",
            summary=f"{type(component).__name__}.{handler_name}",
        )
        logger.debug(f"表格 {grid.name} 注册路由: {method} {grid.base_url}/{path}")

    return router
