"""全局异常处理器

将表格操作中的异常转换为统一的 JSON 响应格式：

- BusinessException: 4xx，按异常自带的状态码返回
- RequestValidationError: 422，字段错误逐条列出
- HTTPException: 按原状态码返回
- 其他异常（包括 SortFieldNotFoundError 配置错误）: 500
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import sys
import os

from ygrid.log import get_logger
from ygrid.response import ResponseStatus, ValidationErrorResponse
from .exceptions import BusinessException

logger = get_logger()


def _is_debug() -> bool:
    return os.getenv("DEBUG", "false").lower() == "true"


def _request_context(request: Request) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", "unknown"),
        "path": request.url.path,
        "method": request.method,
    }


async def business_exception_handler(
    request: Request,
    exc: BusinessException
) -> JSONResponse:
    """业务异常处理器

    Args:
        request: FastAPI 请求对象
        exc: 业务异常实例

    Returns:
        JSON 响应
    """
    logger.warning(
        f"Business exception occurred: {exc.code} - {exc.message}",
        extra={
            **_request_context(request),
            "error_code": exc.code,
            "status_code": exc.status_code,
            "details": exc.details,
            "extra": exc.extra
        }
    )

    content = {
        "status": ResponseStatus.ERROR.value,
        "message": exc.message,
        "msg_details": exc.details,
        "data": {}
    }

    if exc.code:
        content["error_code"] = exc.code

    if _is_debug() and exc.extra:
        content["debug_info"] = exc.extra

    return JSONResponse(
        status_code=exc.status_code,
        content=content
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """请求参数验证异常处理器"""
    errors = []
    for error in exc.errors():
        # 字段路径去掉 body/query/path 等前缀
        loc_parts = [str(loc) for loc in error["loc"] if loc not in ("body", "query", "path", "header", "cookie")]
        field = ".".join(loc_parts) if loc_parts else "请求体"
        errors.append(f"{field}: {error['msg']}")

    logger.warning(
        f"Validation error: {len(errors)} field(s) failed validation",
        extra={**_request_context(request), "errors": errors}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "status": ResponseStatus.ERROR.value,
            "message": "请求参数验证失败",
            "msg_details": errors,
            "data": {},
            "error_code": "VALIDATION_ERROR"
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """HTTP 异常处理器"""
    log_level = "warning" if exc.status_code < 500 else "error"
    getattr(logger, log_level)(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={**_request_context(request), "status_code": exc.status_code}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": ResponseStatus.ERROR.value,
            "message": str(exc.detail),
            "msg_details": [],
            "data": {},
            "error_code": f"HTTP_{exc.status_code}"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """通用异常处理器

    兜底处理所有未被其他处理器处理的异常，记录完整堆栈。
    排序字段配置错误也走这里，以 500 结束请求。
    """
    exc_type, exc_value, exc_traceback = sys.exc_info()
    tb_lines = traceback.format_exception(exc_type, exc_value, exc_traceback)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        extra={
            **_request_context(request),
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "traceback": "".join(tb_lines)
        }
    )

    content = {
        "status": ResponseStatus.ERROR.value,
        "message": "服务器内部错误",
        "msg_details": [],
        "data": {},
        "error_code": "INTERNAL_SERVER_ERROR"
    }

    if _is_debug():
        content["msg_details"] = [
            f"异常类型: {type(exc).__name__}",
            f"异常消息: {str(exc)}"
        ]

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content
    )


def register_exception_handlers(app) -> None:
    """注册所有异常处理器到 FastAPI 应用

    使用示例:
        from fastapi import FastAPI
        from ygrid.exceptions import register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    # 兜底处理器必须最后注册
    app.add_exception_handler(Exception, general_exception_handler)

    app.router.responses[422] = {
        "description": "请求参数验证失败",
        "model": ValidationErrorResponse,
    }

    logger.info("Exception handlers registered successfully")
