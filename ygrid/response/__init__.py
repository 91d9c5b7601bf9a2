"""响应模块

使用示例:
    from ygrid import Resp

    return Resp.OK(data=result)
    return Resp.Fragment(html)
    return Resp.NotFound(message="记录不存在")
"""

from .base_response import (
    # ===== 推荐使用 =====
    Resp,                       # 响应快捷类

    # 响应状态枚举
    ResponseStatus,

    # 文档模型
    ValidationErrorResponse,

    # 基础响应类（高级用法）
    BaseResponse,
    SuccessResponse,
    ClientErrorResponse,
    ServerErrorResponse,

    # 简化别名（高级用法）
    OK,
    Fragment,
    BadRequest,
    Forbidden,
    NotFound,
    InternalServerError,
)

__all__ = [
    "Resp",
    "ResponseStatus",
    "ValidationErrorResponse",
    "BaseResponse",
    "SuccessResponse",
    "ClientErrorResponse",
    "ServerErrorResponse",
    "OK",
    "Fragment",
    "BadRequest",
    "Forbidden",
    "NotFound",
    "InternalServerError",
]
