"""异常处理模块

提供业务异常类、配置错误与全局异常处理器。

使用示例:
    from ygrid import Err, register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)

    # 在组件中抛出异常
    if not isinstance(ids, list):
        raise Err.bad_request("排序参数必须是列表")
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 高级用法 =====
    BusinessException,              # 业务异常基类
    BadRequestException,            # 400
    AuthorizationException,         # 403
    ResourceNotFoundException,      # 404
    ValidationException,            # 422

    # ===== 配置错误 =====
    SortFieldNotFoundError,
)

from .handlers import (
    register_exception_handlers,
    business_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
)

__all__ = [
    # ===== 推荐使用 =====
    "Err",
    "ErrorCode",
    "register_exception_handlers",

    # ===== 高级用法 =====
    "ErrorCodeType",
    "BusinessException",
    "BadRequestException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "ValidationException",
    "SortFieldNotFoundError",
    "business_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "general_exception_handler",
]
