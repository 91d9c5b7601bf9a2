"""业务异常类定义

定义表格扩展使用的业务异常类体系。

业务异常（BusinessException 及其子类）由异常处理器转换为 4xx JSON 响应；
配置错误（SortFieldNotFoundError）不属于业务异常，会一路上抛并以 500 结束请求。
"""

import copy
from typing import Optional, List, Any, Dict, Union
from fastapi import status
from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        from ygrid import ErrorCode, Err

        raise Err.bad_request("排序参数必须是列表", code=ErrorCode.INVALID_PAYLOAD)
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    # ==================== 请求错误 (400) ====================
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_MOVE_TARGET = "INVALID_MOVE_TARGET"
    NOT_VERSIONED = "NOT_VERSIONED"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"

    # ==================== 授权相关 (403) ====================
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # ==================== 资源相关 (404) ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"

    # ==================== 验证相关 (422) ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（支持 ErrorCode 枚举或字符串）
        status_code: HTTP 状态码
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException(
            message="记录移动失败",
            code=ErrorCode.INVALID_MOVE_TARGET,
            details=["目标页不存在"],
            record_id=12,
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class BadRequestException(BusinessException):
    """请求错误异常

    请求体格式不正确、目标页不支持、记录不在当前页时抛出。

    使用示例:
        raise BadRequestException("排序参数必须是列表", code=ErrorCode.INVALID_PAYLOAD)
    """

    def __init__(
        self,
        message: str = "请求参数错误",
        code: ErrorCodeType = ErrorCode.BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            **extra
        )


class AuthorizationException(BusinessException):
    """授权异常

    当前用户没有编辑、发布等权限时抛出。
    """

    def __init__(
        self,
        message: str = "权限不足",
        code: ErrorCodeType = ErrorCode.PERMISSION_DENIED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            **extra
        )


class ResourceNotFoundException(BusinessException):
    """资源不存在异常

    使用示例:
        raise ResourceNotFoundException(
            "记录不存在",
            code=ErrorCode.RECORD_NOT_FOUND,
            resource_type="Page",
            resource_id=42,
        )
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            **extra
        )


class ValidationException(BusinessException):
    """数据验证异常"""

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            **extra
        )


class SortFieldNotFoundError(LookupError):
    """排序字段不存在（配置错误）

    模型继承链上没有任何表声明排序字段，关联表的额外字段中也没有。
    这说明表格配置有误，不是可以恢复的运行时状态，因此不继承 BusinessException。

    属性:
        field: 排序字段名
        model_class: 被查找的模型类
    """

    def __init__(self, field: str, model_class: Any = None):
        self.field = field
        self.model_class = model_class
        model_name = getattr(model_class, "__name__", str(model_class))
        super().__init__(f"Couldn't find the sort field '{field}' on {model_name}")


class Err:
    """异常快捷创建类

    使用示例:
        from ygrid import Err

        # 请求错误 (400)
        raise Err.bad_request("无效的目标页", code=ErrorCode.INVALID_MOVE_TARGET)

        # 权限不足 (403)
        raise Err.forbidden("没有编辑权限")

        # 资源不存在 (404)
        raise Err.not_found("记录不存在", resource_id=123)
    """

    @staticmethod
    def bad_request(message: str = "请求参数错误", **kwargs) -> BadRequestException:
        """请求错误 (400)

        适用场景: 请求体格式错误、目标页不支持、记录不在当前页等
        """
        return BadRequestException(message, **kwargs)

    @staticmethod
    def forbidden(message: str = "权限不足", **kwargs) -> AuthorizationException:
        """权限不足 (403)"""
        return AuthorizationException(message, **kwargs)

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> ResourceNotFoundException:
        """资源不存在 (404)

        适用场景: 记录不存在、缺少分页组件等
        """
        return ResourceNotFoundException(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        """数据验证失败 (422)"""
        return ValidationException(message, **kwargs)

    @staticmethod
    def fail(message: str = "操作失败", **kwargs) -> BusinessException:
        """通用业务异常 (400)"""
        return BusinessException(message, **kwargs)
