from fastapi import status
from fastapi.responses import JSONResponse, HTMLResponse
from typing import Any, Optional, List
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class ResponseStatus(str, Enum):
    """响应状态枚举

    用于标识响应的业务状态，与 HTTP 状态码独立。
    """
    SUCCESS = "success"   # 请求成功
    ERROR = "error"       # 请求失败（客户端或服务端错误）


# ========== 文档模型 ==========

class ValidationErrorResponse(BaseModel):
    """验证错误响应模型（422）

    描述参数校验失败时的实际响应格式，用于覆盖 FastAPI 默认的 422 OpenAPI Schema。
    """
    status: str = Field(default="error", description="响应状态")
    message: str = Field(default="请求参数验证失败", description="错误消息")
    msg_details: List[str] = Field(default=[], description="各字段验证错误详情")
    data: dict = Field(default={}, description="空数据")
    error_code: str = Field(default="VALIDATION_ERROR", description="错误码")


# 基础响应模型
class BaseResponse:
    """基础响应类"""

    @staticmethod
    def _serialize_data(data: Any, _is_top_level: bool = True) -> Any:
        """递归序列化数据，处理 DTO 对象、SQLAlchemy 模型和列表

        Args:
            data: 要序列化的数据
            _is_top_level: 是否为顶层调用，顶层 None 转为 {}，嵌套 None 保持为 None
        """
        if data is None:
            return {} if _is_top_level else None

        if isinstance(data, datetime):
            return data.strftime('%Y-%m-%d %H:%M:%S')

        # SQLAlchemy Row 对象
        if hasattr(data, '_mapping'):
            return {k: BaseResponse._serialize_data(v, False) for k, v in data._mapping.items()}

        # SQLAlchemy 模型对象
        if hasattr(data, '__table__'):
            result = {}
            for column in data.__table__.columns:
                value = getattr(data, column.key, None)
                result[column.key] = BaseResponse._serialize_data(value, False)
            return result

        if hasattr(data, 'to_dict') and callable(getattr(data, 'to_dict')):
            return BaseResponse._serialize_data(data.to_dict(), False)

        if isinstance(data, (list, tuple)):
            return [BaseResponse._serialize_data(item, False) for item in data]

        if isinstance(data, dict):
            return {k: BaseResponse._serialize_data(v, False) for k, v in data.items()}

        return data

    @staticmethod
    def _create_response(
        message: str,
        data: Any = None,
        msg_details: Optional[List[str]] = None,
        status_code: int = status.HTTP_200_OK,
        response_status: ResponseStatus = ResponseStatus.SUCCESS
    ) -> JSONResponse:
        """创建标准化响应"""
        content = {
            "status": response_status.value,
            "message": message,
            "msg_details": msg_details if msg_details is not None else [],
            "data": BaseResponse._serialize_data(data)
        }

        return JSONResponse(
            status_code=status_code,
            content=content
        )


# 成功响应 (2xx)
class SuccessResponse(BaseResponse):
    """成功响应类"""

    @staticmethod
    def OK(data: Any = None, message: str = "请求成功") -> JSONResponse:
        """200 OK - 请求成功"""
        return BaseResponse._create_response(
            data=data,
            message=message,
            status_code=status.HTTP_200_OK,
            response_status=ResponseStatus.SUCCESS
        )

    @staticmethod
    def Fragment(html: str, status_code: int = status.HTTP_200_OK) -> HTMLResponse:
        """表格片段响应

        重排序、跨页移动、发布等操作完成后，返回重新渲染的表格 HTML 片段。
        """
        return HTMLResponse(content=str(html), status_code=status_code)


# 客户端错误响应 (4xx)
class ClientErrorResponse(BaseResponse):
    """客户端错误响应类"""

    @staticmethod
    def BadRequest(message: str = "请求参数错误", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """400 Bad Request - 请求参数错误"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_400_BAD_REQUEST,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def Forbidden(message: str = "禁止访问", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """403 Forbidden - 禁止访问"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_403_FORBIDDEN,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def NotFound(message: str = "资源不存在", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """404 Not Found - 资源不存在"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_404_NOT_FOUND,
            response_status=ResponseStatus.ERROR
        )


# 服务端错误响应 (5xx)
class ServerErrorResponse(BaseResponse):
    """服务端错误响应类"""

    @staticmethod
    def InternalServerError(message: str = "服务器内部错误", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """500 Internal Server Error - 服务器内部错误"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            response_status=ResponseStatus.ERROR
        )


# 简化别名
OK = SuccessResponse.OK
Fragment = SuccessResponse.Fragment
BadRequest = ClientErrorResponse.BadRequest
Forbidden = ClientErrorResponse.Forbidden
NotFound = ClientErrorResponse.NotFound
InternalServerError = ServerErrorResponse.InternalServerError


# ==================== 响应快捷类（推荐） ====================

class Resp:
    """响应快捷类

    使用示例:
        from ygrid import Resp

        return Resp.OK(data={"id": record.id})
        return Resp.Fragment(grid.render(context))
        return Resp.NotFound(message="记录不存在")
    """

    # ===== 成功响应 =====
    OK = OK
    """200 OK - 请求成功

    参数:
        data: 响应数据
        message: 响应消息，默认 "请求成功"
    """

    Fragment = Fragment
    """200 OK - 表格 HTML 片段

    参数:
        html: 渲染后的片段
        status_code: HTTP 状态码，默认 200
    """

    # ===== 客户端错误 (4xx) =====
    BadRequest = BadRequest
    Forbidden = Forbidden
    NotFound = NotFound

    # ===== 服务端错误 (5xx) =====
    ServerError = InternalServerError
