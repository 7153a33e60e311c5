"""全局异常处理：把 FastAPI 中抛出的异常统一转换为信封响应。"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from apioutput.core.constants import (
    BODYLESS_STATUS_CODES,
    ERROR_TEXT_INPUT_INVALID,
    HTTP_STATUS_UNPROCESSABLE_CONTENT,
)
from apioutput.core.logger import logger
from apioutput.core.responses import create_response, error_response
from apioutput.models.envelope import MSG_TYPE_ERROR, Envelope, ErrorDetail, MessageType
from apioutput.services.dispatcher import status_text

GENERIC_ERROR_MESSAGE = "服务器内部错误"
VALIDATION_ERROR_MESSAGE = "请求参数验证失败"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """将 ``HTTPException``（含 ``AppException``）转换为统一信封。

    未指定消息类型时由状态码合成（如 ``404-Not Found``）；``detail`` 为结构化数据时放入 ``Data``。
    """
    if exc.status_code < status.HTTP_200_OK or exc.status_code in BODYLESS_STATUS_CODES:
        # 1xx、204、304 不能携带响应体，只返回状态码与响应头。
        return Response(status_code=exc.status_code, headers=exc.headers)

    error = getattr(exc, "error", None)
    data = getattr(exc, "data", None)
    message = exc.detail if isinstance(exc.detail, str) else ""
    if not isinstance(exc.detail, str) and data is None:
        data = exc.detail

    envelope = Envelope(
        ok=False,
        type=MessageType(getattr(exc, "msg_type", "") or ""),
        data=data,
        error_data=ErrorDetail(
            error=str(error) if error is not None else status_text(exc.status_code),
            message=message,
        ),
    )
    response = create_response(envelope, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """统一处理请求体验证失败的场景。"""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    envelope = Envelope(
        ok=False,
        type=MSG_TYPE_ERROR,
        data=_serialize(exc.errors()),
        error_data=ErrorDetail(error=ERROR_TEXT_INPUT_INVALID, message=VALIDATION_ERROR_MESSAGE),
    )
    return create_response(envelope, HTTP_STATUS_UNPROCESSABLE_CONTENT)


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """兜底处理：将未捕获异常转换为标准的 500 信封。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(exc, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """在应用上挂载全部异常处理器。"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
