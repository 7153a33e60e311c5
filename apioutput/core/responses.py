"""响应封装：在 FastAPI 路由中直接返回统一信封格式的 ``Response``。"""

from typing import Any, Optional

from starlette.responses import Response

from apioutput.core.transport import BufferedResponseWriter
from apioutput.models.envelope import Envelope
from apioutput.services.dispatcher import Dispatcher, dispatcher as default_dispatcher


def create_response(
    envelope: Envelope,
    code: int,
    *,
    dispatcher: Optional[Dispatcher] = None,
) -> Response:
    """按照给定状态码发送手动构造的信封，状态码非法时抛出 ``InvalidResponseCodeError``。"""
    writer = BufferedResponseWriter()
    (dispatcher or default_dispatcher).send(envelope, code, writer)
    return writer.to_response()


def success_response(msg_type: str, data: Any = None, *, dispatcher: Optional[Dispatcher] = None) -> Response:
    """构造 HTTP 200 的成功响应。"""
    writer = BufferedResponseWriter()
    (dispatcher or default_dispatcher).success(msg_type, data, writer)
    return writer.to_response()


def error_response(
    err: BaseException | str,
    message: str,
    record_id: Any = None,
    *,
    dispatcher: Optional[Dispatcher] = None,
) -> Response:
    """构造 HTTP 500 的错误响应，提供 ``record_id`` 时一并返回。"""
    writer = BufferedResponseWriter()
    target = dispatcher or default_dispatcher
    if record_id is None:
        target.error(err, message, writer)
    else:
        target.error_with_id(err, message, record_id, writer)
    return writer.to_response()
