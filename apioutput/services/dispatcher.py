"""信封分发：构造、校验并把信封写入传输层。

``success``/``error``/``error_with_id`` 使用固定状态码，构造过程不会失败；
``send`` 面向需要其他状态码或手动构造信封的场景，会先做一次校验与补全。
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Optional

from pydantic_core import PydanticSerializationError

from apioutput.core.constants import (
    CONTENT_TYPE_HEADER,
    CONTENT_TYPE_JSON,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_OK,
    MAX_RESPONSE_CODE,
    MIN_RESPONSE_CODE,
)
from apioutput.core.debug import DebugSwitch, debug_switch
from apioutput.core.exceptions import InvalidResponseCodeError, SerializationError
from apioutput.core.logger import logger
from apioutput.core.timezone import utc_timestamp
from apioutput.core.transport import ResponseWriter
from apioutput.models.envelope import (
    MSG_TYPE_ERROR,
    Envelope,
    ErrorDetail,
    MessageType,
    build_envelope,
)


def status_text(code: int) -> str:
    """返回状态码的标准描述，未知状态码返回空字符串。"""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def default_message_type(code: int) -> MessageType:
    """由状态码合成消息类型，例如 ``404-Not Found``。"""
    return MessageType(f"{code}-{status_text(code)}")


def is_valid_response_code(code: Any) -> bool:
    if isinstance(code, bool) or not isinstance(code, int):
        return False
    return MIN_RESPONSE_CODE <= code <= MAX_RESPONSE_CODE


def _error_detail(err: BaseException | str, message: str) -> ErrorDetail:
    return ErrorDetail(error=str(err), message=message)


class Dispatcher:
    """把信封写入 ``ResponseWriter`` 的入口集合。

    ``debug`` 决定错误路径是否输出诊断日志，缺省使用进程级默认开关；
    传入 ``bool`` 时会包装为独立的 ``DebugSwitch``。
    """

    def __init__(self, debug: Optional[DebugSwitch | bool] = None) -> None:
        if debug is None:
            debug = debug_switch
        elif isinstance(debug, bool):
            debug = DebugSwitch(debug)
        self.debug = debug

    # ------------------------------------------------------------------
    # 固定状态码的快捷入口
    # ------------------------------------------------------------------
    def success(self, msg_type: str, data: Any, writer: ResponseWriter) -> None:
        """请求成功，返回 HTTP 200。"""
        self._build_and_send(True, msg_type, data, ErrorDetail(), writer, HTTP_STATUS_OK)

    def error(self, err: BaseException | str, message: str, writer: ResponseWriter) -> None:
        """请求处理出错，返回 HTTP 500，``err`` 的文本形式写入 ``ErrorData.Error``。"""
        if self.debug.enabled():
            self._log("output.Error", err, message)
        self._build_and_send(
            False,
            MSG_TYPE_ERROR,
            None,
            _error_detail(err, message),
            writer,
            HTTP_STATUS_INTERNAL_SERVER_ERROR,
        )

    def error_with_id(
        self,
        err: BaseException | str,
        message: str,
        record_id: Any,
        writer: ResponseWriter,
    ) -> None:
        """与 ``error`` 相同，但在 ``Data`` 中附带已保存记录的 ID。

        适用于部分失败但记录已经落库的场景：客户端重试时应复用该 ID，
        而不是每次出错都重新创建记录。
        """
        if self.debug.enabled():
            self._log("output.ErrorWithID", err, message, record_id=record_id)
        self._build_and_send(
            False,
            MSG_TYPE_ERROR,
            record_id,
            _error_detail(err, message),
            writer,
            HTTP_STATUS_INTERNAL_SERVER_ERROR,
        )

    # ------------------------------------------------------------------
    # 手动发送
    # ------------------------------------------------------------------
    def finalize(self, envelope: Envelope, response_code: int) -> Envelope:
        """校验并补全手动构造的信封，只填补空缺，不覆盖调用方提供的值。

        唯一的例外是 ``error_data`` 非空时强制 ``ok=False``。状态码非法时抛出
        ``InvalidResponseCodeError``。对已补全的信封重复调用不会再产生变化。
        """
        updates: dict[str, Any] = {}

        if not envelope.datetime.strip():
            updates["datetime"] = utc_timestamp()

        # Data 在出错时仍可携带（参见 error_with_id）。
        if not envelope.error_data.is_empty() and envelope.ok:
            updates["ok"] = False

        if not is_valid_response_code(response_code):
            if self.debug.enabled():
                logger.info(
                    "output.Send invalid HTTP response code provided: %r",
                    response_code,
                    extra={"operation": "output.Send", "response_code": response_code},
                )
            raise InvalidResponseCodeError(response_code)

        if not envelope.type.strip():
            updates["type"] = self._default_type("output.Send", response_code)

        # 不限制状态码区间与 ErrorData 的搭配，不同的接入方各有约定。
        if not updates:
            return envelope
        return envelope.model_copy(update=updates)

    def send(self, envelope: Envelope, response_code: int, writer: ResponseWriter) -> Envelope:
        """以任意状态码发送手动构造的信封，返回实际写出的信封。"""
        final = self.finalize(envelope, response_code)
        self.write(final, response_code, writer)
        return final

    # ------------------------------------------------------------------
    # 序列化与写出
    # ------------------------------------------------------------------
    def write(self, envelope: Envelope, response_code: int, writer: ResponseWriter) -> None:
        """序列化信封并依次写入响应头、状态码与响应体。

        序列化在写出之前完成，编码失败时传输层不会收到任何内容。
        """
        try:
            body = envelope.to_json()
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(f"output: unable to encode envelope: {exc}") from exc

        writer.set_header(CONTENT_TYPE_HEADER, CONTENT_TYPE_JSON)
        writer.write_status(response_code)
        writer.write(body)

    def _build_and_send(
        self,
        ok: bool,
        msg_type: str,
        data: Any,
        error_data: ErrorDetail,
        writer: ResponseWriter,
        response_code: int,
    ) -> None:
        if not str(msg_type or "").strip():
            msg_type = self._default_type("output.Success" if ok else "output.Error", response_code)
        self.write(build_envelope(ok, msg_type, data, error_data), response_code, writer)

    def _default_type(self, operation: str, response_code: int) -> MessageType:
        """未提供消息类型时由状态码合成，诊断开关打开时记录一条日志。"""
        msg_type = default_message_type(response_code)
        if self.debug.enabled():
            logger.info(
                "%s envelope has no message type, defaulting to %s",
                operation,
                msg_type,
                extra={"operation": operation, "response_code": response_code, "msg_type": str(msg_type)},
            )
        return msg_type

    def _log(self, operation: str, err: BaseException | str, message: str, *, record_id: Any = None) -> None:
        extra = {"operation": operation, "error": str(err), "user_message": message}
        if record_id is not None:
            extra["record_id"] = record_id
            logger.info("%s %s %s %s", operation, err, message, record_id, extra=extra)
        else:
            logger.info("%s %s %s", operation, err, message, extra=extra)


# 进程级默认分发器，使用默认诊断开关。
dispatcher = Dispatcher()
