"""快捷函数：基于默认分发器的一行封装，覆盖最常见的成功与失败场景。

``success`` 系列固定返回 HTTP 200，``error`` 系列固定返回 HTTP 500；
需要其他状态码时使用 ``send``。
"""

from __future__ import annotations

from typing import Any

from apioutput.core.debug import is_debug, set_debug
from apioutput.core.exceptions import ERR_ALREADY_EXISTS, ERR_INPUT_INVALID
from apioutput.core.transport import ResponseWriter
from apioutput.models.envelope import (
    MSG_TYPE_DATA_FOUND,
    MSG_TYPE_DELETE_OK,
    MSG_TYPE_INSERT_OK,
    MSG_TYPE_UPDATE_OK,
    Envelope,
)
from apioutput.services.dispatcher import dispatcher


def success(msg_type: str, data: Any, writer: ResponseWriter) -> None:
    """请求成功且其他成功函数都不适用时使用。"""
    dispatcher.success(msg_type, data, writer)


def insert_ok(record_id: int, writer: ResponseWriter) -> None:
    """数据写入成功，返回新记录的 ID。"""
    dispatcher.success(MSG_TYPE_INSERT_OK, record_id, writer)


def insert_ok_with_data(data: Any, writer: ResponseWriter) -> None:
    """数据写入成功，返回任意数据而不仅是 ID。"""
    dispatcher.success(MSG_TYPE_INSERT_OK, data, writer)


def update_ok(writer: ResponseWriter) -> None:
    dispatcher.success(MSG_TYPE_UPDATE_OK, None, writer)


def update_ok_with_data(data: Any, writer: ResponseWriter) -> None:
    dispatcher.success(MSG_TYPE_UPDATE_OK, data, writer)


def delete_ok(writer: ResponseWriter) -> None:
    dispatcher.success(MSG_TYPE_DELETE_OK, None, writer)


def data_found(data: Any, writer: ResponseWriter) -> None:
    """返回查询到的数据。"""
    dispatcher.success(MSG_TYPE_DATA_FOUND, data, writer)


def error(err: BaseException | str, message: str, writer: ResponseWriter) -> None:
    """请求出错且其他错误函数都不适用时使用。"""
    dispatcher.error(err, message, writer)


def error_input_invalid(message: str, writer: ResponseWriter) -> None:
    """输入校验失败。"""
    dispatcher.error(ERR_INPUT_INVALID, message, writer)


def error_already_exists(message: str, writer: ResponseWriter) -> None:
    """待写入的数据已经存在。"""
    dispatcher.error(ERR_ALREADY_EXISTS, message, writer)


def error_with_id(err: BaseException | str, message: str, record_id: Any, writer: ResponseWriter) -> None:
    dispatcher.error_with_id(err, message, record_id, writer)


def error_input_invalid_with_id(message: str, record_id: Any, writer: ResponseWriter) -> None:
    """输入校验失败，但记录已经保存，客户端重试时应复用返回的 ID。"""
    dispatcher.error_with_id(ERR_INPUT_INVALID, message, record_id, writer)


def send(envelope: Envelope, response_code: int, writer: ResponseWriter) -> Envelope:
    """以任意状态码发送手动构造的信封。"""
    return dispatcher.send(envelope, response_code, writer)


__all__ = [
    "success",
    "insert_ok",
    "insert_ok_with_data",
    "update_ok",
    "update_ok_with_data",
    "delete_ok",
    "data_found",
    "error",
    "error_input_invalid",
    "error_already_exists",
    "error_with_id",
    "error_input_invalid_with_id",
    "send",
    "set_debug",
    "is_debug",
]
