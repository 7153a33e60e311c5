"""统一的 HTTP 接口响应信封：标准化每次调用返回的结果、主题、数据与时间。"""

from apioutput.core.debug import DebugSwitch, is_debug, set_debug
from apioutput.core.exceptions import (
    ERR_ALREADY_EXISTS,
    ERR_INPUT_INVALID,
    AlreadyExistsError,
    AppException,
    InputInvalidError,
    InvalidResponseCodeError,
    OutputError,
    SerializationError,
)
from apioutput.core.transport import BufferedResponseWriter, ResponseWriter
from apioutput.models.envelope import (
    MSG_TYPE_DATA_FOUND,
    MSG_TYPE_DELETE_OK,
    MSG_TYPE_ERROR,
    MSG_TYPE_INSERT_OK,
    MSG_TYPE_UPDATE_OK,
    Envelope,
    ErrorDetail,
    MessageType,
    build_envelope,
)
from apioutput.services.dispatcher import Dispatcher, dispatcher
from apioutput.services.shortcuts import (
    data_found,
    delete_ok,
    error,
    error_already_exists,
    error_input_invalid,
    error_input_invalid_with_id,
    error_with_id,
    insert_ok,
    insert_ok_with_data,
    send,
    success,
    update_ok,
    update_ok_with_data,
)

__all__ = [
    "Envelope",
    "ErrorDetail",
    "MessageType",
    "build_envelope",
    "MSG_TYPE_ERROR",
    "MSG_TYPE_INSERT_OK",
    "MSG_TYPE_UPDATE_OK",
    "MSG_TYPE_DELETE_OK",
    "MSG_TYPE_DATA_FOUND",
    "Dispatcher",
    "dispatcher",
    "DebugSwitch",
    "set_debug",
    "is_debug",
    "ResponseWriter",
    "BufferedResponseWriter",
    "OutputError",
    "InvalidResponseCodeError",
    "SerializationError",
    "InputInvalidError",
    "AlreadyExistsError",
    "AppException",
    "ERR_INPUT_INVALID",
    "ERR_ALREADY_EXISTS",
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
]
