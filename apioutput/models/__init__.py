"""信封数据模型。"""

from .envelope import (
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
]
