"""响应信封：所有接口返回给客户端的统一数据结构。

信封除 ``Data`` 外格式固定：``OK`` 表示请求是否成功，``Type`` 是供客户端分发处理逻辑的
消息类型，``Data`` 为业务数据，``ErrorData`` 为错误详情，``Datetime`` 为 UTC 创建时间。
错误详情与业务数据分成两个字段，客户端无需根据 ``Data`` 的形状猜测请求是否失败。
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, model_serializer
from pydantic_core import core_schema

from apioutput.core.constants import (
    MSG_TYPE_DATA_FOUND_VALUE,
    MSG_TYPE_DELETE_OK_VALUE,
    MSG_TYPE_ERROR_VALUE,
    MSG_TYPE_INSERT_OK_VALUE,
    MSG_TYPE_UPDATE_OK_VALUE,
)
from apioutput.core.timezone import utc_timestamp


class MessageType(str):
    """消息类型：简短的描述性标题，用于告诉客户端响应数据的主题。

    这是一个开放的命名空间，调用方可以随时定义新的类型；建议优先复用预置常量，
    以减少客户端需要处理的类型数量。
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"MessageType({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())

    def is_blank(self) -> bool:
        return not self.strip()


MSG_TYPE_ERROR = MessageType(MSG_TYPE_ERROR_VALUE)
MSG_TYPE_INSERT_OK = MessageType(MSG_TYPE_INSERT_OK_VALUE)
MSG_TYPE_UPDATE_OK = MessageType(MSG_TYPE_UPDATE_OK_VALUE)
MSG_TYPE_DELETE_OK = MessageType(MSG_TYPE_DELETE_OK_VALUE)
MSG_TYPE_DATA_FOUND = MessageType(MSG_TYPE_DATA_FOUND_VALUE)


class ErrorDetail(BaseModel):
    """错误详情：底层错误与面向用户的处理提示，空字段不会出现在输出中。"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: str = Field(default="", alias="Error")
    message: str = Field(default="", alias="Message")

    def is_empty(self) -> bool:
        return not self.error and not self.message

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        return {key: value for key, value in handler(self).items() if value}


class Envelope(BaseModel):
    """返回给客户端的信封，构造后不可变。

    ``ok`` 为 ``False`` 时通常只填充 ``error_data``；个别场景（参见 ``error_with_id``）
    会同时在 ``data`` 中返回已创建记录的 ID，便于客户端重试时复用。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ok: bool = Field(default=False, alias="OK")
    type: MessageType = Field(default=MessageType(""), alias="Type")
    data: Any = Field(default=None, alias="Data")
    error_data: ErrorDetail = Field(default_factory=ErrorDetail, alias="ErrorData")
    datetime: str = Field(default="", alias="Datetime")

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        payload = handler(self)
        if self.data is None:
            payload.pop("Data", None)
            payload.pop("data", None)
        if self.error_data.is_empty():
            payload.pop("ErrorData", None)
            payload.pop("error_data", None)
        return payload

    def to_wire(self) -> dict[str, Any]:
        """返回线上格式的字典（字段名使用 ``OK``/``Type`` 等别名）。"""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> bytes:
        """编码为紧凑的 UTF-8 JSON 字节串。"""
        return self.model_dump_json(by_alias=True).encode("utf-8")


def build_envelope(
    ok: bool,
    msg_type: str,
    data: Any = None,
    error_data: Optional[ErrorDetail] = None,
) -> Envelope:
    """按给定字段构造信封，并以当前 UTC 时间盖上时间戳。"""
    return Envelope(
        ok=ok,
        type=MessageType(msg_type),
        data=data,
        error_data=error_data if error_data is not None else ErrorDetail(),
        datetime=utc_timestamp(),
    )
