"""异常定义：区分阻止写出响应的输出层错误与可直接放入响应体的业务错误。"""

from typing import Any, Optional

from fastapi import HTTPException, status

from apioutput.core.constants import ERROR_TEXT_ALREADY_EXISTS, ERROR_TEXT_INPUT_INVALID


class OutputError(Exception):
    """输出层错误的基类：出现时调用方需要自行决定如何告知客户端。"""


class InvalidResponseCodeError(OutputError, ValueError):
    """手动发送时提供了不存在的 HTTP 状态码，此时不会写出任何内容。"""

    def __init__(self, code: Any) -> None:
        super().__init__(f"output: invalid HTTP response code {code!r}")
        self.code = code


class SerializationError(OutputError):
    """信封无法编码为 JSON。"""


class InputInvalidError(Exception):
    """输入校验失败。"""


class AlreadyExistsError(Exception):
    """待创建的记录已经存在。"""


# 预置的错误值，直接作为 ``error`` 系列函数的 ``err`` 参数使用。
ERR_INPUT_INVALID = InputInvalidError(ERROR_TEXT_INPUT_INVALID)
ERR_ALREADY_EXISTS = AlreadyExistsError(ERROR_TEXT_ALREADY_EXISTS)


class AppException(HTTPException):
    """携带信封字段的业务异常，方便在全局处理中转换为统一响应。

    ``msg`` 作为面向用户的 ``Message``；``error`` 为底层错误（缺省时使用 ``msg``）；
    ``msg_type`` 留空时由状态码合成。
    """

    def __init__(
        self,
        msg: str,
        code: int = status.HTTP_400_BAD_REQUEST,
        data: Any = None,
        *,
        msg_type: str = "",
        error: Optional[BaseException | str] = None,
    ) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data
        self.msg_type = msg_type
        self.error = error
