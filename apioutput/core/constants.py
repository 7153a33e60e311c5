"""常量定义：集中维护状态码、内容类型与预置消息类型的取值。"""

from fastapi import status

HTTP_STATUS_OK = status.HTTP_200_OK
HTTP_STATUS_NO_CONTENT = status.HTTP_204_NO_CONTENT
HTTP_STATUS_NOT_MODIFIED = status.HTTP_304_NOT_MODIFIED
# Starlette 已将 422 更名为 UNPROCESSABLE_CONTENT，旧名称在导入时会触发弃用警告。
HTTP_STATUS_UNPROCESSABLE_CONTENT = 422
HTTP_STATUS_INTERNAL_SERVER_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR

# 这些状态码的响应不允许携带响应体。
BODYLESS_STATUS_CODES = frozenset({HTTP_STATUS_NO_CONTENT, HTTP_STATUS_NOT_MODIFIED})

# 合法状态码区间：低于 100 的值不属于任何状态类，超过三位数的值传输层无法写出。
MIN_RESPONSE_CODE = status.HTTP_100_CONTINUE
MAX_RESPONSE_CODE = 999

CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_TYPE_JSON = "application/json; charset=UTF-8"

MSG_TYPE_ERROR_VALUE = "error"
MSG_TYPE_INSERT_OK_VALUE = "insertOK"
MSG_TYPE_UPDATE_OK_VALUE = "updateOK"
MSG_TYPE_DELETE_OK_VALUE = "deleteOK"
MSG_TYPE_DATA_FOUND_VALUE = "dataFound"

ERROR_TEXT_INPUT_INVALID = "input validation error"
ERROR_TEXT_ALREADY_EXISTS = "already exists"
