"""传输层抽象：输出层只需要“设置响应头、写一次状态码、写入字节”三种能力。

``ResponseWriter`` 描述该能力；``BufferedResponseWriter`` 在内存中记录写入内容，
既可用于测试，也可以转换为 Starlette/FastAPI 的 ``Response`` 返回给框架。
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from starlette.responses import Response


@runtime_checkable
class ResponseWriter(Protocol):
    """输出层依赖的最小传输接口。"""

    def set_header(self, name: str, value: str) -> None:
        ...

    def write_status(self, code: int) -> None:
        ...

    def write(self, body: bytes) -> None:
        ...


class BufferedResponseWriter:
    """在内存中缓存状态码、响应头与响应体的写入器，每个请求独占一个实例。"""

    def __init__(self) -> None:
        self.headers: Dict[str, str] = {}
        self.status_code: Optional[int] = None
        self._chunks: list[bytes] = []

    def set_header(self, name: str, value: str) -> None:
        if self.status_code is not None:
            raise RuntimeError("headers must be set before the status code is written")
        self.headers[name] = value

    def write_status(self, code: int) -> None:
        if self.status_code is not None:
            raise RuntimeError("status code has already been written")
        self.status_code = code

    def write(self, body: bytes) -> None:
        if self.status_code is None:
            # 未显式写状态码时隐式使用 200。
            self.status_code = 200
        self._chunks.append(bytes(body))

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def written(self) -> bool:
        """是否已经向传输层写入过任何内容。"""
        return self.status_code is not None or bool(self._chunks)

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))

    def to_response(self) -> Response:
        """将缓存的内容转换为 Starlette ``Response``。"""
        if self.status_code is None:
            raise RuntimeError("nothing has been written to this response")
        headers = {key: value for key, value in self.headers.items() if key.lower() != "content-type"}
        return Response(
            content=self.body,
            status_code=self.status_code,
            headers=headers,
            media_type=self.headers.get("Content-Type"),
        )
