"""测试夹具：为 pytest 提供写入器、独立分发器、日志捕获与客户端的共享配置。"""

import logging
import os
import shutil
import tempfile
from typing import Generator

# 日志目录需在导入 apioutput 之前指向临时目录，测试运行不向项目目录写日志。
TEST_LOG_DIR = tempfile.mkdtemp(prefix="apioutput_logs_")
os.environ["LOG_DIR"] = TEST_LOG_DIR

import pytest  # noqa: E402
from fastapi import FastAPI, HTTPException  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from pydantic import BaseModel  # noqa: E402

from apioutput.core.debug import DebugSwitch, debug_switch  # noqa: E402
from apioutput.core.exceptions import ERR_ALREADY_EXISTS, AppException  # noqa: E402
from apioutput.core.logger import logger  # noqa: E402
from apioutput.core.responses import create_response, error_response  # noqa: E402
from apioutput.core.transport import BufferedResponseWriter  # noqa: E402
from apioutput.main import create_app  # noqa: E402
from apioutput.models.envelope import Envelope, MessageType  # noqa: E402
from apioutput.services.dispatcher import Dispatcher  # noqa: E402


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class ItemIn(BaseModel):
    name: str
    quantity: int


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_log_dir() -> Generator[None, None, None]:
    """会话结束后清理临时日志目录。"""
    yield
    shutil.rmtree(TEST_LOG_DIR, ignore_errors=True)


@pytest.fixture()
def writer() -> BufferedResponseWriter:
    """每个测试独占一个内存写入器。"""
    return BufferedResponseWriter()


@pytest.fixture()
def switch() -> DebugSwitch:
    return DebugSwitch(False)


@pytest.fixture()
def dispatcher(switch: DebugSwitch) -> Dispatcher:
    """使用独立诊断开关的分发器，互不影响进程级默认开关。"""
    return Dispatcher(switch)


@pytest.fixture(autouse=True)
def reset_default_switch() -> Generator[None, None, None]:
    """保证默认开关在每个用例结束后恢复原值。"""
    previous = debug_switch.enabled()
    yield
    debug_switch.set(previous)


@pytest.fixture()
def log_records() -> Generator[list[logging.LogRecord], None, None]:
    """捕获 ``apioutput`` 日志器输出的记录。"""
    handler = _ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def _build_test_app() -> FastAPI:
    application = create_app()

    @application.post("/items")
    async def create_item(item: ItemIn):
        return create_response(
            Envelope(ok=True, type=MessageType("itemCreated"), data=item.model_dump()),
            201,
        )

    @application.get("/items/{item_id}")
    async def read_item(item_id: int):
        raise AppException("记录不存在", 404)

    @application.put("/items/{item_id}")
    async def rename_item(item_id: int):
        raise AppException("名称已存在", 409, msg_type="alreadyExists", error=ERR_ALREADY_EXISTS)

    @application.post("/items/{item_id}/retry")
    async def retry_item(item_id: int):
        return error_response(ERR_ALREADY_EXISTS, "请使用已有记录重试。", item_id)

    @application.delete("/items/{item_id}")
    async def delete_item(item_id: int):
        raise HTTPException(status_code=204, headers={"X-Deleted": str(item_id)})

    @application.get("/items/{item_id}/cached")
    async def cached_item(item_id: int):
        raise HTTPException(status_code=304, headers={"ETag": "v1"})

    @application.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    return application


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建挂载测试路由的 TestClient，未捕获异常交由兜底处理器转换。"""
    with TestClient(_build_test_app(), raise_server_exceptions=False) as test_client:
        yield test_client
