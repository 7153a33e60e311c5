"""FastAPI 集成测试：健康检查、异常处理器与响应辅助函数。"""

from fastapi.testclient import TestClient

from apioutput.core.constants import CONTENT_TYPE_JSON, HTTP_STATUS_UNPROCESSABLE_CONTENT
from apioutput.core.handlers import GENERIC_ERROR_MESSAGE, VALIDATION_ERROR_MESSAGE
from apioutput.core.timezone import is_timestamp


def test_health_check(client: TestClient):
    """健康检查：返回 dataFound 信封。"""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE_JSON
    payload = response.json()
    assert payload["OK"] is True
    assert payload["Type"] == "dataFound"
    assert payload["Data"] == {"status": "healthy"}
    assert is_timestamp(payload["Datetime"])
    assert "ErrorData" not in payload


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"


def test_request_id_is_generated(client: TestClient):
    response = client.get("/health")

    assert len(response.headers["x-request-id"]) == 36


def test_create_response_with_custom_status(client: TestClient):
    response = client.post("/items", json={"name": "widget", "quantity": 3})

    assert response.status_code == 201
    payload = response.json()
    assert payload["OK"] is True
    assert payload["Type"] == "itemCreated"
    assert payload["Data"] == {"name": "widget", "quantity": 3}


def test_unknown_route_synthesizes_type(client: TestClient):
    """未匹配路由：信封类型由状态码合成。"""
    response = client.get("/nope")

    assert response.status_code == 404
    payload = response.json()
    assert payload["OK"] is False
    assert payload["Type"] == "404-Not Found"
    assert payload["ErrorData"]["Error"] == "Not Found"
    assert "Data" not in payload


def test_app_exception_without_type(client: TestClient):
    response = client.get("/items/1")

    assert response.status_code == 404
    payload = response.json()
    assert payload["Type"] == "404-Not Found"
    assert payload["ErrorData"] == {"Error": "Not Found", "Message": "记录不存在"}


def test_app_exception_with_type_and_error(client: TestClient):
    response = client.put("/items/1")

    assert response.status_code == 409
    payload = response.json()
    assert payload["OK"] is False
    assert payload["Type"] == "alreadyExists"
    assert payload["ErrorData"] == {"Error": "already exists", "Message": "名称已存在"}


def test_validation_error(client: TestClient):
    """请求体验证失败：返回 422 与 input validation error。"""
    response = client.post("/items", json={"name": "widget"})

    assert response.status_code == 422
    payload = response.json()
    assert payload["OK"] is False
    assert payload["Type"] == "error"
    assert payload["ErrorData"] == {"Error": "input validation error", "Message": VALIDATION_ERROR_MESSAGE}
    assert any(item["loc"][-1] == "quantity" for item in payload["Data"])


def test_error_response_with_id(client: TestClient):
    response = client.post("/items/7/retry")

    assert response.status_code == 500
    payload = response.json()
    assert payload["Data"] == 7
    assert payload["ErrorData"]["Error"] == "already exists"


def test_unhandled_exception(client: TestClient):
    """未捕获异常：兜底处理器返回 500 错误信封。"""
    response = client.get("/boom")

    assert response.status_code == 500
    payload = response.json()
    assert payload["OK"] is False
    assert payload["Type"] == "error"
    assert payload["ErrorData"] == {"Error": "boom", "Message": GENERIC_ERROR_MESSAGE}


def test_no_content_exception_has_no_body(client: TestClient):
    """204 不允许携带响应体：只返回状态码与响应头。"""
    response = client.delete("/items/3")

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["x-deleted"] == "3"


def test_not_modified_exception_has_no_body(client: TestClient):
    response = client.get("/items/3/cached")

    assert response.status_code == 304
    assert response.content == b""
    assert response.headers["etag"] == "v1"


def test_validation_status_uses_current_constant(client: TestClient):
    response = client.post("/items", json={})

    assert response.status_code == HTTP_STATUS_UNPROCESSABLE_CONTENT == 422
