"""
测试应用入口、信封格式与全局异常处理
"""
import json
import time

from starlette.requests import Request

from sitecms.core.exception_handlers import unhandled_exception_handler


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert "timestamp" in body
    assert "version" in body


async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "app" in resp.json()


async def test_unknown_route_uses_envelope(client):
    resp = await client.get("/api/does-not-exist")
    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == 404
    assert body["data"] is None
    assert "/api/does-not-exist" in body["message"]


async def test_success_envelope_shape(client):
    before = int(time.time() * 1000)
    body = (await client.get("/api/settings")).json()
    assert set(body) >= {"code", "message", "data", "timestamp"}
    assert body["code"] == 200
    assert body["timestamp"] >= before


async def test_method_not_allowed(client):
    resp = await client.patch("/api/settings")
    assert resp.status_code == 405
    assert resp.json()["code"] == 405


async def test_malformed_json_body_is_400(client):
    resp = await client.post(
        "/api/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400


async def test_unhandled_exception_handler_hides_message():
    request = Request({"type": "http", "method": "GET", "path": "/boom", "headers": [], "query_string": b""})
    response = await unhandled_exception_handler(request, RuntimeError("database password is hunter2"))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["code"] == 500
    assert body["message"] == "服务器内部错误"
    assert "hunter2" not in body["message"]
