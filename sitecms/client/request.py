"""
HTTP请求封装

统一处理：Bearer令牌注入、GET防缓存参数、响应信封解析、401清理登录态。
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx

from sitecms.client.storage import TOKEN_KEY, USER_KEY, LocalStorage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 15.0


class ApiRequestError(Exception):
    """请求未得到服务端响应（网络错误、超时等）"""


@dataclass
class ApiResponse:
    """服务端响应信封"""
    code: int
    message: Optional[str] = None
    data: Any = None
    timestamp: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300


class ApiClient:
    """
    异步API客户端

    Args:
        base_url: API根地址（含 /api 前缀）
        storage: 读取令牌的本地存储
        timeout: 请求超时秒数
        transport: 自定义 httpx 传输层（测试时可直接挂载ASGI应用）
        on_unauthorized: 收到401后的回调，例如跳转登录页
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        storage: Optional[LocalStorage] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_unauthorized: Optional[Callable[[], None]] = None
    ):
        self.storage = storage or LocalStorage()
        self.on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"}
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> Dict[str, str]:
        token = self.storage.get_item(TOKEN_KEY)
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def handle_unauthorized(self) -> None:
        """清除本地登录态"""
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    @staticmethod
    def _parse(response: httpx.Response) -> ApiResponse:
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return ApiResponse(code=response.status_code, message=response.reason_phrase)

        return ApiResponse(
            code=int(body.get("code", response.status_code)),
            message=body.get("message"),
            data=body.get("data"),
            timestamp=body.get("timestamp"),
            error=body.get("error")
        )

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None
    ) -> ApiResponse:
        """发送请求并解析为 ApiResponse"""
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if method.upper() == "GET":
            query["_t"] = int(time.time() * 1000)

        try:
            response = await self._client.request(
                method,
                url,
                params=query or None,
                json=json,
                headers=self._auth_headers()
            )
        except httpx.HTTPError as e:
            logger.error("网络错误，请检查网络连接: %s %s (%s)", method, url, e)
            raise ApiRequestError(str(e)) from e

        result = self._parse(response)
        if response.status_code == 401 or result.code == 401:
            self.handle_unauthorized()
        elif not result.ok:
            logger.warning("请求失败: %s %s -> %s %s", method, url, result.code, result.message)
        return result

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, data: Any = None) -> ApiResponse:
        return await self.request("POST", url, json=data)

    async def put(self, url: str, data: Any = None) -> ApiResponse:
        return await self.request("PUT", url, json=data)

    async def delete(self, url: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("DELETE", url, params=params)
