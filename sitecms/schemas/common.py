"""
通用Schema模型
"""
import time
from pydantic import BaseModel, Field
from typing import Any, Optional


def now_ms() -> int:
    return int(time.time() * 1000)


class ResponseModel(BaseModel):
    """标准响应信封，code 与HTTP状态码一致"""
    code: int = 200
    message: Optional[str] = None
    data: Optional[Any] = None
    timestamp: int = Field(default_factory=now_ms)


class ErrorResponseModel(ResponseModel):
    """错误响应信封，error 仅在非生产环境携带调用栈"""
    error: Optional[str] = None
