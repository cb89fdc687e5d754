"""
中间件配置
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from sitecms.core.config import settings

logger = logging.getLogger("sitecms.access")


async def access_log_middleware(request: Request, call_next):
    """请求日志：方法、路径、状态码、耗时"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms
    )
    return response


def setup_middlewares(app: FastAPI) -> None:
    """注册中间件（注册顺序与执行顺序相反）"""
    app.middleware("http")(access_log_middleware)

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"]
    )
