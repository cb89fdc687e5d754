"""
全局异常处理器

所有失败都以统一信封返回：{code, message, data, timestamp, error}
"""
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.core.config import settings
from sitecms.core.exceptions import AppException, AuthenticationError
from sitecms.schemas.common import ErrorResponseModel

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error: str = None, headers: dict = None) -> JSONResponse:
    body = ErrorResponseModel(code=status_code, message=message, error=error)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """业务异常处理"""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(exc.status_code, exc.message, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求体/参数校验失败统一返回400"""
    details = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())[1:])
        details.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return error_response(400, "请求参数错误", error="; ".join(details) or None)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """路由未找到、方法不允许等HTTP异常"""
    if exc.status_code == 404:
        message = f"路由未找到: {request.method} {request.url.path}"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未捕获异常：记录详情，对外只返回通用提示"""
    logger.exception("未处理的异常: %s %s", request.method, request.url.path)
    error = None if settings.is_production else "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__)
    )
    return error_response(500, "服务器内部错误", error=error)


def setup_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
