"""
业务异常定义

每个异常携带HTTP状态码和面向调用方的提示信息，由全局异常处理器统一转换为响应信封。
"""


class AppException(Exception):
    """应用基础异常"""

    status_code: int = 400

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppException):
    """请求参数缺失或格式错误"""

    status_code = 400


class ConflictError(AppException):
    """唯一键冲突（如 slug 已存在）"""

    status_code = 400


class AuthenticationError(AppException):
    """未认证或凭证无效"""

    status_code = 401

    def __init__(self, message: str = "认证令牌无效或已过期"):
        super().__init__(message)


class AuthorizationError(AppException):
    """已认证但权限不足，或账户被禁用"""

    status_code = 403

    def __init__(self, message: str = "权限不足"):
        super().__init__(message)


class NotFoundError(AppException):
    """资源不存在"""

    status_code = 404

    def __init__(self, message: str = "资源不存在"):
        super().__init__(message)
