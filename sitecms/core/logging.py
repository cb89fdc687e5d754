"""
日志配置
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    配置根日志器

    Args:
        level: 日志级别名称，如 DEBUG / INFO / WARNING
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    # 降低第三方库日志级别
    for name in ["httpx", "httpcore", "passlib", "uvicorn.access"]:
        logging.getLogger(name).setLevel(logging.WARNING)
