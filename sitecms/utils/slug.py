"""
URL别名生成
"""
import re
import time

_NON_WORD = re.compile(r"[\s\W-]+", re.ASCII)


def generate_slug(text: str) -> str:
    """
    生成URL友好的slug

    只保留ASCII字母数字和下划线，其余字符（含中文）折叠为单个连字符。
    """
    slug = _NON_WORD.sub("-", text.strip().lower())
    return slug.strip("-")


def slug_with_timestamp(title: str) -> str:
    """标题slug加毫秒时间戳后缀，用于未指定slug时"""
    suffix = str(int(time.time() * 1000))
    base = generate_slug(title)
    return f"{base}-{suffix}" if base else suffix
