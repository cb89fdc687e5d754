"""
自定义列类型
"""
import json
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Text, types


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TagList(types.TypeDecorator):
    """标签列表：模型层是字符串列表，落库为JSON文本。

    读取时遇到空值、非法JSON或非列表内容一律返回空列表，不抛异常。
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[List[str]], dialect) -> Optional[str]:
        if value is None:
            return None
        return json.dumps([str(tag) for tag in value], ensure_ascii=False)

    def process_result_value(self, value: Optional[str], dialect) -> List[str]:
        return decode_tags(value)


def decode_tags(raw: Optional[str]) -> List[str]:
    """安全解析标签JSON"""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [str(tag) for tag in parsed if tag is not None]
