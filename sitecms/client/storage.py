"""
客户端本地存储

键值均为字符串，可选持久化到JSON文件，进程重启后恢复。
"""
import json
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "admin_token"
USER_KEY = "admin_user"
THEME_KEY = "theme"
LOCALE_KEY = "locale"


class LocalStorage:
    """字符串键值存储"""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._items: Dict[str, str] = {}
        if path and os.path.exists(path):
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("本地存储文件无法读取，已忽略: %s", self.path)
            return
        if isinstance(data, dict):
            self._items = {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._items, f, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._items.clear()
        self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._items
