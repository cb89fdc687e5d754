"""
站点设置Schema模型
"""
from pydantic import BaseModel, Field
from typing import Optional


class SettingItem(BaseModel):
    """批量更新中的单个设置项"""
    key: Optional[str] = Field(None, max_length=128)
    value: Optional[str] = None
    group: Optional[str] = Field(None, max_length=64)
