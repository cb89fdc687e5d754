"""
分页参数解析
"""
from math import ceil
from typing import Any, NamedTuple, Optional, Union

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class Pagination(NamedTuple):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _to_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_pagination(
    page: Optional[Union[str, int]] = None,
    page_size: Optional[Union[str, int]] = None
) -> Pagination:
    """
    解析分页参数

    page 最小为1；page_size 限制在 [1, 100]，无法解析时使用默认值。
    """
    parsed_page = max(1, _to_int(page, 1))
    parsed_size = min(MAX_PAGE_SIZE, max(1, _to_int(page_size, DEFAULT_PAGE_SIZE)))
    return Pagination(parsed_page, parsed_size)


def calculate_pagination(total: int, pagination: Pagination) -> dict:
    """计算分页信息"""
    return {
        "total": total,
        "page": pagination.page,
        "pageSize": pagination.page_size,
        "totalPages": ceil(total / pagination.page_size),
    }
