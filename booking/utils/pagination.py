# booking/utils/pagination.py
"""Page arithmetic shared by the paged listings"""
import math
from typing import Optional, Tuple

from booking.config.settings import get_settings


def normalize_pagination(page: int, page_size: int, default_page_size: Optional[int] = None) -> Tuple[int, int]:
    """Correct out-of-range values instead of rejecting them: page < 1 -> 1, page_size < 1 -> default"""
    if page < 1:
        page = 1
    if page_size <= 0:
        page_size = default_page_size or get_settings().DEFAULT_PAGE_SIZE
    return page, page_size


def page_count(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if total_count else 0


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size
