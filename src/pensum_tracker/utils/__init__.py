"""
工具函数模块
"""
from .semester_utils import (
    parse_semester,
    extract_year,
    extract_ordinal,
    semester_sort_key,
    compare_semesters,
    is_earlier,
    is_later,
    sort_semesters,
)
from .text_utils import fold_diacritics, collation_key

__all__ = [
    'parse_semester',
    'extract_year',
    'extract_ordinal',
    'semester_sort_key',
    'compare_semesters',
    'is_earlier',
    'is_later',
    'sort_semesters',
    'fold_diacritics',
    'collation_key',
]
