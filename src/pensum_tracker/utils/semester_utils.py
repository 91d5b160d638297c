"""
学期名称解析和比较工具函数

学期名称是用户自由输入的字符串，没有固定格式，例如：
- "Primer Cuatrimestre 2024"
- "2024-03"
- "Tercer Cuatrimestre"
- "Cuatrimestre General"

从名称中推断 (year, ordinal) 来近似时间顺序：
  年份 → 年内序号 → 名称本身（locale 排序）

注意：这是启发式规则，不是严格的解析器。任何输入都不会抛异常，
识别不出的部分按 0 处理。
"""
import re
from functools import cmp_to_key
from typing import Optional

from .text_utils import fold_diacritics, collation_key


# 西班牙语序数词 → 年内序号
# 顺序即匹配优先级（名称中同时出现多个序数词时，表中靠前者胜出）
ORDINAL_WORDS = (
    ('primer', 1),
    ('segundo', 2),
    ('tercer', 3),
    ('cuarto', 4),
    ('quinto', 5),
    ('sexto', 6),
    ('séptimo', 7),
    ('septimo', 7),
    ('octavo', 8),
    ('noveno', 9),
    ('décimo', 10),
    ('decimo', 10),
    ('undécimo', 11),
    ('undecimo', 11),
    ('duodécimo', 12),
    ('duodecimo', 12),
)

# 只使用 ASCII 的 \b 和 \d
_YEAR_RE = re.compile(r'\b(20\d{2})\b', re.ASCII)
_YEAR_PERIOD_RE = re.compile(r'\b\d{4}[-.](\d{1,2})\b', re.ASCII)
_NUMBER_RE = re.compile(r'(\d+)', re.ASCII)


def normalize_name(name: str) -> str:
    """
    学期名称标准化：转小写并去掉重音，仅用于匹配

    Examples:
        >>> normalize_name("Séptimo Cuatrimestre")
        'septimo cuatrimestre'
    """
    return fold_diacritics(name.lower())


def extract_year(name: str) -> int:
    """
    从学期名称提取年份（2000-2099）

    Args:
        name: 学期名称，如 "Primer Cuatrimestre 2024"

    Returns:
        int: 年份，找不到时返回 0

    Examples:
        >>> extract_year("Primer Cuatrimestre 2024")
        2024
        >>> extract_year("Tercer Cuatrimestre")
        0
    """
    match = _YEAR_RE.search(name)
    return int(match.group(1)) if match else 0


def match_ordinal_word(normalized: str) -> Optional[int]:
    """按 ORDINAL_WORDS 的顺序查找序数词，返回第一个命中的序号"""
    for word, value in ORDINAL_WORDS:
        if fold_diacritics(word) in normalized:
            return value
    return None


def match_year_period(name: str) -> Optional[int]:
    """匹配 "2024-03" / "2024.3" 这种 年份+分隔符+序号 的格式"""
    match = _YEAR_PERIOD_RE.search(name)
    return int(match.group(1)) if match else None


def match_bare_number(normalized: str, year: int) -> Optional[int]:
    """
    取名称中第一个数字作为序号

    只接受 0 < n < 100 且不等于已识别年份的数字，避免把年份当成序号
    """
    match = _NUMBER_RE.search(normalized)
    if not match:
        return None
    number = int(match.group(1))
    if 0 < number < 100 and number != year:
        return number
    return None


def extract_ordinal(name: str, year: Optional[int] = None) -> int:
    """
    从学期名称提取年内序号

    依次尝试（命中即停止）：
      1. 序数词（primer, segundo, ...）
      2. 年份-序号格式（2024-03, 2024.3）
      3. 单独的小数字
      4. 都不匹配 → 0

    Args:
        name: 学期名称
        year: 已提取的年份，不传则自动提取

    Returns:
        int: 年内序号

    Examples:
        >>> extract_ordinal("Segundo Cuatrimestre 2024")
        2
        >>> extract_ordinal("2024-03")
        3
        >>> extract_ordinal("Cuatrimestre 2024")
        0
    """
    if year is None:
        year = extract_year(name)
    normalized = normalize_name(name)

    ordinal = match_ordinal_word(normalized)
    if ordinal is None:
        ordinal = match_year_period(name)
    if ordinal is None:
        ordinal = match_bare_number(normalized, year)
    return ordinal if ordinal is not None else 0


def parse_semester(name: str) -> tuple:
    """
    解析学期名称为可比较的元组

    Args:
        name: 学期名称

    Returns:
        tuple: (year, ordinal, name)

    Examples:
        >>> parse_semester("Primer Cuatrimestre 2024")
        (2024, 1, 'Primer Cuatrimestre 2024')
        >>> parse_semester("Cuatrimestre General")
        (0, 0, 'Cuatrimestre General')
    """
    year = extract_year(name)
    return (year, extract_ordinal(name, year), name)


def semester_sort_key(name: str) -> tuple:
    """可直接传给 sorted(key=...) 的排序键，与 compare_semesters 顺序一致"""
    year, ordinal, original = parse_semester(name)
    return (year, ordinal, collation_key(original))


def compare_semesters(sem1: str, sem2: str) -> int:
    """
    比较两个学期的先后顺序

    Args:
        sem1: 第一个学期名称
        sem2: 第二个学期名称

    Returns:
        int:
            -1 如果 sem1 更早
             0 如果两个名称完全相同
             1 如果 sem1 更晚

    Examples:
        >>> compare_semesters("Primer Cuatrimestre 2023", "Primer Cuatrimestre 2024")
        -1
        >>> compare_semesters("2024-01", "2024-01")
        0
        >>> compare_semesters("Segundo 2024-01", "Primer 2024-02")
        1
    """
    key1 = semester_sort_key(sem1)
    key2 = semester_sort_key(sem2)

    if key1 < key2:
        return -1
    elif key1 > key2:
        return 1
    else:
        return 0


def is_earlier(sem1: str, sem2: str) -> bool:
    """判断 sem1 是否早于 sem2"""
    return compare_semesters(sem1, sem2) < 0


def is_later(sem1: str, sem2: str) -> bool:
    """判断 sem1 是否晚于 sem2"""
    return compare_semesters(sem1, sem2) > 0


def sort_semesters(items, key=None, reverse=False):
    """
    按时间顺序排序学期

    Args:
        items: 学期名称列表，或任意对象列表（配合 key 使用）
        key: 从对象中取出学期名称的函数，如 lambda s: s.name
        reverse: 是否倒序

    Returns:
        list: 排好序的新列表
    """
    if key is None:
        cmp = compare_semesters
    else:
        def cmp(a, b):
            return compare_semesters(key(a), key(b))
    return sorted(items, key=cmp_to_key(cmp), reverse=reverse)
