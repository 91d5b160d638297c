"""
文本处理工具函数
去除重音符号、生成排序用的比较键
"""
import unicodedata


def fold_diacritics(text: str) -> str:
    """
    去掉字符串中的重音符号（NFD 分解后丢弃组合字符）

    Args:
        text: 原始字符串，如 "Séptimo"

    Returns:
        str: 去掉重音后的字符串，如 "Septimo"

    Examples:
        >>> fold_diacritics("Décimo")
        'Decimo'
        >>> fold_diacritics("Cuatrimestre")
        'Cuatrimestre'
    """
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def collation_key(text: str) -> tuple:
    """
    生成多级排序键，近似 locale 感知的字符串比较

    只在字母和重音上近似 locale 顺序；标点、数字和 "ø" 这类不可分解的字母
    按码位排序，与 localeCompare 的结果可能不同。

    比较顺序：
      1. 基础字母（忽略大小写和重音）
      2. 重音（无重音在前）
      3. 大小写（小写在前）
      4. 原始字符串（保证不同字符串永不相等）

    Args:
        text: 原始字符串

    Returns:
        tuple: 可直接比较的排序键

    Examples:
        >>> sorted(["b", "B", "a", "á"], key=collation_key)
        ['a', 'á', 'b', 'B']
    """
    decomposed = unicodedata.normalize('NFD', text)
    base = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return (
        base.casefold(),
        decomposed.casefold(),
        decomposed.swapcase(),  # 交换大小写后，小写字母排在大写前面
        text,
    )
