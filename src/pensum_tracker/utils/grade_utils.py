"""
成绩计算工具函数

一门课的最终成绩 = 各评分项（concept）分数之和，满分 100。
字母等级和绩点由固定分数线换算：

    >= 90  A  4.0
    >= 80  B  3.0
    >= 70  C  2.0
    >= 60  D  1.0
    其余   F  0.0

课程状态 "Aprobada"（通过）要求最终成绩严格大于 70。
"""

# (最低分, 字母, 绩点)，按分数线从高到低排列
GRADE_SCALE = (
    (90, 'A', 4.0),
    (80, 'B', 3.0),
    (70, 'C', 2.0),
    (60, 'D', 1.0),
    (0, 'F', 0.0),
)

APPROVAL_THRESHOLD = 70
NO_GRADE = '-'


def _present(scores):
    if scores is None:
        return []
    if isinstance(scores, dict):
        scores = scores.values()
    return [s for s in scores if isinstance(s, (int, float)) and not isinstance(s, bool)]


def has_grades(scores) -> bool:
    """
    是否至少有一个已录入的分数

    Args:
        scores: 分数列表，或 {concept: score} 字典；None 值视为未录入
    """
    return len(_present(scores)) > 0


def final_score(scores):
    """
    计算最终成绩（已录入分数之和，未录入的评分项不计）

    Examples:
        >>> final_score({'PRIMER_PARCIAL': 18, 'SEGUNDO_PARCIAL': 30})
        48
        >>> final_score([])
        0
    """
    return sum(_present(scores))


def _scale_row(score):
    for minimum, letter, points in GRADE_SCALE:
        if score >= minimum:
            return letter, points
    return GRADE_SCALE[-1][1], GRADE_SCALE[-1][2]


def letter_grade(score) -> str:
    """
    分数 → 字母等级

    Examples:
        >>> letter_grade(95)
        'A'
        >>> letter_grade(69)
        'D'
    """
    return _scale_row(score)[0]


def grade_points(score) -> float:
    """分数 → 绩点（0.0 ~ 4.0）"""
    return _scale_row(score)[1]


def is_approved(score) -> bool:
    """最终成绩是否达到通过线（严格大于 70）"""
    return score is not None and score > APPROVAL_THRESHOLD


def gpa(rows) -> float:
    """
    计算加权平均绩点

    只统计有成绩的课程；没有任何可统计学分时返回 0.0

    Args:
        rows: [(scores, credits), ...]

    Returns:
        float: 保留两位小数的 GPA

    Examples:
        >>> gpa([({'EXAMEN_FINAL': 30, 'SEGUNDO_PARCIAL': 35, 'PRIMER_PARCIAL': 20, 'ACUMULADO_P1': 15}, 4),
        ...      ({'EXAMEN_FINAL': 25, 'SEGUNDO_PARCIAL': 30, 'PRIMER_PARCIAL': 15, 'ACUMULADO_P1': 10}, 2)])
        3.67
    """
    total_quality_points = 0.0
    total_credits = 0
    for scores, credits in rows:
        if not has_grades(scores):
            continue
        total_quality_points += grade_points(final_score(scores)) * credits
        total_credits += credits
    if total_credits <= 0:
        return 0.0
    return round(total_quality_points / total_credits, 2)
