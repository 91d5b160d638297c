"""
课表时间工具函数
时间统一使用 24 小时制字符串 "HH:MM"
"""
import re

DIAS_SEMANA = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"]

_TIME_RE = re.compile(r'^(\d{1,2}):(\d{2})$')


def parse_time(time_str: str) -> tuple:
    """
    解析 "HH:MM" 为 (hour, minute)

    Raises:
        ValueError: 格式不正确或超出范围

    Examples:
        >>> parse_time("07:30")
        (7, 30)
    """
    match = _TIME_RE.match(time_str or '')
    if not match:
        raise ValueError(f"Invalid time: {time_str!r}. Expected format: HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time: {time_str!r}")
    return hour, minute


def format_time_12_hour(time_str: str) -> str:
    """
    "13:05" → "01:05 PM"，空字符串原样返回空

    Examples:
        >>> format_time_12_hour("00:15")
        '12:15 AM'
        >>> format_time_12_hour("13:05")
        '01:05 PM'
    """
    if not time_str:
        return ''
    hour, minute = parse_time(time_str)
    ampm = 'PM' if hour >= 12 else 'AM'
    hour = hour % 12 or 12
    return f"{hour:02d}:{minute:02d} {ampm}"


def day_index(day: str) -> int:
    """星期名称 → 0 (Lunes) ~ 6 (Domingo)"""
    if day not in DIAS_SEMANA:
        raise ValueError(f"Invalid day: {day!r}. Must be one of: {', '.join(DIAS_SEMANA)}")
    return DIAS_SEMANA.index(day)


def validate_slot(day: str, start_time: str, end_time: str):
    """
    校验一个上课时间段

    Raises:
        ValueError: 星期不存在、时间格式错误或开始时间不早于结束时间
    """
    day_index(day)
    if parse_time(start_time) >= parse_time(end_time):
        raise ValueError(f"Start time {start_time} must be before end time {end_time}")


def slot_sort_key(day: str, start_time: str) -> tuple:
    """按星期、开始时间排序"""
    return (day_index(day), parse_time(start_time))
