"""
数据模型包
"""
from sqlalchemy.orm import declarative_base

# 创建 ORM 基类
Base = declarative_base()

# 导出所有模型
from .student import Student
from .pensum_class import PensumClass
from .semester import Semester
from .enrollment import Enrollment
from .schedule_slot import ScheduleSlot
from .grade import GradeConcept, GRADE_CONCEPT_INFO, GradeEntry

__all__ = [
    'Base',
    'Student',
    'PensumClass',
    'Semester',
    'Enrollment',
    'ScheduleSlot',
    'GradeConcept',
    'GRADE_CONCEPT_INFO',
    'GradeEntry',
]
