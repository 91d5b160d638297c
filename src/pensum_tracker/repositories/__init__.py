"""
数据访问层
"""
from .student_repository import StudentRepository
from .pensum_repository import PensumRepository
from .semester_repository import SemesterRepository

__all__ = ['StudentRepository', 'PensumRepository', 'SemesterRepository']
