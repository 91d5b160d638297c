"""
Semester 数据模型
学生的一个学期（cuatrimestre），名称自由输入
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


class Semester(Base):
    """学期表"""
    __tablename__ = 'semesters'

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)

    # 显示名称，如 "Primer Cuatrimestre 2024"，排序见 utils.semester_utils
    name = Column(String(100), nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # 关系
    student = relationship("Student", back_populates="semesters")
    enrollments = relationship(
        "Enrollment",
        back_populates="semester",
        cascade="all, delete-orphan"  # 删除学期时级联删除该学期的选课
    )

    def __repr__(self):
        return f"<Semester {self.id}: {self.name}>"

    def __str__(self):
        return self.name
