"""
Student 数据模型
表示一个被跟踪的学生
"""
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


class Student(Base):
    """学生表"""
    __tablename__ = 'students'

    # 主键：自增整数
    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)

    # 时间戳
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # 关系
    pensum_classes = relationship(
        "PensumClass",
        back_populates="student",
        cascade="all, delete-orphan"  # 删除学生时级联删除其 pensum
    )
    semesters = relationship(
        "Semester",
        back_populates="student",
        cascade="all, delete-orphan"  # 删除学生时级联删除其学期记录
    )

    def __repr__(self):
        return f"<Student {self.id}: {self.name}>"

    def __str__(self):
        return self.name
