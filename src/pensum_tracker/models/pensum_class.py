"""
PensumClass 数据模型
学生培养方案（pensum）中的一门课程定义
"""
from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from . import Base


class PensumClass(Base):
    """培养方案课程表"""
    __tablename__ = 'pensum_classes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    code = Column(String(30), nullable=True)   # "MAT-101"，手动添加时自动生成 "MANUAL-XXXXXX"
    credits = Column(Integer, nullable=False)

    # 关系
    student = relationship("Student", back_populates="pensum_classes")
    enrollments = relationship(
        "Enrollment",
        back_populates="pensum_class",
        cascade="all, delete"  # 选课记录归属于学期，这里只做级联删除
    )

    def __repr__(self):
        return f"<PensumClass {self.id}: {self.code} {self.name}>"

    def __str__(self):
        if self.code:
            return f"{self.code} - {self.name} ({self.credits} cr)"
        return f"{self.name} ({self.credits} cr)"
