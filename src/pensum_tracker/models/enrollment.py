"""
Enrollment 数据模型
某门 pensum 课程在某个学期的一次修读，带自己的课表和成绩
"""
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from . import Base


class Enrollment(Base):
    """选课表"""
    __tablename__ = 'enrollments'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # 外键
    semester_id = Column(Integer, ForeignKey('semesters.id', ondelete='CASCADE'), nullable=False, index=True)
    pensum_class_id = Column(Integer, ForeignKey('pensum_classes.id', ondelete='CASCADE'), nullable=False, index=True)

    # 关系
    semester = relationship("Semester", back_populates="enrollments")
    pensum_class = relationship("PensumClass", back_populates="enrollments")
    schedule_slots = relationship(
        "ScheduleSlot",
        back_populates="enrollment",
        cascade="all, delete-orphan"
    )
    grades = relationship(
        "GradeEntry",
        back_populates="enrollment",
        cascade="all, delete-orphan"
    )

    # 同一学期同一门课只能选一次
    __table_args__ = (
        UniqueConstraint('semester_id', 'pensum_class_id', name='uq_enrollment_semester_class'),
    )

    @property
    def scores(self):
        """{concept: score} 字典"""
        return {g.concept: g.score for g in self.grades}

    def __repr__(self):
        return f"<Enrollment {self.id}: semester={self.semester_id} class={self.pensum_class_id}>"
