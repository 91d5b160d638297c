"""
ScheduleSlot 数据模型
一次选课的上课时间段
"""
from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from . import Base


class ScheduleSlot(Base):
    """上课时间表"""
    __tablename__ = 'schedule_slots'

    id = Column(Integer, primary_key=True, autoincrement=True)
    enrollment_id = Column(Integer, ForeignKey('enrollments.id', ondelete='CASCADE'), nullable=False, index=True)

    day = Column(String(10), nullable=False)         # "Lunes"
    start_time = Column(String(5), nullable=False)   # "08:00"
    end_time = Column(String(5), nullable=False)     # "09:30"

    enrollment = relationship("Enrollment", back_populates="schedule_slots")

    def __repr__(self):
        return f"<ScheduleSlot {self.id}: {self.day} {self.start_time}-{self.end_time}>"

    def __str__(self):
        return f"{self.day} {self.start_time}-{self.end_time}"
