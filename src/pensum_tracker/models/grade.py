"""
成绩相关数据模型
GradeConcept：评分项及其满分
GradeEntry：某次选课在某个评分项上的分数
"""
from enum import Enum
from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from . import Base


class GradeConcept(str, Enum):
    """评分项（四项满分合计 100）"""
    ACUMULADO_P1 = 'ACUMULADO_P1'
    PRIMER_PARCIAL = 'PRIMER_PARCIAL'
    SEGUNDO_PARCIAL = 'SEGUNDO_PARCIAL'
    EXAMEN_FINAL = 'EXAMEN_FINAL'


GRADE_CONCEPT_INFO = {
    GradeConcept.ACUMULADO_P1: {'label': 'Acumulado Primer Parcial 15', 'max': 15},
    GradeConcept.PRIMER_PARCIAL: {'label': 'Primer Parcial 20', 'max': 20},
    GradeConcept.SEGUNDO_PARCIAL: {'label': 'Segundo Parcial 35', 'max': 35},
    GradeConcept.EXAMEN_FINAL: {'label': 'Examen Final 30', 'max': 30},
}


class GradeEntry(Base):
    """成绩表"""
    __tablename__ = 'grade_entries'

    # 复合主键：(选课, 评分项)
    enrollment_id = Column(
        Integer,
        ForeignKey('enrollments.id', ondelete='CASCADE'),
        primary_key=True
    )
    concept = Column(String(30), primary_key=True)  # GradeConcept 的值
    score = Column(Integer, nullable=False)

    enrollment = relationship("Enrollment", back_populates="grades")

    def __repr__(self):
        return f"<GradeEntry enrollment={self.enrollment_id} {self.concept}={self.score}>"
