"""
PensumClass 数据访问层
"""
from sqlalchemy import func
from pensum_tracker.models import PensumClass


class PensumRepository:
    """PensumClass 数据访问类"""

    def __init__(self, session):
        self.session = session

    def get_by_id(self, pensum_class_id):
        """根据 ID 获取 pensum 课程，不存在返回 None"""
        return self.session.get(PensumClass, pensum_class_id)

    def get_by_student(self, student_id):
        """获取某个学生的全部 pensum 课程"""
        return self.session.query(PensumClass).filter(
            PensumClass.student_id == student_id
        ).order_by(PensumClass.id).all()

    def find_by_name(self, student_id, name):
        """
        按名称查找（不区分大小写）

        Returns:
            PensumClass 对象或 None
        """
        return self.session.query(PensumClass).filter(
            PensumClass.student_id == student_id,
            func.lower(PensumClass.name) == name.strip().lower()
        ).first()

    def find_by_code(self, student_id, code):
        """按课程代码查找（不区分大小写）"""
        if not code:
            return None
        return self.session.query(PensumClass).filter(
            PensumClass.student_id == student_id,
            func.lower(PensumClass.code) == code.strip().lower()
        ).first()
