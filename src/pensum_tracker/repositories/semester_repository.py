"""
Semester / Enrollment 数据访问层
"""
from pensum_tracker.models import Semester, Enrollment


class SemesterRepository:
    """Semester 和 Enrollment 数据访问类"""

    def __init__(self, session):
        self.session = session

    def get_by_id(self, semester_id):
        """根据 ID 获取学期，不存在返回 None"""
        return self.session.get(Semester, semester_id)

    def get_by_student(self, student_id):
        """
        获取某个学生的所有学期（按创建顺序，不是时间顺序）

        时间顺序请使用 StudentService.list_semesters
        """
        return self.session.query(Semester).filter(
            Semester.student_id == student_id
        ).order_by(Semester.id).all()

    def get_enrollment(self, enrollment_id):
        """根据 ID 获取选课记录"""
        return self.session.get(Enrollment, enrollment_id)

    def find_enrollment(self, semester_id, pensum_class_id):
        """查找某学期中某门课的选课记录"""
        return self.session.query(Enrollment).filter(
            Enrollment.semester_id == semester_id,
            Enrollment.pensum_class_id == pensum_class_id
        ).first()
