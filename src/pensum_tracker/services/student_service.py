"""
Student / Semester 业务逻辑服务
"""
from pensum_tracker.models import Student, Semester
from pensum_tracker.repositories import StudentRepository, SemesterRepository
from pensum_tracker.utils import sort_semesters
from .errors import NotFoundError


def _clean_name(name, what):
    name = (name or '').strip()
    if not name:
        raise ValueError(f"{what}名称不能为空")
    return name


class StudentService:
    """学生和学期管理"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 数据库会话
        """
        self.session = session
        self.students = StudentRepository(session)
        self.semesters = SemesterRepository(session)

    # ------------------------------------------------------------------
    # 学生
    # ------------------------------------------------------------------

    def add_student(self, name):
        """
        新建学生（pensum 和学期均为空）

        Returns:
            Student: 新建的学生

        Raises:
            ValueError: 名称为空
        """
        student = Student(name=_clean_name(name, '学生'))
        if not self.students.save(student):
            raise RuntimeError(f"保存学生失败: {student.name}")
        return student

    def get_student(self, student_id):
        """
        Raises:
            NotFoundError: 学生不存在
        """
        student = self.students.get_by_id(student_id)
        if student is None:
            raise NotFoundError('Student', student_id)
        return student

    def list_students(self):
        return self.students.get_all()

    def delete_student(self, student_id):
        """删除学生及其所有数据（不可恢复）"""
        student = self.get_student(student_id)
        return self.students.delete(student)

    # ------------------------------------------------------------------
    # 学期
    # ------------------------------------------------------------------

    def get_semester(self, semester_id):
        semester = self.semesters.get_by_id(semester_id)
        if semester is None:
            raise NotFoundError('Semester', semester_id)
        return semester

    def add_semester(self, student_id, name):
        """
        为学生新建学期

        Args:
            student_id: 学生 ID
            name: 学期名称，如 "Primer Cuatrimestre 2024"

        Returns:
            Semester: 新建的学期
        """
        student = self.get_student(student_id)
        semester = Semester(name=_clean_name(name, '学期'))
        student.semesters.append(semester)
        self.session.commit()
        return semester

    def rename_semester(self, semester_id, name):
        semester = self.get_semester(semester_id)
        semester.name = _clean_name(name, '学期')
        self.session.commit()
        return semester

    def delete_semester(self, semester_id):
        """删除学期及其选课记录（pensum 不受影响）"""
        semester = self.get_semester(semester_id)
        self.session.delete(semester)
        self.session.commit()

    def list_semesters(self, student_id):
        """
        获取学生的所有学期，按名称推断的时间顺序排列

        Returns:
            list[Semester]: 从早到晚
        """
        self.get_student(student_id)
        return sort_semesters(self.semesters.get_by_student(student_id), key=lambda s: s.name)

    def latest_semester(self, student_id):
        """
        最近的学期（时间顺序中的最后一个），没有学期时返回 None
        """
        semesters = self.list_semesters(student_id)
        return semesters[-1] if semesters else None
