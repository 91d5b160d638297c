"""
Student 数据访问层
负责所有与 Student 表相关的数据库操作
"""
from sqlalchemy.exc import SQLAlchemyError
from pensum_tracker.models import Student


class StudentRepository:
    """Student 数据访问类"""

    def __init__(self, session):
        """
        初始化 Repository

        Args:
            session: SQLAlchemy 数据库会话
        """
        self.session = session

    def save(self, student):
        """
        保存或更新学生

        Args:
            student: Student 对象

        Returns:
            bool: 是否保存成功
        """
        try:
            self.session.add(student)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 保存学生失败 {student.name}: {e}")
            return False

    def delete(self, student):
        """
        删除学生（级联删除 pensum 和所有学期）

        Returns:
            bool: 是否删除成功
        """
        try:
            self.session.delete(student)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 删除学生失败 {student.id}: {e}")
            return False

    def get_by_id(self, student_id):
        """
        根据 ID 获取学生

        Returns:
            Student 对象或 None
        """
        return self.session.get(Student, student_id)

    def get_all(self):
        """获取所有学生，按名称排序"""
        return self.session.query(Student).order_by(Student.name, Student.id).all()
