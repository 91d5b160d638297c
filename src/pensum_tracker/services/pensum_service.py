"""
Pensum 业务逻辑服务
负责 pensum 课程的添加、从 YAML 文件批量导入，以及课程完成状态统计
"""
import json
import os
import uuid
import yaml
from jsonschema import Draft7Validator
from pensum_tracker.models import PensumClass, Semester, Enrollment
from pensum_tracker.repositories import PensumRepository
from pensum_tracker.utils import collation_key
from pensum_tracker.utils.grade_utils import has_grades, final_score, is_approved
from .errors import NotFoundError
from .student_service import StudentService


_SCHEMA_PATH = os.path.join(
    os.path.dirname(__file__),       # src/pensum_tracker/services/
    '..', 'data', 'pensum_schema.json'
)

_SCHEMA = None  # 延迟加载

DEFAULT_SEMESTER_NAME = 'Cuatrimestre General'

STATUS_APPROVED = 'Aprobada'
STATUS_PENDING = 'Pendiente'


def _load_schema():
    """加载 JSON Schema（只读一次，缓存在模块级别）"""
    path = os.path.normpath(_SCHEMA_PATH)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def generate_code(prefix):
    """生成 "MANUAL-3F9A1C" 这样的课程代码"""
    return f"{prefix}-{uuid.uuid4().hex[:6].upper()}"


def validate_credits(credits):
    if isinstance(credits, bool) or not isinstance(credits, int) or credits < 1:
        raise ValueError(f"学分必须是正整数: {credits!r}")
    return credits


class PensumService:
    """Pensum 管理和导入服务"""

    @staticmethod
    def validate_data(data):
        """
        校验已解析的导入数据是否符合 schema

        Returns:
            list[str]: 校验错误列表，空列表表示通过
        """
        global _SCHEMA
        if _SCHEMA is None:
            _SCHEMA = _load_schema()

        validator = Draft7Validator(_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

        messages = []
        for err in errors:
            path = ' -> '.join(str(p) for p in err.absolute_path) or '(root)'
            messages.append(f"  [{path}] {err.message}")

        return messages

    @staticmethod
    def validate_yaml(yaml_path):
        """
        校验一个 pensum YAML 文件是否符合 schema

        Args:
            yaml_path: YAML 文件路径

        Returns:
            list[str]: 校验错误列表，空列表表示通过

        Raises:
            FileNotFoundError: YAML 文件不存在
        """
        with open(yaml_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                return [f"  [(root)] YAML 解析失败: {e}"]

        return PensumService.validate_data(data)

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 数据库会话
        """
        self.session = session
        self.pensum = PensumRepository(session)
        self.student_service = StudentService(session)

    def get_pensum_class(self, pensum_class_id):
        pensum_class = self.pensum.get_by_id(pensum_class_id)
        if pensum_class is None:
            raise NotFoundError('PensumClass', pensum_class_id)
        return pensum_class

    def list_pensum(self, student_id):
        """学生的全部 pensum 课程，按代码（没有代码时按名称）排序"""
        self.student_service.get_student(student_id)
        return sorted(
            self.pensum.get_by_student(student_id),
            key=lambda pc: collation_key(pc.code or pc.name)
        )

    def add_pensum_class(self, student_id, name, credits, code=None):
        """
        手动添加一门 pensum 课程

        代码或名称（均不区分大小写）与已有课程重复时不添加。

        Args:
            student_id: 学生 ID
            name: 课程名称
            credits: 学分
            code: 课程代码，不传则生成 "MANUAL-XXXXXX"

        Returns:
            PensumClass 或 None（重复时）
        """
        student = self.student_service.get_student(student_id)
        name = (name or '').strip()
        if not name:
            raise ValueError("课程名称不能为空")
        validate_credits(credits)
        code = (code or '').strip()

        duplicate = self.pensum.find_by_name(student_id, name)
        if duplicate is None and code:
            duplicate = self.pensum.find_by_code(student_id, code)
        if duplicate is not None:
            print(f"⚠️ 课程已存在于 pensum 中，跳过: {duplicate}")
            return None

        pensum_class = PensumClass(
            name=name,
            credits=credits,
            code=code or generate_code('MANUAL'),
        )
        student.pensum_classes.append(pensum_class)
        self.session.commit()
        return pensum_class

    def add_classes_by_name(self, student_id, classes):
        """
        批量添加课程到 pensum，名称已存在的跳过

        Args:
            student_id: 学生 ID
            classes: [{'name': ..., 'credits': ...}, ...]

        Returns:
            list[PensumClass]: 新增的课程
        """
        student = self.student_service.get_student(student_id)
        existing_names = {pc.name.lower() for pc in student.pensum_classes}

        # 先全部校验，再写入
        pending = []
        for item in classes:
            name = (item.get('name') or '').strip()
            if not name or name.lower() in existing_names:
                continue
            pending.append((name, validate_credits(item.get('credits'))))
            existing_names.add(name.lower())

        created = []
        for name, credits in pending:
            pensum_class = PensumClass(name=name, credits=credits, code=generate_code('IMPORT'))
            student.pensum_classes.append(pensum_class)
            created.append(pensum_class)

        self.session.commit()
        return created

    def import_pensum(self, student_id, parsed_classes):
        """
        导入带学期信息的课程列表（幂等）

        流程：
        1. 按代码匹配已有 pensum 课程（没有代码时按名称），不存在则新建
        2. 按学期名称分组（空名称归入 "Cuatrimestre General"）
        3. 学期不存在则新建
        4. 每门课在每个学期只登记一次

        Args:
            student_id: 学生 ID
            parsed_classes: [{'name', 'code', 'credits', 'semester'}, ...]

        Returns:
            dict: 统计信息
        """
        student = self.student_service.get_student(student_id)

        stats = {
            'pensum_created': 0,
            'pensum_matched': 0,
            'semesters_created': 0,
            'enrollments_created': 0,
            'enrollments_skipped': 0,
        }

        try:
            # 1. pensum 课程
            by_code = {pc.code.lower(): pc for pc in student.pensum_classes if pc.code}
            by_name = {pc.name.lower(): pc for pc in student.pensum_classes}
            resolved = []
            for item in parsed_classes:
                name = item['name'].strip()
                code = (item.get('code') or '').strip()
                if code:
                    pensum_class = by_code.get(code.lower())
                else:
                    pensum_class = by_name.get(name.lower())

                if pensum_class is None:
                    pensum_class = PensumClass(
                        name=name,
                        code=code or None,
                        credits=validate_credits(item['credits']),
                    )
                    student.pensum_classes.append(pensum_class)
                    if code:
                        by_code[code.lower()] = pensum_class
                    by_name.setdefault(name.lower(), pensum_class)
                    stats['pensum_created'] += 1
                else:
                    stats['pensum_matched'] += 1

                semester_name = (item.get('semester') or '').strip() or DEFAULT_SEMESTER_NAME
                resolved.append((semester_name, pensum_class))
            self.session.flush()

            # 2. 按学期分组并登记选课
            semesters_by_name = {s.name: s for s in student.semesters}
            for semester_name, pensum_class in resolved:
                semester = semesters_by_name.get(semester_name)
                if semester is None:
                    semester = Semester(name=semester_name)
                    student.semesters.append(semester)
                    semesters_by_name[semester_name] = semester
                    stats['semesters_created'] += 1

                if any(e.pensum_class is pensum_class for e in semester.enrollments):
                    stats['enrollments_skipped'] += 1
                    continue
                self.session.add(Enrollment(semester=semester, pensum_class=pensum_class))
                stats['enrollments_created'] += 1

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return stats

    def import_from_yaml(self, student_id, yaml_path):
        """
        从 YAML 文件导入 pensum

        Raises:
            ValueError: YAML 文件校验失败
        """
        errors = PensumService.validate_yaml(yaml_path)
        if errors:
            error_msg = '\n'.join(errors)
            raise ValueError(f"YAML 文件校验失败：{yaml_path}\n{error_msg}")

        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        print(f"\n{'='*60}")
        print(f"导入 pensum: {os.path.basename(yaml_path)} → 学生 {student_id}")
        print(f"{'='*60}")

        stats = self.import_pensum(student_id, data['classes'])

        print(f"✓ 导入完成！")
        print(f"  Pensum - 新建: {stats['pensum_created']}, 已存在: {stats['pensum_matched']}")
        print(f"  学期 - 新建: {stats['semesters_created']}")
        print(f"  选课 - 新建: {stats['enrollments_created']}, 跳过: {stats['enrollments_skipped']}")
        return stats

    def pensum_status(self, student_id, semester_id=None, status=None):
        """
        pensum 完成情况

        每门课取所有修读记录中的最高最终成绩；最高成绩 > 70 为 "Aprobada"，
        否则（含从未修读）为 "Pendiente"。

        Args:
            student_id: 学生 ID
            semester_id: 只看该学期修读过的课程
            status: 只看该状态（"Aprobada" / "Pendiente"）

        Returns:
            list[dict]: 按课程代码/名称排序
        """
        rows = []
        semester_class_ids = None
        if semester_id is not None:
            semester = self.student_service.get_semester(semester_id)
            semester_class_ids = {e.pensum_class_id for e in semester.enrollments}

        for pensum_class in self.list_pensum(student_id):
            if semester_class_ids is not None and pensum_class.id not in semester_class_ids:
                continue

            highest = None
            for enrollment in pensum_class.enrollments:
                scores = enrollment.scores
                if not has_grades(scores):
                    continue
                score = final_score(scores)
                if highest is None or score > highest:
                    highest = score

            row_status = STATUS_APPROVED if is_approved(highest) else STATUS_PENDING
            if status is not None and row_status != status:
                continue

            rows.append({
                'id': pensum_class.id,
                'code': pensum_class.code,
                'name': pensum_class.name,
                'credits': pensum_class.credits,
                'final_score': highest,
                'status': row_status,
            })

        return rows
