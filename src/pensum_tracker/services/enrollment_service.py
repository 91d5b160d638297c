"""
Enrollment 业务逻辑服务
学期内的选课、课表和成绩录入
"""
from pensum_tracker.models import (
    PensumClass, Enrollment, ScheduleSlot, GradeEntry,
    GradeConcept, GRADE_CONCEPT_INFO
)
from pensum_tracker.repositories import PensumRepository, SemesterRepository
from pensum_tracker.utils.schedule_utils import validate_slot
from .errors import NotFoundError
from .pensum_service import generate_code, validate_credits
from .student_service import StudentService


def validate_score(concept, score):
    """
    校验某个评分项的分数

    Args:
        concept: GradeConcept 或其字符串值
        score: 整数分数，0 <= score <= 该项满分

    Returns:
        GradeConcept: 标准化后的评分项

    Raises:
        ValueError: 评分项不存在或分数超出范围
    """
    try:
        concept = GradeConcept(concept)
    except ValueError:
        valid = ', '.join(c.value for c in GradeConcept)
        raise ValueError(f"Invalid grade concept: {concept!r}. Must be one of: {valid}") from None

    maximum = GRADE_CONCEPT_INFO[concept]['max']
    if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= maximum:
        raise ValueError(f"{concept.value} 分数必须是 0 到 {maximum} 之间的整数: {score!r}")
    return concept


def _build_slots(schedule):
    slots = []
    for item in schedule or []:
        validate_slot(item['day'], item['start_time'], item['end_time'])
        slots.append(ScheduleSlot(
            day=item['day'],
            start_time=item['start_time'],
            end_time=item['end_time'],
        ))
    return slots


class EnrollmentService:
    """选课、课表和成绩管理"""

    def __init__(self, session):
        self.session = session
        self.pensum = PensumRepository(session)
        self.semesters = SemesterRepository(session)
        self.student_service = StudentService(session)

    def get_enrollment(self, enrollment_id):
        enrollment = self.semesters.get_enrollment(enrollment_id)
        if enrollment is None:
            raise NotFoundError('Enrollment', enrollment_id)
        return enrollment

    def add_classes_to_semester(self, semester_id, pensum_class_ids):
        """
        从 pensum 中选课到学期，已经在该学期的课程跳过

        先检查全部课程 ID，任何一个不存在时不做任何修改。

        Args:
            semester_id: 学期 ID
            pensum_class_ids: pensum 课程 ID 列表（必须属于同一个学生）

        Returns:
            list[Enrollment]: 新建的选课记录

        Raises:
            NotFoundError: 学期或某门课程不存在
        """
        semester = self.student_service.get_semester(semester_id)

        pensum_classes = []
        for pensum_class_id in pensum_class_ids:
            pensum_class = self.pensum.get_by_id(pensum_class_id)
            if pensum_class is None or pensum_class.student_id != semester.student_id:
                raise NotFoundError('PensumClass', pensum_class_id)
            pensum_classes.append(pensum_class)

        enrolled_ids = {e.pensum_class_id for e in semester.enrollments}
        created = []
        for pensum_class in pensum_classes:
            if pensum_class.id in enrolled_ids:
                print(f"⚠️ {pensum_class.name} 已在 {semester.name} 中，跳过")
                continue
            enrollment = Enrollment(semester=semester, pensum_class=pensum_class)
            self.session.add(enrollment)
            created.append(enrollment)
            enrolled_ids.add(pensum_class.id)

        self.session.commit()
        return created

    def add_class_by_name(self, semester_id, name, credits, schedule=None):
        """
        按名称把一门课（带课表）加入学期

        pensum 中已有同名课程（不区分大小写）时直接使用，否则新建。

        Args:
            semester_id: 学期 ID
            name: 课程名称
            credits: 学分（仅在新建 pensum 课程时使用）
            schedule: [{'day', 'start_time', 'end_time'}, ...]

        Returns:
            Enrollment: 选课记录（已存在时返回原记录，课表被替换）

        Raises:
            ValueError: 名称为空、学分或课表不合法
        """
        semester = self.student_service.get_semester(semester_id)
        name = (name or '').strip()
        if not name:
            raise ValueError("课程名称不能为空")
        slots = _build_slots(schedule)

        pensum_class = self.pensum.find_by_name(semester.student_id, name)
        if pensum_class is None:
            pensum_class = PensumClass(
                student_id=semester.student_id,
                name=name,
                credits=validate_credits(credits),
                code=generate_code('IMPORT'),
            )
            self.session.add(pensum_class)
            self.session.flush()

        enrollment = self.semesters.find_enrollment(semester.id, pensum_class.id)
        if enrollment is None:
            enrollment = Enrollment(semester=semester, pensum_class=pensum_class)
            self.session.add(enrollment)
        enrollment.schedule_slots = slots

        self.session.commit()
        return enrollment

    def edit_class(self, enrollment_id, name, credits, schedule):
        """
        修改课程：名称和学分写回 pensum 课程，课表整体替换

        Returns:
            Enrollment
        """
        enrollment = self.get_enrollment(enrollment_id)
        name = (name or '').strip()
        if not name:
            raise ValueError("课程名称不能为空")
        validate_credits(credits)
        slots = _build_slots(schedule)

        enrollment.pensum_class.name = name
        enrollment.pensum_class.credits = credits
        enrollment.schedule_slots = slots
        self.session.commit()
        return enrollment

    def remove_class(self, enrollment_id):
        """
        把课程从学期中移除（课程仍保留在 pensum 中）
        """
        enrollment = self.get_enrollment(enrollment_id)
        self.session.delete(enrollment)
        self.session.commit()

    def update_grade(self, enrollment_id, concept, score):
        """
        录入、修改或删除某个评分项的分数

        Args:
            enrollment_id: 选课 ID
            concept: GradeConcept 或其字符串值
            score: 分数；None 表示删除该项

        Returns:
            dict: 更新后的 {concept: score}
        """
        enrollment = self.get_enrollment(enrollment_id)

        if score is None:
            value = getattr(concept, 'value', concept)
            for entry in [g for g in enrollment.grades if g.concept == value]:
                enrollment.grades.remove(entry)
            self.session.commit()
            return enrollment.scores

        concept = validate_score(concept, score)
        entry = next((g for g in enrollment.grades if g.concept == concept.value), None)
        if entry is None:
            enrollment.grades.append(GradeEntry(concept=concept.value, score=score))
        else:
            entry.score = score
        self.session.commit()
        return enrollment.scores

    def scores(self, enrollment_id):
        """{concept: score}"""
        return self.get_enrollment(enrollment_id).scores
