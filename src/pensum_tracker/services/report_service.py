"""
统计报表服务
学期成绩单、总 GPA、周课表
"""
from pensum_tracker.utils.grade_utils import (
    has_grades, final_score, letter_grade, grade_points, gpa, NO_GRADE
)
from pensum_tracker.utils.schedule_utils import slot_sort_key
from .student_service import StudentService


class ReportService:
    """只读统计，不修改任何数据"""

    def __init__(self, session):
        self.session = session
        self.student_service = StudentService(session)

    def semester_report(self, semester_id):
        """
        学期成绩单

        没有任何成绩的课程：final_score 为 None，字母为 '-'，不计入 GPA。

        Returns:
            dict: {
                'semester': 学期名称,
                'classes': [{enrollment_id, name, credits, scores,
                             final_score, letter, points, quality_points}, ...],
                'total_credits': 学期总学分（含无成绩课程）,
                'total_quality_points': 绩点×学分之和,
                'gpa': 学期 GPA
            }
        """
        semester = self.student_service.get_semester(semester_id)

        classes = []
        total_quality_points = 0.0
        for enrollment in semester.enrollments:
            pensum_class = enrollment.pensum_class
            scores = enrollment.scores
            graded = has_grades(scores)
            score = final_score(scores) if graded else None
            points = grade_points(score) if graded else 0.0
            quality_points = points * pensum_class.credits
            total_quality_points += quality_points

            classes.append({
                'enrollment_id': enrollment.id,
                'name': pensum_class.name,
                'credits': pensum_class.credits,
                'scores': scores,
                'final_score': score,
                'letter': letter_grade(score) if graded else NO_GRADE,
                'points': points,
                'quality_points': quality_points,
            })

        return {
            'semester': semester.name,
            'classes': classes,
            'total_credits': sum(c['credits'] for c in classes),
            'total_quality_points': total_quality_points,
            'gpa': gpa((c['scores'], c['credits']) for c in classes),
        }

    def overall_gpa(self, student_id):
        """学生所有学期所有课程的总 GPA"""
        student = self.student_service.get_student(student_id)
        rows = [
            (enrollment.scores, enrollment.pensum_class.credits)
            for semester in student.semesters
            for enrollment in semester.enrollments
        ]
        return gpa(rows)

    def weekly_schedule(self, semester_id):
        """
        学期周课表

        Returns:
            list[dict]: [{day, start_time, end_time, name}, ...]，按星期、开始时间排序
        """
        semester = self.student_service.get_semester(semester_id)
        slots = [
            {
                'day': slot.day,
                'start_time': slot.start_time,
                'end_time': slot.end_time,
                'name': enrollment.pensum_class.name,
            }
            for enrollment in semester.enrollments
            for slot in enrollment.schedule_slots
        ]
        return sorted(slots, key=lambda s: slot_sort_key(s['day'], s['start_time']))
