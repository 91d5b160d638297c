"""
主程序入口
学生 pensum、学期、成绩管理的命令行工具
"""
import sys
import argparse
from pensum_tracker.database import Database
from pensum_tracker.models import Base, GradeConcept, GRADE_CONCEPT_INFO
from pensum_tracker.services import (
    NotFoundError, StudentService, PensumService, EnrollmentService, ReportService
)
from pensum_tracker.utils.schedule_utils import format_time_12_hour


def _class_entry(value):
    """'Cálculo I:4' → {'name': 'Cálculo I', 'credits': 4}"""
    name, sep, credits = value.rpartition(':')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"格式应为 名称:学分，例如 \"Cálculo I:4\": {value!r}")
    try:
        return {'name': name.strip(), 'credits': int(credits)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"学分必须是整数: {value!r}") from None


def _add_schedule_argument(parser):
    parser.add_argument(
        '--schedule',
        nargs=3,
        action='append',
        metavar=('DAY', 'START', 'END'),
        help='上课时间段，可重复，如 --schedule Lunes 08:00 10:00'
    )


def _schedule(args):
    return [
        {'day': day, 'start_time': start, 'end_time': end}
        for day, start, end in args.schedule or []
    ]


def parse_args(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog='pensum-tracker',
        description='Pensum 与成绩跟踪系统',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  pensum-tracker init-db
  pensum-tracker add-student "Ana Pérez"
  pensum-tracker import --student 1 data/pensum/example.yml
  pensum-tracker semesters --student 1
  pensum-tracker take-class --semester 2 --credits 4 --schedule Lunes 08:00 10:00 "Cálculo II"
  pensum-tracker grade --enrollment 3 PRIMER_PARCIAL 18
  pensum-tracker report --semester 2
        """
    )
    parser.add_argument(
        '--database-url',
        help='数据库连接 URL（默认读取 .env / DATABASE_URL，否则使用 sqlite:///pensum.db）'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('init-db', help='创建数据表')

    p = sub.add_parser('add-student', help='新建学生')
    p.add_argument('name')

    sub.add_parser('students', help='列出所有学生')

    p = sub.add_parser('delete-student', help='删除学生及其全部数据')
    p.add_argument('--student', type=int, required=True)

    p = sub.add_parser('add-semester', help='新建学期')
    p.add_argument('--student', type=int, required=True)
    p.add_argument('name', help='学期名称，如 "Primer Cuatrimestre 2024"')

    p = sub.add_parser('semesters', help='按时间顺序列出学期')
    p.add_argument('--student', type=int, required=True)

    p = sub.add_parser('rename-semester', help='重命名学期')
    p.add_argument('--semester', type=int, required=True)
    p.add_argument('name')

    p = sub.add_parser('delete-semester', help='删除学期及其选课记录')
    p.add_argument('--semester', type=int, required=True)

    p = sub.add_parser('add-class', help='向 pensum 添加课程')
    p.add_argument('--student', type=int, required=True)
    p.add_argument('--credits', type=int, required=True)
    p.add_argument('--code')
    p.add_argument('name')

    p = sub.add_parser('add-classes', help='批量向 pensum 添加课程，已有同名课程跳过')
    p.add_argument('--student', type=int, required=True)
    p.add_argument('classes', nargs='+', type=_class_entry, metavar='NAME:CREDITS')

    p = sub.add_parser('enroll', help='把 pensum 课程加入学期')
    p.add_argument('--semester', type=int, required=True)
    p.add_argument('pensum_ids', nargs='+', type=int, metavar='PENSUM_ID')

    p = sub.add_parser('take-class', help='按名称把课程（带课表）加入学期，pensum 中没有则新建')
    p.add_argument('--semester', type=int, required=True)
    p.add_argument('--credits', type=int, required=True)
    _add_schedule_argument(p)
    p.add_argument('name')

    p = sub.add_parser('edit-class', help='修改课程名称、学分和课表')
    p.add_argument('--enrollment', type=int, required=True)
    p.add_argument('--credits', type=int, required=True)
    _add_schedule_argument(p)
    p.add_argument('name')

    p = sub.add_parser('remove-class', help='把课程从学期中移除（保留在 pensum 中）')
    p.add_argument('--enrollment', type=int, required=True)

    p = sub.add_parser('grade', help='录入分数（不给分数则删除该项）')
    p.add_argument('--enrollment', type=int, required=True)
    p.add_argument('concept', choices=[c.value for c in GradeConcept])
    p.add_argument('score', type=int, nargs='?')

    p = sub.add_parser('pensum', help='pensum 完成情况')
    p.add_argument('--student', type=int, required=True)
    p.add_argument('--semester', type=int)
    p.add_argument('--status', choices=['Aprobada', 'Pendiente'])

    p = sub.add_parser('report', help='学期成绩单和课表')
    p.add_argument('--semester', type=int, required=True)

    p = sub.add_parser('gpa', help='总 GPA')
    p.add_argument('--student', type=int, required=True)

    p = sub.add_parser('import', help='从 YAML 文件导入 pensum')
    p.add_argument('--student', type=int, required=True)
    p.add_argument('file')

    p = sub.add_parser('validate', help='校验 YAML 文件（不需要数据库）')
    p.add_argument('files', nargs='+')

    return parser.parse_args(argv)


def _print_header(title):
    print("=" * 60)
    print(title)
    print("=" * 60)


def run_validate(files):
    """校验 YAML 文件，全部通过返回 True"""
    _print_header("YAML 文件 Schema 校验")
    all_passed = True
    for path in files:
        try:
            errors = PensumService.validate_yaml(path)
        except FileNotFoundError:
            errors = [f"  文件不存在: {path}"]
        if errors:
            all_passed = False
            print(f"✗ {path}")
            for msg in errors:
                print(msg)
        else:
            print(f"✓ {path}")
    print()
    if all_passed:
        print("所有文件校验通过 ✓")
    else:
        print("部分文件存在错误，请修复后再导入 ✗")
    return all_passed


def _print_report(report_service, semester_id):
    report = report_service.semester_report(semester_id)
    _print_header(f"成绩单: {report['semester']}")
    for row in report['classes']:
        score = '-' if row['final_score'] is None else row['final_score']
        print(f"  [{row['enrollment_id']}] {row['name']:40s} {row['credits']:2d} cr  "
              f"{score!s:>4}  {row['letter']}  {row['quality_points']:.2f}")
    print("-" * 60)
    print(f"  学分: {report['total_credits']}  "
          f"绩点合计: {report['total_quality_points']:.2f}  GPA: {report['gpa']:.2f}")

    slots = report_service.weekly_schedule(semester_id)
    if slots:
        print("\n课表:")
        for slot in slots:
            print(f"  {slot['day']:10s} {format_time_12_hour(slot['start_time'])} - "
                  f"{format_time_12_hour(slot['end_time'])}  {slot['name']}")


def run_command(args, session):
    """执行需要数据库的子命令"""
    students = StudentService(session)
    pensum = PensumService(session)
    enrollments = EnrollmentService(session)
    reports = ReportService(session)

    if args.command == 'add-student':
        student = students.add_student(args.name)
        print(f"✓ 新建学生 [{student.id}] {student.name}")

    elif args.command == 'students':
        for student in students.list_students():
            print(f"  [{student.id}] {student.name}")

    elif args.command == 'add-semester':
        semester = students.add_semester(args.student, args.name)
        print(f"✓ 新建学期 [{semester.id}] {semester.name}")

    elif args.command == 'semesters':
        for semester in students.list_semesters(args.student):
            print(f"  [{semester.id}] {semester.name} ({len(semester.enrollments)} 门课)")

    elif args.command == 'add-class':
        pensum_class = pensum.add_pensum_class(args.student, args.name, args.credits, args.code)
        if pensum_class is not None:
            print(f"✓ 添加课程 [{pensum_class.id}] {pensum_class}")

    elif args.command == 'enroll':
        created = enrollments.add_classes_to_semester(args.semester, args.pensum_ids)
        for enrollment in created:
            print(f"✓ 选课 [{enrollment.id}] {enrollment.pensum_class.name}")

    elif args.command == 'delete-student':
        if students.delete_student(args.student):
            print(f"✓ 已删除学生 {args.student}")

    elif args.command == 'rename-semester':
        semester = students.rename_semester(args.semester, args.name)
        print(f"✓ 学期 [{semester.id}] 重命名为 {semester.name}")

    elif args.command == 'delete-semester':
        students.delete_semester(args.semester)
        print(f"✓ 已删除学期 {args.semester}")

    elif args.command == 'add-classes':
        created = pensum.add_classes_by_name(args.student, args.classes)
        for pensum_class in created:
            print(f"✓ 添加课程 [{pensum_class.id}] {pensum_class}")
        print(f"共新增 {len(created)} 门，跳过 {len(args.classes) - len(created)} 门")

    elif args.command == 'take-class':
        enrollment = enrollments.add_class_by_name(
            args.semester, args.name, args.credits, _schedule(args)
        )
        print(f"✓ 选课 [{enrollment.id}] {enrollment.pensum_class.name} "
              f"({len(enrollment.schedule_slots)} 个时间段)")

    elif args.command == 'edit-class':
        enrollment = enrollments.edit_class(
            args.enrollment, args.name, args.credits, _schedule(args)
        )
        print(f"✓ 已修改 [{enrollment.id}] {enrollment.pensum_class.name} "
              f"{enrollment.pensum_class.credits} cr")

    elif args.command == 'remove-class':
        enrollments.remove_class(args.enrollment)
        print(f"✓ 已从学期中移除选课 {args.enrollment}")

    elif args.command == 'grade':
        scores = enrollments.update_grade(args.enrollment, args.concept, args.score)
        for concept in GradeConcept:
            value = scores.get(concept.value)
            label = GRADE_CONCEPT_INFO[concept]['label']
            print(f"  {label:30s} {'-' if value is None else value}")

    elif args.command == 'pensum':
        for row in pensum.pensum_status(args.student, args.semester, args.status):
            score = '-' if row['final_score'] is None else row['final_score']
            print(f"  [{row['id']}] {row['code'] or '':14s} {row['name']:40s} "
                  f"{row['credits']:2d} cr  {score!s:>4}  {row['status']}")

    elif args.command == 'report':
        _print_report(reports, args.semester)

    elif args.command == 'gpa':
        student = students.get_student(args.student)
        print(f"{student.name} - GPA 总计: {reports.overall_gpa(args.student):.2f}")

    elif args.command == 'import':
        pensum.import_from_yaml(args.student, args.file)


def main(argv=None):
    """主函数，返回进程退出码"""
    args = parse_args(argv)

    if args.command == 'validate':
        return 0 if run_validate(args.files) else 1

    try:
        db = Database(args.database_url)
    except ValueError as e:
        print(f"✗ {e}")
        return 1

    if args.command == 'init-db':
        if not db.test_connection() or not db.create_tables():
            print("\n数据表创建失败，程序终止")
            return 1
        return 0

    # 表不存在时自动创建
    Base.metadata.create_all(db.engine)
    session = db.get_session()
    try:
        run_command(args, session)
    except (NotFoundError, ValueError) as e:
        print(f"✗ {e}")
        return 1
    finally:
        # 关闭会话
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
