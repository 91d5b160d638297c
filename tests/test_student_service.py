from pensum_tracker.services import NotFoundError, StudentService

from tests.helpers import DatabaseTestCase


class StudentServiceTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.service = StudentService(self.session)

    def test_add_student_starts_empty(self):
        student = self.service.add_student("  Ana Pérez ")
        self.assertIsNotNone(student.id)
        self.assertEqual(student.name, "Ana Pérez")
        self.assertEqual(student.pensum_classes, [])
        self.assertEqual(student.semesters, [])

    def test_add_student_requires_name(self):
        with self.assertRaises(ValueError):
            self.service.add_student("   ")

    def test_list_students_by_name(self):
        self.service.add_student("Luis")
        self.service.add_student("Ana")
        self.assertEqual([s.name for s in self.service.list_students()], ["Ana", "Luis"])

    def test_get_missing_student(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.get_student(42)
        self.assertIsInstance(ctx.exception, LookupError)

    def test_delete_student(self):
        student = self.service.add_student("Ana")
        self.service.add_semester(student.id, "Primer Cuatrimestre 2024")
        self.assertTrue(self.service.delete_student(student.id))
        self.assertEqual(self.service.list_students(), [])


class SemesterServiceTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.service = StudentService(self.session)
        self.student = self.service.add_student("Ana")

    def test_semesters_listed_chronologically(self):
        for name in ("Segundo Cuatrimestre 2024", "Primer Cuatrimestre 2025",
                     "Cuatrimestre General", "Primer Cuatrimestre 2024"):
            self.service.add_semester(self.student.id, name)

        names = [s.name for s in self.service.list_semesters(self.student.id)]
        self.assertEqual(names, [
            "Cuatrimestre General",
            "Primer Cuatrimestre 2024",
            "Segundo Cuatrimestre 2024",
            "Primer Cuatrimestre 2025",
        ])
        self.assertEqual(self.service.latest_semester(self.student.id).name, "Primer Cuatrimestre 2025")

    def test_latest_semester_without_semesters(self):
        self.assertIsNone(self.service.latest_semester(self.student.id))

    def test_rename_changes_order(self):
        first = self.service.add_semester(self.student.id, "Primer Cuatrimestre 2024")
        self.service.add_semester(self.student.id, "Segundo Cuatrimestre 2024")
        self.service.rename_semester(first.id, "Tercer Cuatrimestre 2024")
        self.assertEqual(self.service.latest_semester(self.student.id).id, first.id)

    def test_rename_requires_name(self):
        semester = self.service.add_semester(self.student.id, "2024-01")
        with self.assertRaises(ValueError):
            self.service.rename_semester(semester.id, "")

    def test_delete_semester(self):
        semester_id = self.service.add_semester(self.student.id, "2024-01").id
        self.service.delete_semester(semester_id)
        self.assertEqual(self.service.list_semesters(self.student.id), [])
        with self.assertRaises(NotFoundError):
            self.service.get_semester(semester_id)

    def test_add_semester_for_missing_student(self):
        with self.assertRaises(NotFoundError):
            self.service.add_semester(999, "2024-01")
