import os
import tempfile
import warnings

from sqlalchemy.exc import SAWarning

from pensum_tracker.services import EnrollmentService, NotFoundError, PensumService, StudentService
from pensum_tracker.services.pensum_service import DEFAULT_SEMESTER_NAME

from tests.helpers import DatabaseTestCase


EXAMPLE_YAML = os.path.join(os.path.dirname(__file__), '..', 'data', 'pensum', 'example.yml')


def _write_temp(content):
    handle = tempfile.NamedTemporaryFile('w', suffix='.yml', delete=False, encoding='utf-8')
    with handle:
        handle.write(content)
    return handle.name


class ValidateTests(DatabaseTestCase):
    def test_example_file_is_valid(self):
        self.assertEqual(PensumService.validate_yaml(EXAMPLE_YAML), [])

    def test_missing_fields_reported(self):
        errors = PensumService.validate_data({'classes': [{'name': 'Cálculo I'}]})
        self.assertEqual(len(errors), 1)
        self.assertIn('classes -> 0', errors[0])
        self.assertIn('credits', errors[0])

    def test_bad_credits_and_extra_keys(self):
        errors = PensumService.validate_data({
            'classes': [{'name': 'Cálculo I', 'credits': 0, 'teacher': 'X'}]
        })
        self.assertEqual(len(errors), 2)

    def test_empty_class_list(self):
        self.assertTrue(PensumService.validate_data({'classes': []}))
        self.assertTrue(PensumService.validate_data(None))

    def test_broken_yaml(self):
        path = _write_temp("classes: [\n")
        try:
            errors = PensumService.validate_yaml(path)
        finally:
            os.remove(path)
        self.assertEqual(len(errors), 1)
        self.assertIn('YAML', errors[0])


class PensumClassTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.student = StudentService(self.session).add_student("Ana")
        self.service = PensumService(self.session)

    def test_add_with_generated_code(self):
        pensum_class = self.service.add_pensum_class(self.student.id, "Cálculo I", 4)
        self.assertTrue(pensum_class.code.startswith('MANUAL-'))
        self.assertEqual(len(pensum_class.code), len('MANUAL-') + 6)

    def test_duplicates_are_skipped(self):
        self.service.add_pensum_class(self.student.id, "Cálculo I", 4, code="MAT-101")
        self.assertIsNone(self.service.add_pensum_class(self.student.id, "cálculo i", 4))
        self.assertIsNone(self.service.add_pensum_class(self.student.id, "Otro", 4, code="mat-101"))
        self.assertEqual(len(self.service.list_pensum(self.student.id)), 1)

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            self.service.add_pensum_class(self.student.id, "", 4)
        for credits in (0, -1, True, "4", 2.5):
            with self.assertRaises(ValueError, msg=credits):
                self.service.add_pensum_class(self.student.id, "Física I", credits)

    def test_list_sorted_by_code(self):
        self.service.add_pensum_class(self.student.id, "Física I", 4, code="FIS-101")
        self.service.add_pensum_class(self.student.id, "Cálculo I", 4, code="MAT-101")
        self.service.add_pensum_class(self.student.id, "Ética", 2, code="HUM-110")
        codes = [pc.code for pc in self.service.list_pensum(self.student.id)]
        self.assertEqual(codes, ["FIS-101", "HUM-110", "MAT-101"])

    def test_add_classes_by_name(self):
        self.service.add_pensum_class(self.student.id, "Cálculo I", 4)
        created = self.service.add_classes_by_name(self.student.id, [
            {'name': 'CÁLCULO I', 'credits': 4},
            {'name': 'Física I', 'credits': 4},
            {'name': '  ', 'credits': 3},
        ])
        self.assertEqual([pc.name for pc in created], ['Física I'])
        self.assertTrue(created[0].code.startswith('IMPORT-'))

    def test_add_classes_by_name_is_all_or_nothing(self):
        with self.assertRaises(ValueError):
            self.service.add_classes_by_name(self.student.id, [
                {'name': 'Física I', 'credits': 3},
                {'name': 'Química', 'credits': 0},
                {'name': 'Ética', 'credits': 2},
            ])
        # 之后其他写操作的 commit 不能把半成品一起保存
        StudentService(self.session).add_semester(self.student.id, "2024-01")
        self.assertEqual(self.service.list_pensum(self.student.id), [])

    def test_missing_pensum_class(self):
        with self.assertRaises(NotFoundError):
            self.service.get_pensum_class(123)


class ImportTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.students = StudentService(self.session)
        self.student = self.students.add_student("Ana")
        self.service = PensumService(self.session)

    def test_import_example_file(self):
        stats = self.service.import_from_yaml(self.student.id, EXAMPLE_YAML)
        self.assertEqual(stats, {
            'pensum_created': 6,
            'pensum_matched': 0,
            'semesters_created': 3,
            'enrollments_created': 6,
            'enrollments_skipped': 0,
        })
        names = [s.name for s in self.students.list_semesters(self.student.id)]
        self.assertEqual(names, [
            DEFAULT_SEMESTER_NAME,
            "Primer Cuatrimestre 2024",
            "Segundo Cuatrimestre 2024",
        ])

    def test_import_emits_no_sqlalchemy_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error', SAWarning)
            self.service.import_from_yaml(self.student.id, EXAMPLE_YAML)
            self.service.import_from_yaml(self.student.id, EXAMPLE_YAML)

    def test_import_is_idempotent(self):
        self.service.import_from_yaml(self.student.id, EXAMPLE_YAML)
        stats = self.service.import_from_yaml(self.student.id, EXAMPLE_YAML)
        self.assertEqual(stats['pensum_created'], 0)
        self.assertEqual(stats['pensum_matched'], 6)
        self.assertEqual(stats['semesters_created'], 0)
        self.assertEqual(stats['enrollments_created'], 0)
        self.assertEqual(stats['enrollments_skipped'], 6)
        self.assertEqual(len(self.service.list_pensum(self.student.id)), 6)

    def test_classes_without_code_match_by_name(self):
        classes = [
            {'name': 'Taller', 'credits': 1, 'semester': '2024-01'},
            {'name': 'taller', 'credits': 1, 'semester': '2024-02'},
        ]
        stats = self.service.import_pensum(self.student.id, classes)
        self.assertEqual(stats['pensum_created'], 1)
        self.assertEqual(stats['pensum_matched'], 1)
        self.assertEqual(stats['enrollments_created'], 2)

    def test_same_class_twice_in_one_semester(self):
        classes = [
            {'name': 'Cálculo I', 'code': 'MAT-101', 'credits': 4, 'semester': '2024-01'},
            {'name': 'Cálculo I', 'code': 'MAT-101', 'credits': 4, 'semester': '2024-01'},
        ]
        stats = self.service.import_pensum(self.student.id, classes)
        self.assertEqual(stats['enrollments_created'], 1)
        self.assertEqual(stats['enrollments_skipped'], 1)

    def test_invalid_file_is_rejected(self):
        path = _write_temp("classes:\n  - name: Cálculo I\n")
        try:
            with self.assertRaises(ValueError):
                self.service.import_from_yaml(self.student.id, path)
        finally:
            os.remove(path)
        self.assertEqual(self.service.list_pensum(self.student.id), [])

    def test_failed_import_rolls_back(self):
        classes = [
            {'name': 'Cálculo I', 'code': 'MAT-101', 'credits': 4},
            {'name': 'Física I', 'code': 'FIS-101', 'credits': 0},
        ]
        with self.assertRaises(ValueError):
            self.service.import_pensum(self.student.id, classes)
        self.assertEqual(self.service.list_pensum(self.student.id), [])


class PensumStatusTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        students = StudentService(self.session)
        self.student = students.add_student("Ana")
        self.service = PensumService(self.session)
        self.enrollments = EnrollmentService(self.session)
        self.first = students.add_semester(self.student.id, "Primer Cuatrimestre 2024")
        self.second = students.add_semester(self.student.id, "Segundo Cuatrimestre 2024")
        self.calculo = self.service.add_pensum_class(self.student.id, "Cálculo I", 4, code="MAT-101")
        self.fisica = self.service.add_pensum_class(self.student.id, "Física I", 4, code="FIS-101")

    def _grade(self, enrollment, scores):
        for concept, score in scores.items():
            self.enrollments.update_grade(enrollment.id, concept, score)

    def test_status_uses_highest_attempt(self):
        [attempt] = self.enrollments.add_classes_to_semester(self.first.id, [self.calculo.id])
        self._grade(attempt, {'ACUMULADO_P1': 15, 'PRIMER_PARCIAL': 20, 'SEGUNDO_PARCIAL': 35})

        rows = {r['code']: r for r in self.service.pensum_status(self.student.id)}
        self.assertEqual(rows['MAT-101']['final_score'], 70)
        self.assertEqual(rows['MAT-101']['status'], 'Pendiente')
        self.assertIsNone(rows['FIS-101']['final_score'])
        self.assertEqual(rows['FIS-101']['status'], 'Pendiente')

        [retake] = self.enrollments.add_classes_to_semester(self.second.id, [self.calculo.id])
        self._grade(retake, {'ACUMULADO_P1': 15, 'PRIMER_PARCIAL': 20, 'SEGUNDO_PARCIAL': 25, 'EXAMEN_FINAL': 25})

        rows = {r['code']: r for r in self.service.pensum_status(self.student.id)}
        self.assertEqual(rows['MAT-101']['final_score'], 85)
        self.assertEqual(rows['MAT-101']['status'], 'Aprobada')

    def test_filters(self):
        [attempt] = self.enrollments.add_classes_to_semester(self.first.id, [self.calculo.id])
        self._grade(attempt, {'EXAMEN_FINAL': 30, 'SEGUNDO_PARCIAL': 35, 'PRIMER_PARCIAL': 20})

        approved = self.service.pensum_status(self.student.id, status='Aprobada')
        self.assertEqual([r['code'] for r in approved], ['MAT-101'])
        pending = self.service.pensum_status(self.student.id, status='Pendiente')
        self.assertEqual([r['code'] for r in pending], ['FIS-101'])
        in_second = self.service.pensum_status(self.student.id, semester_id=self.second.id)
        self.assertEqual(in_second, [])
