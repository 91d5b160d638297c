from .errors import NotFoundError
from .student_service import StudentService
from .pensum_service import PensumService
from .enrollment_service import EnrollmentService
from .report_service import ReportService

__all__ = ['NotFoundError', 'StudentService', 'PensumService', 'EnrollmentService', 'ReportService']
