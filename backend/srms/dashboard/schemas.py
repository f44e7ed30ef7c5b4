from typing import List, Optional

from srms.schemas import CamelModel


class GenderCounts(CamelModel):
    male: int = 0
    female: int = 0
    other: int = 0


class StudentBrief(CamelModel):
    id: int
    student_system_id: str
    name: str
    symbol_no: str
    grade: int
    gpa: Optional[float] = None


class GradeWiseSummary(CamelModel):
    grade: int
    student_count: int
    average_gpa: Optional[float] = None


class SubjectPopularity(CamelModel):
    subject_id: int
    name: str
    student_count: int


class SchoolSummary(CamelModel):
    school_id: int
    academic_year: int
    total_students: int
    gender_counts: GenderCounts
    graded_count: int
    ng_count: int
    average_gpa: Optional[float] = None
    ng_students: List[StudentBrief]
    top_students: List[StudentBrief]
    grade_wise: List[GradeWiseSummary]
    students_without_subjects: int
    students_with_unsubmitted_marks: int
    top_subjects: List[SubjectPopularity]


class SchoolRow(CamelModel):
    school_id: int
    school_name: str
    iemis_code: str
    status: str
    total_students: int
    graded_count: int
    ng_count: int
    average_gpa: Optional[float] = None


class AdminSummary(CamelModel):
    academic_year: int
    total_schools: int
    active_schools: int
    total_students: int
    graded_count: int
    ng_count: int
    average_gpa: Optional[float] = None
    schools: List[SchoolRow]
