from typing import List, Optional

from srms.schemas import CamelModel


class SubjectGrade(CamelModel):
    subject_id: int
    name: str
    theory_sub_code: str
    internal_sub_code: str
    theory_credit: float
    internal_credit: float
    theory_obtained: float
    internal_obtained: float
    total_obtained: float
    theory_grade: str
    internal_grade: str
    theory_grade_point: float
    internal_grade_point: float
    wgpa: float
    final_grade: str
    is_absent: bool
    is_extra_credit: bool = False
    remarks: str


class GradeSheet(CamelModel):
    student_id: int
    student_system_id: str
    name: str
    symbol_no: str
    grade: int
    school_id: int
    academic_year: int
    subjects: List[SubjectGrade]
    total_credit: float
    gpa: float
    overall_grade: str
    is_absent: bool
    remarks: str
    extra_credit: Optional[SubjectGrade] = None
