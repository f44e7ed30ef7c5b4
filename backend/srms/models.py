from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Float, ForeignKey, Text, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from srms.database import Base

# SQLAlchemy Models
class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True)
    iemis_code = Column(String(50), unique=True, index=True, nullable=False)
    logo_url = Column(String, nullable=True)
    name = Column(String(255), nullable=False)
    municipality = Column(String(255), nullable=False)
    estd = Column(String(20), nullable=False)
    prepared_by = Column(String(255), nullable=False)
    checked_by = Column(String(255), nullable=False)
    head_teacher_name = Column(String(255), nullable=False)
    head_teacher_contact = Column(String(10), nullable=False)
    email = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="Active")
    subscription_plan = Column(String(20), nullable=False, default="Basic")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<School(id={self.id}, iemis_code='{self.iemis_code}')>"

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    iemis_code = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    school_id = Column(Integer, ForeignKey("schools.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    school = relationship("School")

    def __repr__(self):
        return f"<User(id={self.id}, iemis_code='{self.iemis_code}', role='{self.role}')>"

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    student_system_id = Column(String(50), unique=True, index=True, nullable=False)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    dob = Column(Date, nullable=True)
    dob_bs = Column(String(10), nullable=True)
    gender = Column(String(10), nullable=False)
    grade = Column(Integer, nullable=False)
    roll_no = Column(String(20), nullable=True)
    photo_url = Column(String, nullable=True)
    year = Column(Integer, nullable=False, index=True)
    symbol_no = Column(String(50), nullable=False)
    alph = Column(String(10), nullable=True)
    registration_id = Column(String(50), nullable=True)
    father_name = Column(String(255), nullable=True)
    mother_name = Column(String(255), nullable=True)
    mobile_no = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    school = relationship("School")

    __table_args__ = (
        UniqueConstraint("school_id", "symbol_no", "year", name="uq_student_school_symbol_year"),
    )

class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    grade = Column(Integer, nullable=False, index=True)
    theory_sub_code = Column(String(20), nullable=False)
    theory_credit = Column(Float, nullable=False)
    theory_full_marks = Column(Float, nullable=False)
    theory_pass_marks = Column(Float, nullable=False)
    internal_sub_code = Column(String(20), nullable=False)
    internal_credit = Column(Float, nullable=False)
    internal_full_marks = Column(Float, nullable=False)
    internal_pass_marks = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Subject(id={self.id}, name='{self.name}', grade={self.grade})>"

# --- Per-year student records ---

class StudentSubjectAssignment(Base):
    __tablename__ = "student_subject_assignments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="RESTRICT"), nullable=False, index=True)
    academic_year = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "academic_year", name="uq_assignment_student_subject_year"),
    )

class StudentExtraCreditAssignment(Base):
    __tablename__ = "student_extra_credit_assignments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="RESTRICT"), nullable=False)
    academic_year = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        # At most one optional subject per student and year
        UniqueConstraint("student_id", "academic_year", name="uq_extra_credit_student_year"),
    )

class StudentMark(Base):
    __tablename__ = "student_marks"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="RESTRICT"), nullable=False, index=True)
    academic_year = Column(Integer, nullable=False)
    theory_obtained = Column(Float, nullable=True)
    practical_obtained = Column(Float, nullable=True)
    is_absent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "academic_year", name="uq_mark_student_subject_year"),
    )

# --- Global configuration ---

class AcademicYear(Base):
    __tablename__ = "academic_years"

    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, unique=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class ApplicationSetting(Base):
    __tablename__ = "application_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

class Otp(Base):
    __tablename__ = "otp"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    otp = Column(String(6), nullable=False)
    # Naive UTC
    expires_at = Column(DateTime, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# --- Derived data ---

class SchoolResultSummary(Base):
    __tablename__ = "school_result_summaries"

    id = Column(Integer, primary_key=True, index=True)
    school_id = Column(Integer, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    academic_year = Column(Integer, nullable=False)
    summary = Column(JSON, nullable=False)
    computed_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("school_id", "academic_year", name="uq_school_summary_school_year"),
    )

    def __repr__(self):
        return f"<SchoolResultSummary(school_id={self.school_id}, academic_year={self.academic_year})>"
