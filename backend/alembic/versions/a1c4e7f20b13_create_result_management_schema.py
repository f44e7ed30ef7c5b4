"""create result management schema

Revision ID: a1c4e7f20b13
Revises:
Create Date: 2026-10-17 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f20b13'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'schools',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('iemis_code', sa.String(length=50), nullable=False),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('municipality', sa.String(length=255), nullable=False),
        sa.Column('estd', sa.String(length=20), nullable=False),
        sa.Column('prepared_by', sa.String(length=255), nullable=False),
        sa.Column('checked_by', sa.String(length=255), nullable=False),
        sa.Column('head_teacher_name', sa.String(length=255), nullable=False),
        sa.Column('head_teacher_contact', sa.String(length=10), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Active'),
        sa.Column('subscription_plan', sa.String(length=20), nullable=False, server_default='Basic'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_schools_id'), 'schools', ['id'], unique=False)
    op.create_index(op.f('ix_schools_iemis_code'), 'schools', ['iemis_code'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('iemis_code', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('school_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_iemis_code'), 'users', ['iemis_code'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_school_id'), 'users', ['school_id'], unique=False)

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_system_id', sa.String(length=50), nullable=False),
        sa.Column('school_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('dob_bs', sa.String(length=10), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('grade', sa.Integer(), nullable=False),
        sa.Column('roll_no', sa.String(length=20), nullable=True),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('symbol_no', sa.String(length=50), nullable=False),
        sa.Column('alph', sa.String(length=10), nullable=True),
        sa.Column('registration_id', sa.String(length=50), nullable=True),
        sa.Column('father_name', sa.String(length=255), nullable=True),
        sa.Column('mother_name', sa.String(length=255), nullable=True),
        sa.Column('mobile_no', sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('school_id', 'symbol_no', 'year', name='uq_student_school_symbol_year'),
    )
    op.create_index(op.f('ix_students_id'), 'students', ['id'], unique=False)
    op.create_index(op.f('ix_students_student_system_id'), 'students', ['student_system_id'], unique=True)
    op.create_index(op.f('ix_students_school_id'), 'students', ['school_id'], unique=False)
    op.create_index(op.f('ix_students_year'), 'students', ['year'], unique=False)

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('grade', sa.Integer(), nullable=False),
        sa.Column('theory_sub_code', sa.String(length=20), nullable=False),
        sa.Column('theory_credit', sa.Float(), nullable=False),
        sa.Column('theory_full_marks', sa.Float(), nullable=False),
        sa.Column('theory_pass_marks', sa.Float(), nullable=False),
        sa.Column('internal_sub_code', sa.String(length=20), nullable=False),
        sa.Column('internal_credit', sa.Float(), nullable=False),
        sa.Column('internal_full_marks', sa.Float(), nullable=False),
        sa.Column('internal_pass_marks', sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_subjects_id'), 'subjects', ['id'], unique=False)
    op.create_index(op.f('ix_subjects_grade'), 'subjects', ['grade'], unique=False)

    op.create_table(
        'student_subject_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        sa.Column('academic_year', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'subject_id', 'academic_year', name='uq_assignment_student_subject_year'),
    )
    op.create_index(op.f('ix_student_subject_assignments_id'), 'student_subject_assignments', ['id'], unique=False)
    op.create_index(op.f('ix_student_subject_assignments_student_id'), 'student_subject_assignments', ['student_id'], unique=False)
    op.create_index(op.f('ix_student_subject_assignments_subject_id'), 'student_subject_assignments', ['subject_id'], unique=False)

    op.create_table(
        'student_extra_credit_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        sa.Column('academic_year', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'academic_year', name='uq_extra_credit_student_year'),
    )
    op.create_index(op.f('ix_student_extra_credit_assignments_id'), 'student_extra_credit_assignments', ['id'], unique=False)
    op.create_index(op.f('ix_student_extra_credit_assignments_student_id'), 'student_extra_credit_assignments', ['student_id'], unique=False)

    op.create_table(
        'student_marks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        sa.Column('academic_year', sa.Integer(), nullable=False),
        sa.Column('theory_obtained', sa.Float(), nullable=True),
        sa.Column('practical_obtained', sa.Float(), nullable=True),
        sa.Column('is_absent', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'subject_id', 'academic_year', name='uq_mark_student_subject_year'),
    )
    op.create_index(op.f('ix_student_marks_id'), 'student_marks', ['id'], unique=False)
    op.create_index(op.f('ix_student_marks_student_id'), 'student_marks', ['student_id'], unique=False)
    op.create_index(op.f('ix_student_marks_subject_id'), 'student_marks', ['subject_id'], unique=False)

    op.create_table(
        'academic_years',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('year'),
    )
    op.create_index(op.f('ix_academic_years_id'), 'academic_years', ['id'], unique=False)
    op.create_index(op.f('ix_academic_years_is_active'), 'academic_years', ['is_active'], unique=False)

    op.create_table(
        'application_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_application_settings_id'), 'application_settings', ['id'], unique=False)
    op.create_index(op.f('ix_application_settings_key'), 'application_settings', ['key'], unique=True)

    op.create_table(
        'otp',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('otp', sa.String(length=6), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_otp_id'), 'otp', ['id'], unique=False)
    op.create_index(op.f('ix_otp_email'), 'otp', ['email'], unique=False)

    op.create_table(
        'school_result_summaries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('school_id', sa.Integer(), nullable=False),
        sa.Column('academic_year', sa.Integer(), nullable=False),
        sa.Column('summary', sa.JSON(), nullable=False),
        sa.Column('computed_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('school_id', 'academic_year', name='uq_school_summary_school_year'),
    )
    op.create_index(op.f('ix_school_result_summaries_id'), 'school_result_summaries', ['id'], unique=False)
    op.create_index(op.f('ix_school_result_summaries_school_id'), 'school_result_summaries', ['school_id'], unique=False)


def downgrade() -> None:
    op.drop_table('school_result_summaries')
    op.drop_table('otp')
    op.drop_table('application_settings')
    op.drop_table('academic_years')
    op.drop_table('student_marks')
    op.drop_table('student_extra_credit_assignments')
    op.drop_table('student_subject_assignments')
    op.drop_table('subjects')
    op.drop_table('students')
    op.drop_table('users')
    op.drop_table('schools')
