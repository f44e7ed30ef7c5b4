"""
Option lists shared by validation and by the frontend dropdowns.
Edit this file to change the grades, genders, statuses or plans on offer.
"""

# Grades taught (NEB higher secondary)
GRADES = [11, 12]

GENDERS = ["Male", "Female", "Other"]

SCHOOL_STATUSES = ["Active", "Inactive"]

SUBSCRIPTION_PLANS = ["Basic", "Pro", "Enterprise"]

ROLES = ["admin", "school"]


def check_grade(grade) -> int:
    """Return the grade as an int, raising ValueError when it is not offered."""
    try:
        value = int(grade)
    except (TypeError, ValueError):
        raise ValueError("Grade must be 11 or 12")
    if value not in GRADES:
        raise ValueError("Grade must be 11 or 12")
    return value
