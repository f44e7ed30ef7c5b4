from typing import List, Optional

from srms.schemas import CamelModel


class AssignmentRequest(CamelModel):
    subject_ids: List[int]
    extra_credit_subject_id: Optional[int] = None


class AssignmentResponse(CamelModel):
    subject_ids: List[int]
    extra_credit_subject_id: Optional[int] = None


class AssignmentSaveResponse(AssignmentResponse):
    success: bool = True
    message: str
