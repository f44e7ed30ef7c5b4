from fastapi import APIRouter
from typing import Dict, Any
from srms.config.options import GRADES, GENDERS, SCHOOL_STATUSES, SUBSCRIPTION_PLANS, ROLES

router = APIRouter(
    prefix="/api/config",
    tags=["configuration"]
)

@router.get("/options")
async def get_options() -> Dict[str, Any]:
    """
    Get the option lists used by the school and student forms.
    Used to populate dropdowns in the frontend.
    """
    return {
        "grades": GRADES,
        "genders": GENDERS,
        "schoolStatuses": SCHOOL_STATUSES,
        "subscriptionPlans": SUBSCRIPTION_PLANS,
        "roles": ROLES,
    }
