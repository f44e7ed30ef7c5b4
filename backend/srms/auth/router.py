import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from srms.auth.schemas import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
    ChangePasswordRequest, UserResponse
)
from srms.auth.service import auth_service, AuthenticationError
from srms.auth.dependencies import get_current_user, get_optional_user, is_admin
from srms.database import get_db, is_unique_violation, violated_constraint
from srms.models import User, School
from srms.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["authentication"]
)


def duplicate_user_detail(exc: IntegrityError) -> str:
    if "email" in violated_constraint(exc).lower():
        return "Email already exists"
    return "IEMIS code already exists"


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Create a user account.

    Only admins may register users. The very first account can be created
    without a token so a fresh deployment can be bootstrapped.
    """
    bootstrap = db.query(User.id).first() is None
    if not bootstrap:
        if current_user is None:
            raise HTTPException(status_code=401, detail="Unauthorized: Missing or invalid Bearer token format")
        if not is_admin(current_user):
            raise HTTPException(status_code=403, detail="Admin access required")

    if request.role == "school" and request.school_id is not None:
        if db.query(School.id).filter(School.id == request.school_id).first() is None:
            raise HTTPException(status_code=400, detail="School not found")

    try:
        user = auth_service.register(
            db,
            iemis_code=request.iemis_code,
            password=request.password,
            role=request.role,
            email=request.email,
            school_id=request.school_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        if is_unique_violation(e):
            raise HTTPException(status_code=409, detail=duplicate_user_detail(e))
        logger.error(f"Integrity error during registration: {e}")
        raise HTTPException(status_code=400, detail="Invalid user data")

    if bootstrap:
        logger.info(f"Bootstrapped first user account {user.id}")

    return {
        'success': True,
        'message': 'User registered successfully',
        'user': user,
    }


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate with an IEMIS code or email and a password.
    Returns a signed token carrying the user's id, role and school.
    """
    try:
        user = auth_service.authenticate(db, request.identifier, request.password)
    except AuthenticationError:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = auth_service.create_access_token(user)
    return {
        'success': True,
        'message': 'Login successful',
        'token': token,
        'user': user,
    }


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    """Fetch the details of the currently authenticated user."""
    return current_user


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        auth_service.change_password(db, current_user, request.current_password, request.new_password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {'success': True, 'message': 'Password changed successfully'}
