import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from srms.database import get_db
from srms.mailer import service as mailer_service
from srms.models import User
from srms.otp.schemas import SendOtpRequest, VerifyOtpRequest, ResetPasswordRequest
from srms.otp.service import otp_service
from srms.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/otp",
    tags=["otp"]
)

SEND_OTP_MESSAGE = "If the email exists, an OTP has been sent"


@router.post("/send", response_model=MessageResponse)
def send_otp(request: SendOtpRequest, db: Session = Depends(get_db)):
    """
    Email a password-reset code. The response does not reveal whether the
    address belongs to an account.
    """
    user = db.query(User).filter(User.email == request.email).first()
    if user is None:
        logger.info(f"OTP requested for unknown email {request.email}")
        return {'success': True, 'message': SEND_OTP_MESSAGE}

    otp = otp_service.create_otp(db, request.email)
    if not mailer_service.send_otp_email(request.email, otp):
        logger.error(f"OTP email delivery failed for user {user.id}")

    return {'success': True, 'message': SEND_OTP_MESSAGE}


@router.post("/verify", response_model=MessageResponse)
def verify_otp(request: VerifyOtpRequest, db: Session = Depends(get_db)):
    valid, message = otp_service.verify_otp(db, request.email, request.otp)
    if not valid:
        raise HTTPException(status_code=400, detail=message)
    return {'success': True, 'message': message}


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    ok, message = otp_service.reset_password(db, request.email, request.otp, request.new_password)
    if not ok:
        raise HTTPException(status_code=400, detail=message)
    return {'success': True, 'message': message}
