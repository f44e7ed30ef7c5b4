import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from srms.auth.service import hash_password
from srms.config.settings import settings
from srms.models import Otp, User

logger = logging.getLogger(__name__)

OTP_EXPIRED = "OTP has expired"
OTP_INVALID = "Invalid OTP"
OTP_VALID = "OTP verified successfully"


def generate_otp() -> str:
    """Six random digits from a CSPRNG."""
    return f"{secrets.randbelow(1_000_000):06d}"


class OtpService:
    """Issue, check and consume password-reset codes."""

    @staticmethod
    def create_otp(db: Session, email: str) -> str:
        """Replace any earlier codes for the email with a fresh one."""
        otp = generate_otp()
        db.query(Otp).filter(Otp.email == email).delete(synchronize_session=False)
        db.add(Otp(
            email=email,
            otp=otp,
            expires_at=datetime.utcnow() + timedelta(minutes=settings.OTP_EXPIRY_MINUTES),
            attempts=0,
        ))
        db.commit()
        return otp

    @staticmethod
    def _check(db: Session, email: str, otp: str) -> Tuple[Optional[Otp], str]:
        record = (
            db.query(Otp)
            .filter(Otp.email == email)
            .order_by(Otp.created_at.desc(), Otp.id.desc())
            .first()
        )
        if record is None:
            return None, OTP_INVALID

        if record.expires_at <= datetime.utcnow():
            db.delete(record)
            db.flush()
            return None, OTP_EXPIRED

        if not secrets.compare_digest(record.otp, otp):
            record.attempts = (record.attempts or 0) + 1
            if record.attempts >= settings.OTP_MAX_VERIFY_ATTEMPTS:
                logger.warning(f"Too many OTP attempts for {email}, discarding code")
                db.delete(record)
            db.flush()
            return None, OTP_INVALID

        return record, OTP_VALID

    @staticmethod
    def verify_otp(db: Session, email: str, otp: str) -> Tuple[bool, str]:
        """Check a code without consuming it."""
        record, message = OtpService._check(db, email, otp)
        db.commit()
        return record is not None, message

    @staticmethod
    def reset_password(db: Session, email: str, otp: str, new_password: str) -> Tuple[bool, str]:
        """
        Verify the code, store the new password and delete the code in one transaction.

        Returns (False, reason) when the code is rejected or no user has that email.
        """
        try:
            record, message = OtpService._check(db, email, otp)
            if record is None:
                db.commit()
                return False, message

            user = db.query(User).filter(User.email == email).first()
            if user is None:
                db.rollback()
                return False, "User not found"

            user.password_hash = hash_password(new_password)
            db.delete(record)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Password reset via OTP for user {user.id}")
        return True, "Password reset successfully"


otp_service = OtpService()
