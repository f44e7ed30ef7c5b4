import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from srms.config.settings import settings
from srms.models import User

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_SCHOOL = "school"

_EXPIRY_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class AuthenticationError(Exception):
    """Raised for any credential or token problem. Always mapped to 401."""


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def parse_expires_in(value: str) -> timedelta:
    """
    Parse a duration such as '24h', '30m', '7d', '45s' or a bare number of seconds.

    Falls back to 24 hours when the value cannot be parsed.
    """
    text = str(value or "").strip().lower()
    if text.isdigit():
        return timedelta(seconds=int(text))
    match = re.fullmatch(r"(\d+)\s*([smhd])", text)
    if not match:
        logger.warning(f"Unrecognised JWT_EXPIRES_IN value '{value}', using 24h")
        return timedelta(hours=24)
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _EXPIRY_UNITS[unit])


class AuthService:
    """Service for credentials, tokens and account creation."""

    @staticmethod
    def create_access_token(user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "iemis_code": user.iemis_code,
            "email": user.email,
            "role": user.role,
            "school_id": user.school_id,
            "iat": now,
            "exp": now + parse_expires_in(settings.JWT_EXPIRES_IN),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> dict:
        """
        Verify signature and expiry of a token and return its payload.

        Raises:
            AuthenticationError: If the token is expired, malformed or forged.
        """
        try:
            payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")
        if not isinstance(payload.get("id"), int):
            raise AuthenticationError("Invalid token")
        return payload

    @staticmethod
    def find_user_by_identifier(db: Session, identifier: str) -> Optional[User]:
        identifier = identifier.strip()
        if "@" in identifier:
            return db.query(User).filter(User.email == identifier.lower()).first()
        return db.query(User).filter(User.iemis_code == identifier).first()

    @staticmethod
    def authenticate(db: Session, identifier: str, password: str) -> User:
        """
        Look a user up by email (identifier containing '@') or IEMIS code and check the password.

        The same error is raised for an unknown user and a wrong password.
        """
        user = AuthService.find_user_by_identifier(db, identifier)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for identifier '{identifier}'")
            raise AuthenticationError("Invalid credentials")
        return user

    @staticmethod
    def register(
        db: Session,
        iemis_code: str,
        password: str,
        role: str,
        email: Optional[str] = None,
        school_id: Optional[int] = None,
    ) -> User:
        """
        Insert a new user with a hashed password.

        Raises:
            ValueError: On role rules (school users need a school_id).
            sqlalchemy.exc.IntegrityError: On duplicate iemis_code or email.
        """
        if role not in (ROLE_ADMIN, ROLE_SCHOOL):
            raise ValueError("Role must be either 'admin' or 'school'")
        if role == ROLE_SCHOOL and school_id is None:
            raise ValueError("School ID is required for school users")
        if role == ROLE_ADMIN:
            school_id = None

        user = User(
            iemis_code=iemis_code,
            email=email.lower() if email else None,
            password_hash=hash_password(password),
            role=role,
            school_id=school_id,
        )
        db.add(user)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        logger.info(f"Registered user {user.id} with role {role}")
        return user

    @staticmethod
    def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        if current_password == new_password:
            raise ValueError("New password must be different from the current password")
        user.password_hash = hash_password(new_password)
        db.commit()
        logger.info(f"Password changed for user {user.id}")


auth_service = AuthService()
