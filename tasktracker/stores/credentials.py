import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import DuplicateEmail, InvalidCredentials, InvalidInput, Unauthenticated
from ..core.security import dummy_verify, get_password_hash, verify_password
from ..models.base import MAX_DB_ID
from ..models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return email.lower()


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == _normalize_email(email))
    return session.exec(statement).first()


def register_user(session: Session, email: str, password: str, name: Optional[str] = None) -> User:
    if not email or not password:
        raise InvalidInput("Email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if find_user_by_email(session, email) is not None:
        raise DuplicateEmail()

    user = User(
        email=_normalize_email(email),
        password_hash=get_password_hash(password),
        name=name or None,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        session.rollback()
        raise DuplicateEmail()
    session.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    user = find_user_by_email(session, email)

    if user is None:
        dummy_verify()
        logger.warning("Failed login for unknown email=%s", email)
        raise InvalidCredentials()

    if not verify_password(password, user.password_hash):
        logger.warning("Failed login for email=%s", email)
        raise InvalidCredentials()

    return user


def get_user(session: Session, user_id: int) -> User:
    if not 0 < user_id <= MAX_DB_ID:
        raise Unauthenticated("Invalid user")
    user = session.get(User, user_id)
    if user is None:
        raise Unauthenticated("Invalid user")
    return user
