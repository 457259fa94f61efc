"""
CRUD operations for users, limited to what token issuance needs.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError
from jobly.core.security import get_password_hash, verify_password
from jobly.models.user import User
from jobly.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """
    Check a username/password pair.

    Returns:
        The User when the credentials match, None otherwise
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.password):
        logger.warning(f"Failed login for {username}")
        return None
    return user


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    if get_by_username(db, user_data.username):
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    logger.info(f"Registered user {db_user.username}")
    return db_user
