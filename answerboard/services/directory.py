"""
Users and categories.

Credentials live with the auth gateway; this service only keeps the rows the
Q&A tables reference.
"""
import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from answerboard.db import unit_of_work, storage_errors
from answerboard.errors import DuplicateError, NotFoundError, ValidationError, WriteConflictError
from answerboard.models import User, Category
from answerboard.services.ids import lookup_id

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 20
MAX_CATEGORY_LENGTH = 15


class UserLookup(str, Enum):
    ID = "id"
    USERNAME = "username"


def normalize_category(name: str) -> str:
    token = (name or "").strip().lower()
    if not token or len(token) > MAX_CATEGORY_LENGTH:
        raise ValidationError(f"Category must be 1-{MAX_CATEGORY_LENGTH} characters")
    return token


def create_user(db: Session, username: str) -> User:
    username = (username or "").strip()
    if not username or len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username must be 1-{MAX_USERNAME_LENGTH} characters")

    user = User(username=username)
    try:
        with unit_of_work(db):
            db.add(user)
    except WriteConflictError as e:
        raise DuplicateError("The provided username is not unique") from e
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, username)
    return user


def get_user(db: Session, user_id: str) -> User:
    user_id = lookup_id(user_id, "user")
    with storage_errors():
        user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("No user exists with the provided id")
    return user


def find_user_by_username(db: Session, username: str) -> Optional[User]:
    with storage_errors():
        return db.query(User).filter(User.username == username).first()


def find_user(db: Session, lookup: str, value: str) -> User:
    """
    Look a user up by id or by username.

    Raises:
        ValidationError: lookup is neither "id" nor "username"
        NotFoundError: No matching user
    """
    try:
        by = UserLookup((lookup or "").lower())
    except ValueError:
        raise ValidationError(f"Could not recognize the user filter: {lookup!r}")

    if by is UserLookup.ID:
        return get_user(db, value)
    user = find_user_by_username(db, value)
    if user is None:
        raise NotFoundError("No user exists with the provided credential")
    return user


def create_category(db: Session, name: str, created_by: str) -> Category:
    name = normalize_category(name)
    creator = get_user(db, created_by)

    category = Category(name=name, created_by=creator.id)
    try:
        with unit_of_work(db):
            db.add(category)
    except WriteConflictError as e:
        raise DuplicateError(f"Category {name} already exists") from e
    db.refresh(category)
    return category


def get_category_by_name(db: Session, name: str) -> Category:
    name = normalize_category(name)
    with storage_errors():
        category = db.query(Category).filter(Category.name == name).first()
    if category is None:
        raise NotFoundError(f"The provided category {name} does not exist")
    return category
