"""
Test helpers for building questions, answers and users directly in the store.
"""
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from answerboard.models import Answer, Category, Question, User

_BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_user(db: Session, username: str) -> User:
    user = User(username=username)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_category(db: Session, creator: User, name: str = "fitness") -> Category:
    category = Category(name=name, created_by=creator.id)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_question(
    db: Session,
    author: User,
    category: Category,
    title: str = "What should my squat to bench ratio be?",
    content: str = "I need gains",
    upvotes: int = 0,
    edit_count: int = 0,
    pending_count: int = 0,
) -> Question:
    question = Question(
        user_id=author.id,
        category_id=category.id,
        title=title,
        content=content,
        upvotes=upvotes,
        edit_count=edit_count,
        pending_count=pending_count,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def make_answer(
    db: Session,
    question: Question,
    author: Optional[User] = None,
    upvotes: int = 0,
    required_upvotes: int = 20,
    current: bool = False,
    content: Optional[str] = None,
    minutes: int = 0,
) -> Answer:
    """Insert an answer; `minutes` offsets last_edited_at to control tie-breaks."""
    if author is None:
        author = make_user(db, f"user{db.query(User).count()}")
    answer = Answer(
        question_id=question.id,
        user_id=author.id,
        content=content or f"answer by {author.username}",
        upvotes=upvotes,
        required_upvotes=required_upvotes,
        is_current_answer=current,
        last_edited_at=_BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(answer)
    db.commit()
    db.refresh(answer)
    return answer


def reload(db: Session, obj):
    """Fresh copy of a row from the database, or None if it was deleted."""
    identity = inspect(obj).identity
    db.expire_all()
    return db.get(type(obj), identity)
