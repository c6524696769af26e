"""
Admission Controller - decides whether a question can take another candidate answer.
"""
from sqlalchemy.orm import Session

from answerboard.core.config import settings
from answerboard.db import storage_errors
from answerboard.errors import NotFoundError
from answerboard.models import Question
from answerboard.services.ids import lookup_id


def has_open_slot(question: Question) -> bool:
    return question.pending_count < settings.MAX_PENDING_ANSWERS


def is_slot_available(db: Session, question_id: str) -> bool:
    """True iff the question holds fewer than MAX_PENDING_ANSWERS pending candidates."""
    question_id = lookup_id(question_id, "question")
    with storage_errors():
        pending = db.query(Question.pending_count).filter(Question.id == question_id).scalar()
    if pending is None:
        raise NotFoundError(f"No question exists with the id of {question_id}")
    return pending < settings.MAX_PENDING_ANSWERS
