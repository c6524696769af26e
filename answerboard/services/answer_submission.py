"""
Answer Submission Pipeline

Validates, deduplicates and persists a new candidate answer, bumping the
question's pending-candidate counter in the same unit of work.
"""
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from answerboard.core.config import settings
from answerboard.db import unit_of_work, storage_errors
from answerboard.errors import DuplicateError, NotFoundError, ValidationError
from answerboard.models import Answer, Question
from answerboard.services.admission import has_open_slot, is_slot_available
from answerboard.services.ids import lookup_id

logger = logging.getLogger(__name__)


def required_upvotes_for(reputation: int) -> int:
    """
    Upvotes an answer needs before it can become current.

    Low-reputation authors clear a higher bar; authors at or above the
    ceiling need zero (or fewer) upvotes.
    """
    return settings.REPUTATION_CEILING - reputation


def find_duplicate(db: Session, question_id: str, author_id: str, content: str, required_upvotes: int):
    return db.query(Answer.id).filter(
        Answer.question_id == question_id,
        Answer.user_id == author_id,
        Answer.content == content,
        Answer.required_upvotes == required_upvotes,
    ).first()


def submit_answer(
    db: Session,
    question_id: str,
    author_id: str,
    content: str,
    reputation: int,
) -> Answer:
    """
    Store a candidate answer for a question.

    Args:
        question_id: Question being answered
        author_id: User submitting the answer
        content: Answer body
        reputation: Author's current reputation in the question's category

    Raises:
        ValidationError: Empty content, or the question has no free candidate slot
        NotFoundError: Question does not exist
        DuplicateError: Identical answer (same author, content and threshold) already stored
        StorageError: Store failure; nothing was written
    """
    if not content or not content.strip():
        raise ValidationError("Answer content is required")

    question_id = lookup_id(question_id, "question")
    author_id = lookup_id(author_id, "user")

    if not is_slot_available(db, question_id):
        logger.info("Rejected answer for question %s: candidate slots full", question_id)
        raise ValidationError("Maximum capacity for answers has been reached")

    required = required_upvotes_for(reputation)

    with storage_errors():
        duplicate = find_duplicate(db, question_id, author_id, content, required)
    if duplicate is not None:
        raise DuplicateError("Answer already exists")

    with unit_of_work(db):
        question = db.query(Question).filter(Question.id == question_id).with_for_update().first()
        if question is None:
            raise NotFoundError(f"No question exists with the id of {question_id}")
        # Re-check under the row lock; a concurrent submission may have taken the last slot
        if not has_open_slot(question):
            raise ValidationError("Maximum capacity for answers has been reached")

        answer = Answer(
            question_id=question_id,
            user_id=author_id,
            content=content,
            upvotes=0,
            required_upvotes=required,
            is_current_answer=False,
            last_edited_at=datetime.utcnow(),
        )
        db.add(answer)
        question.pending_count = Question.pending_count + 1

    db.refresh(answer)
    logger.info(
        "Stored answer %s for question %s (required_upvotes=%s)",
        answer.id, question_id, required,
    )
    return answer
