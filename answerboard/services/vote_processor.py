"""
Vote Processor - applies a +1/-1 vote to upvote counters.

Answer votes move one answer. Question votes move the question's own counter
and, when it has one, its current answer, both in a single unit of work.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from answerboard.db import unit_of_work, storage_errors
from answerboard.errors import NotFoundError, ValidationError
from answerboard.models import Answer, Question
from answerboard.services.ids import lookup_id

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1
VALID_DELTAS = (UPVOTE, DOWNVOTE)

_DIRECTIONS = {"upvote": UPVOTE, "downvote": DOWNVOTE}


def parse_vote(direction: str) -> int:
    """Map the wire direction ("upvote"/"downvote") to a delta."""
    try:
        return _DIRECTIONS[direction.lower()]
    except (KeyError, AttributeError):
        raise ValidationError(f"Unknown vote direction: {direction!r}")


def _check_delta(delta: int) -> None:
    if delta not in VALID_DELTAS:
        raise ValidationError(f"Vote must be +1 or -1, got {delta!r}")


def _bump_upvotes(db: Session, model, row_id: str, delta: int) -> int:
    result = db.execute(
        update(model)
        .where(model.id == row_id)
        .values(upvotes=model.upvotes + delta)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def cast_vote(db: Session, answer_id: str, delta: int) -> Tuple[str, str]:
    """
    Add delta to an answer's upvotes.

    Returns:
        (author_id, question_id) of the answer, for reputation side effects
        and the follow-up assessment

    Raises:
        ValidationError: delta is not +1 or -1
        NotFoundError: No answer with answer_id
        StorageError: Store failure; the vote was not applied
    """
    _check_delta(delta)
    answer_id = lookup_id(answer_id, "answer")

    with storage_errors():
        row = db.query(Answer.user_id, Answer.question_id).filter(Answer.id == answer_id).first()
    if row is None:
        raise NotFoundError("No answer exists with the provided answer id")

    with unit_of_work(db):
        # Purged by a concurrent assessment between lookup and update
        if _bump_upvotes(db, Answer, answer_id, delta) == 0:
            raise NotFoundError("No answer exists with the provided answer id")

    logger.info("Vote %+d applied to answer %s", delta, answer_id)
    return row.user_id, row.question_id


def cast_question_vote(db: Session, question_id: str, delta: int) -> Optional[Tuple[str, str]]:
    """
    Add delta to a question's counter and to its current answer, atomically.

    Returns:
        (answer_id, author_id) of the current answer that received the vote,
        or None if the question has no current answer

    Raises:
        ValidationError: delta is not +1 or -1
        NotFoundError: No question with question_id
        StorageError: Store failure; neither counter changed
    """
    _check_delta(delta)
    question_id = lookup_id(question_id, "question")

    with unit_of_work(db):
        locked = db.query(Question.id).filter(Question.id == question_id).with_for_update().first()
        if locked is None:
            raise NotFoundError(f"No question exists with the id of {question_id}")

        current = db.query(Answer.id, Answer.user_id).filter(
            Answer.question_id == question_id,
            Answer.is_current_answer.is_(True),
        ).first()

        _bump_upvotes(db, Question, question_id, delta)
        if current is not None:
            _bump_upvotes(db, Answer, current.id, delta)

    logger.info(
        "Vote %+d applied to question %s%s",
        delta,
        question_id,
        f" and its current answer {current.id}" if current is not None else "",
    )
    if current is None:
        return None
    return current.id, current.user_id
