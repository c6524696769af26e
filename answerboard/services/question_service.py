"""
Question catalogue - posting, lookup, filtering and sorting of questions.

Sort and filter criteria arrive from the URL; they are only ever resolved
through the closed enums and the column table below, never spliced into SQL.
"""
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from answerboard.core.config import settings
from answerboard.db import unit_of_work, storage_errors
from answerboard.errors import DuplicateError, NotFoundError, ValidationError, WriteConflictError
from answerboard.models import Answer, Category, Question, User
from answerboard.services.directory import get_category_by_name, get_user
from answerboard.services.ids import lookup_id, parse_id
from answerboard.services.reputation_ledger import ReputationLedger

logger = logging.getLogger(__name__)


class QuestionFilter(str, Enum):
    POSTED_BY = "posted-by"
    ANSWERED_BY = "answered-by"
    CATEGORY = "category"


class SortComponent(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_COLUMNS = {
    (SortComponent.QUESTION, "upvotes"): Question.upvotes,
    (SortComponent.QUESTION, "date"): Question.submitted_at,
    (SortComponent.QUESTION, "edits"): Question.edit_count,
    (SortComponent.ANSWER, "upvotes"): Answer.upvotes,
    (SortComponent.ANSWER, "date"): Answer.last_edited_at,
}


def _parse(enum_cls, value: str, what: str):
    try:
        return enum_cls((value or "").lower())
    except ValueError:
        raise ValidationError(f"Could not recognize the {what}: {value!r}")


def store_question(
    db: Session,
    ledger: ReputationLedger,
    author_id: str,
    category_name: str,
    title: str,
    content: str,
) -> Question:
    """
    Post a question and charge the author the asking fee in its category.

    Raises:
        ValidationError: Missing title or content
        NotFoundError: Unknown author or category
        DuplicateError: Title already used
    """
    if not title or not title.strip():
        raise ValidationError("Title is required")
    if not content or not content.strip():
        raise ValidationError("Content is required")

    author = get_user(db, author_id)
    category = get_category_by_name(db, category_name)

    question = Question(
        user_id=author.id,
        category_id=category.id,
        title=title.strip(),
        content=content,
    )
    try:
        with unit_of_work(db):
            db.add(question)
    except WriteConflictError as e:
        raise DuplicateError("The provided title is not unique") from e
    db.refresh(question)

    ledger.adjust(category.name, author.id, settings.QUESTION_ASKING_FEE)
    logger.info("Stored question %s in %s by %s", question.id, category.name, author.id)
    return question


def get_question(db: Session, question_id: str) -> Question:
    question_id = lookup_id(question_id, "question")
    with storage_errors():
        question = db.query(Question).filter(Question.id == question_id).first()
    if question is None:
        raise NotFoundError(f"No question exists with the id of {question_id}")
    return question


def get_current_answer(db: Session, question_id: str) -> Optional[Answer]:
    question_id = parse_id(question_id)
    if question_id is None:
        return None
    with storage_errors():
        return db.query(Answer).filter(
            Answer.question_id == question_id,
            Answer.is_current_answer.is_(True),
        ).first()


def find_post_by_id(db: Session, question_id: str) -> Tuple[Question, Optional[Answer]]:
    """A question together with its current answer, if it has one."""
    question = get_question(db, question_id)
    return question, get_current_answer(db, question_id)


def find_questions_by_filter(db: Session, filter_name: str, value: str) -> List[Question]:
    question_filter = _parse(QuestionFilter, filter_name, "filter")

    query = db.query(Question)
    if question_filter is QuestionFilter.POSTED_BY:
        query = query.join(User, Question.user_id == User.id).filter(User.username == value)
    elif question_filter is QuestionFilter.ANSWERED_BY:
        query = (
            query.join(Answer, (Answer.question_id == Question.id) & Answer.is_current_answer.is_(True))
            .join(User, Answer.user_id == User.id)
            .filter(User.username == value)
        )
    else:
        query = query.join(Category, Question.category_id == Category.id).filter(Category.name == value.lower())

    with storage_errors():
        questions = query.order_by(Question.upvotes.desc(), Question.submitted_at.asc()).all()
    if not questions:
        raise NotFoundError("No question(s) found")
    return questions


def sort_questions(
    db: Session,
    component: str,
    field: str,
    order: str,
    offset: int = 0,
) -> List[Question]:
    """
    One page of questions ordered by a question or current-answer column.

    Answer-based sorting only includes questions that have a current answer.
    """
    sort_component = _parse(SortComponent, component, "sorting component")
    sort_order = _parse(SortOrder, order, "sorting order")
    column = _SORT_COLUMNS.get((sort_component, (field or "").lower()))
    if column is None:
        raise ValidationError("Could not recognize the sorting criteria")
    if offset < 0:
        raise ValidationError("Offset must not be negative")

    query = db.query(Question)
    if sort_component is SortComponent.ANSWER:
        query = query.join(Answer, (Answer.question_id == Question.id) & Answer.is_current_answer.is_(True))

    ordering = column.asc() if sort_order is SortOrder.ASC else column.desc()
    with storage_errors():
        questions = (
            query.order_by(ordering, Question.id.asc())
            .offset(offset)
            .limit(settings.QUESTION_PAGE_SIZE)
            .all()
        )
    if not questions:
        raise NotFoundError("No question(s) found")
    return questions


def sortable_fields() -> Dict[str, List[str]]:
    fields: Dict[str, List[str]] = {}
    for component, field in _SORT_COLUMNS:
        fields.setdefault(component.value, []).append(field)
    return fields
