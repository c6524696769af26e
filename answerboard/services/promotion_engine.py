"""
Qualification & Promotion Engine

Decides, after a vote, whether the current answer of a question must change,
and applies the change atomically.

An assessment pass for one question:
  1. purges the question's answers whose upvotes reached exactly zero
  2. ranks the remaining answers (upvotes DESC, current flag DESC,
     last_edited_at ASC) and collects the qualified ones
     (upvotes >= required_upvotes), stopping right after the current answer
  3. does nothing if no answer qualified, or the only qualified one is
     already current
  4. otherwise promotes the best-ranked qualified answer and demotes the
     previous current answer, if there was one

Every statement is scoped to the question being assessed, and the whole pass
(purge included) runs in a single unit of work.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.orm import Session

from answerboard.db import unit_of_work
from answerboard.models import Answer, Question
from answerboard.services.ids import parse_id

logger = logging.getLogger(__name__)


class AssessmentOutcome(str, Enum):
    NO_CHANGE = "no_change"
    PROMOTED = "promoted"
    PROMOTED_AND_DEMOTED = "promoted_and_demoted"


@dataclass
class AssessmentResult:
    question_id: str
    outcome: AssessmentOutcome = AssessmentOutcome.NO_CHANGE
    promoted_id: Optional[str] = None
    demoted_id: Optional[str] = None
    purged_ids: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.outcome is not AssessmentOutcome.NO_CHANGE


def _adjust_pending(question: Question, change: int) -> None:
    question.pending_count = max(0, (question.pending_count or 0) + change)


def _purge_zero_vote_answers(db: Session, question: Question) -> List[str]:
    rows = db.query(Answer.id, Answer.is_current_answer).filter(
        Answer.question_id == question.id,
        Answer.upvotes == 0,
    ).all()
    if not rows:
        return []

    purged_ids = [row.id for row in rows]
    db.execute(
        delete(Answer)
        .where(Answer.id.in_(purged_ids))
        .execution_options(synchronize_session=False)
    )
    # A purged current answer was never counted as pending
    _adjust_pending(question, -sum(1 for row in rows if not row.is_current_answer))
    return purged_ids


def rank_answers(db: Session, question_id: str) -> List[Answer]:
    return (
        db.query(Answer)
        .filter(Answer.question_id == question_id)
        .order_by(
            Answer.upvotes.desc(),
            Answer.is_current_answer.desc(),
            Answer.last_edited_at.asc(),
            Answer.id.asc(),
        )
        .populate_existing()
        .all()
    )


def scan_qualified(ranked: List[Answer]) -> Tuple[List[Answer], Optional[Answer]]:
    """
    Walk ranked answers, collecting qualified ones.

    Stops right after the current answer, since anything ranked below it
    cannot displace it. Returns (qualified, current_answer_or_None).
    """
    qualified = []
    current = None
    for answer in ranked:
        if answer.is_qualified:
            qualified.append(answer)
        if answer.is_current_answer:
            current = answer
            break
    return qualified, current


def _record_promotion(question: Question, demoted: bool) -> None:
    question.edit_count = (question.edit_count or 0) + 1
    # The promoted answer leaves the candidate pool; a demoted one rejoins it
    _adjust_pending(question, -1)
    if demoted:
        _adjust_pending(question, 1)


def _run_pass(db: Session, question: Question, result: AssessmentResult) -> None:
    result.purged_ids = _purge_zero_vote_answers(db, question)

    qualified, current = scan_qualified(rank_answers(db, question.id))

    # Nothing qualified, or the current answer still dominates
    if not qualified or (len(qualified) == 1 and qualified[0] is current):
        return

    winner = qualified[0]
    winner.is_current_answer = True
    result.promoted_id = winner.id
    result.outcome = AssessmentOutcome.PROMOTED

    if current is not None:
        current.is_current_answer = False
        result.demoted_id = current.id
        result.outcome = AssessmentOutcome.PROMOTED_AND_DEMOTED

    _record_promotion(question, demoted=current is not None)


def assess_answers(db: Session, question_id: str) -> AssessmentResult:
    """
    Re-evaluate which answer of a question is current.

    Missing questions (and ids that cannot name one) are a no-op. Any store
    failure rolls the pass back and raises StorageError.
    """
    result = AssessmentResult(question_id=question_id)
    question_id = parse_id(question_id)
    if question_id is None:
        return result

    with unit_of_work(db):
        question = (
            db.query(Question)
            .filter(Question.id == question_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if question is not None:
            _run_pass(db, question, result)

    if result.purged_ids:
        logger.info("Purged %d zero-vote answer(s) from question %s", len(result.purged_ids), question_id)
    if result.changed:
        logger.info(
            "Question %s: promoted answer %s%s",
            question_id,
            result.promoted_id,
            f", demoted {result.demoted_id}" if result.demoted_id else "",
        )
    return result
