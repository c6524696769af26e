"""
Caller-level flows tying the core components together.

vote -> Vote Processor -> reputation policy -> Promotion Engine
submit -> Admission Controller -> Reputation Ledger -> Submission Pipeline

Reputation attribution differs between the two vote flows and is kept that
way on purpose:
  - answer votes move the VOTER's reputation by the vote delta
  - question votes give the AUTHOR of the current answer +1
Both are suppressed once the answer author's reputation exceeds the ceiling.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from answerboard.core.config import settings
from answerboard.models import Answer
from answerboard.services.answer_submission import submit_answer
from answerboard.services.directory import get_user
from answerboard.services.promotion_engine import AssessmentResult, assess_answers
from answerboard.services.question_service import get_question
from answerboard.services.reputation_ledger import ReputationLedger
from answerboard.services.vote_processor import cast_question_vote, cast_vote

logger = logging.getLogger(__name__)


class RewardTarget(str, Enum):
    VOTER = "voter"
    AUTHOR = "author"


@dataclass
class VoteResult:
    question_id: str
    answer_id: Optional[str]
    recipient_id: Optional[str]
    rewarded_user_id: Optional[str]
    reward: int
    assessment: AssessmentResult


def _category_of(db: Session, question_id: str) -> str:
    return get_question(db, question_id).category.name


def is_reward_eligible(ledger: ReputationLedger, category: str, recipient_id: str) -> bool:
    return ledger.get(category, recipient_id) <= settings.REPUTATION_CEILING


def _apply_reward(
    ledger: ReputationLedger,
    category: str,
    target: RewardTarget,
    voter_id: str,
    recipient_id: str,
    delta: int,
) -> Optional[str]:
    if not is_reward_eligible(ledger, category, recipient_id):
        logger.debug("Reputation of %s in %s above ceiling, no reward", recipient_id, category)
        return None
    rewarded = voter_id if target is RewardTarget.VOTER else recipient_id
    ledger.adjust(category, rewarded, delta)
    return rewarded


def submit_answer_for(
    db: Session,
    ledger: ReputationLedger,
    question_id: str,
    author_id: str,
    content: str,
) -> Answer:
    """Look up the author's reputation in the question's category and submit."""
    author_id = get_user(db, author_id).id
    category = _category_of(db, question_id)
    reputation = ledger.get(category, author_id)
    return submit_answer(db, question_id, author_id, content, reputation)


def vote_on_answer(
    db: Session,
    ledger: ReputationLedger,
    voter_id: str,
    answer_id: str,
    delta: int,
) -> VoteResult:
    recipient_id, question_id = cast_vote(db, answer_id, delta)
    category = _category_of(db, question_id)

    rewarded = _apply_reward(ledger, category, RewardTarget.VOTER, voter_id, recipient_id, delta)
    assessment = assess_answers(db, question_id)

    return VoteResult(
        question_id=question_id,
        answer_id=answer_id,
        recipient_id=recipient_id,
        rewarded_user_id=rewarded,
        reward=delta if rewarded else 0,
        assessment=assessment,
    )


def vote_on_question(
    db: Session,
    ledger: ReputationLedger,
    voter_id: str,
    question_id: str,
    delta: int,
) -> VoteResult:
    voted = cast_question_vote(db, question_id, delta)
    category = _category_of(db, question_id)

    answer_id = recipient_id = rewarded = None
    if voted is not None:
        answer_id, recipient_id = voted
        rewarded = _apply_reward(ledger, category, RewardTarget.AUTHOR, voter_id, recipient_id, 1)

    assessment = assess_answers(db, question_id)
    return VoteResult(
        question_id=question_id,
        answer_id=answer_id,
        recipient_id=recipient_id,
        rewarded_user_id=rewarded,
        reward=1 if rewarded else 0,
        assessment=assessment,
    )
