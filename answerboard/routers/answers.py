from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from answerboard.db import get_db
from answerboard.dependencies import get_current_user_id, get_reputation_ledger
from answerboard.routers._responses import vote_response
from answerboard.schemas import VoteOut
from answerboard.services import flows
from answerboard.services.reputation_ledger import ReputationLedger
from answerboard.services.vote_processor import parse_vote

router = APIRouter(prefix="/v1/answers", tags=["answers"])


@router.post("/{answer_id}/{vote}", response_model=VoteOut)
def vote_on_answer(
    answer_id: UUID,
    vote: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ledger: ReputationLedger = Depends(get_reputation_ledger),
):
    """Upvote or downvote an answer, then re-assess its question."""
    result = flows.vote_on_answer(db, ledger, user_id, str(answer_id), parse_vote(vote))
    return vote_response(result)
