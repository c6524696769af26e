"""
Question routes: posting, lookup, listing, answering and voting.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from answerboard.db import get_db
from answerboard.dependencies import get_current_user_id, get_reputation_ledger
from answerboard.routers._responses import vote_response
from answerboard.schemas import AnswerCreate, AnswerOut, PostOut, QuestionCreate, QuestionOut, VoteOut
from answerboard.services import flows, question_service
from answerboard.services.reputation_ledger import ReputationLedger
from answerboard.services.vote_processor import parse_vote

router = APIRouter(prefix="/v1/questions", tags=["questions"])


@router.get("/sorting")
def list_sorting_options():
    """Sort keys accepted by the sorted listing, per component"""
    return question_service.sortable_fields()


@router.get("/filter/{filter_name}/{value}", response_model=List[QuestionOut])
def questions_by_filter(filter_name: str, value: str, db: Session = Depends(get_db)):
    return question_service.find_questions_by_filter(db, filter_name, value)


@router.get("/sorted/{component}/{field}/{order}", response_model=List[QuestionOut])
def sorted_questions(
    component: str,
    field: str,
    order: str,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return question_service.sort_questions(db, component, field, order, offset)


@router.get("/{question_id}", response_model=PostOut)
def get_post(question_id: UUID, db: Session = Depends(get_db)):
    question, answer = question_service.find_post_by_id(db, str(question_id))
    return PostOut(
        question=QuestionOut.model_validate(question),
        answer=AnswerOut.model_validate(answer) if answer is not None else None,
    )


@router.post("/{question_id}/answers", response_model=AnswerOut, status_code=status.HTTP_201_CREATED)
def submit_answer(
    question_id: UUID,
    payload: AnswerCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ledger: ReputationLedger = Depends(get_reputation_ledger),
):
    return flows.submit_answer_for(db, ledger, str(question_id), user_id, payload.content)


@router.post("/{question_id}/{vote}", response_model=VoteOut)
def vote_on_question(
    question_id: UUID,
    vote: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ledger: ReputationLedger = Depends(get_reputation_ledger),
):
    result = flows.vote_on_question(db, ledger, user_id, str(question_id), parse_vote(vote))
    return vote_response(result)


@router.post("/{category}", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
def post_question(
    category: str,
    payload: QuestionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ledger: ReputationLedger = Depends(get_reputation_ledger),
):
    return question_service.store_question(db, ledger, user_id, category, payload.title, payload.content)
