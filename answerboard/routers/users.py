from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from answerboard.db import get_db
from answerboard.dependencies import get_current_user_id, get_reputation_ledger
from answerboard.schemas import CategoryCreate, CategoryOut, ReputationOut, UserCreate, UserOut
from answerboard.services import directory
from answerboard.services.reputation_ledger import ReputationLedger

router = APIRouter(prefix="/v1", tags=["users"])


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return directory.create_user(db, payload.username)


@router.get("/users/{lookup}/{value}", response_model=UserOut)
def find_user(lookup: str, value: str, db: Session = Depends(get_db)):
    """Find a user by `id` or `username`"""
    return directory.find_user(db, lookup, value)


@router.post("/categories", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return directory.create_category(db, payload.name, user_id)


@router.get("/reputation/{category}/{user_id}", response_model=ReputationOut)
def get_reputation(
    category: str,
    user_id: UUID,
    ledger: ReputationLedger = Depends(get_reputation_ledger),
):
    category = directory.normalize_category(category)
    return ReputationOut(category=category, user_id=str(user_id), score=ledger.get(category, str(user_id)))
