from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=20)


class UserOut(BaseModel):
    id: str
    username: str
    created_at: datetime

    class Config:
        from_attributes = True


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=15)


class CategoryOut(BaseModel):
    id: str
    name: str
    created_by: str

    class Config:
        from_attributes = True


class QuestionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class QuestionOut(BaseModel):
    id: str
    user_id: str
    category_id: str
    title: str
    content: str
    upvotes: int
    edit_count: int
    pending_count: int
    submitted_at: datetime

    class Config:
        from_attributes = True


class AnswerCreate(BaseModel):
    content: str = Field(..., min_length=1)


class AnswerOut(BaseModel):
    id: str
    question_id: str
    user_id: str
    content: str
    upvotes: int
    required_upvotes: int
    is_current_answer: bool
    last_edited_at: datetime

    class Config:
        from_attributes = True


class PostOut(BaseModel):
    """A question with its current answer, if any"""
    question: QuestionOut
    answer: Optional[AnswerOut] = None


class AssessmentOut(BaseModel):
    outcome: str
    promoted_id: Optional[str] = None
    demoted_id: Optional[str] = None
    purged_ids: List[str] = []


class VoteOut(BaseModel):
    question_id: str
    answer_id: Optional[str] = None
    recipient_id: Optional[str] = None
    rewarded_user_id: Optional[str] = None
    reward: int = 0
    assessment: AssessmentOut


class ReputationOut(BaseModel):
    category: str
    user_id: str
    score: int
