# Schemas package
from .qa import (
    AnswerCreate,
    AnswerOut,
    AssessmentOut,
    CategoryCreate,
    CategoryOut,
    PostOut,
    QuestionCreate,
    QuestionOut,
    ReputationOut,
    UserCreate,
    UserOut,
    VoteOut,
)

__all__ = [
    "AnswerCreate", "AnswerOut", "AssessmentOut",
    "CategoryCreate", "CategoryOut",
    "PostOut", "QuestionCreate", "QuestionOut",
    "ReputationOut", "UserCreate", "UserOut", "VoteOut",
]
