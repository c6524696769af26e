"""
Models package - organized by domain
"""
from .user import User, Category
from .question import Question, Answer
from .reputation import ReputationRecord

__all__ = [
    "User",
    "Category",
    "Question",
    "Answer",
    "ReputationRecord",
]
