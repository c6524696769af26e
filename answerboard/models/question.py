"""
Question and Answer rows.

Counters on Question are bookkeeping owned by the services:
  - pending_count: candidate answers not yet purged or promoted
  - edit_count: number of times the current answer has changed
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from ..db import Base
from ..core.uuid_type import UUIDType, new_id


class Question(Base):
    __tablename__ = "questions"
    id = Column(UUIDType, primary_key=True, default=new_id)
    user_id = Column(UUIDType, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(UUIDType, ForeignKey("categories.id"), nullable=False, index=True)
    title = Column(String(255), unique=True, nullable=False)
    content = Column(Text, nullable=False)
    upvotes = Column(Integer, default=0, nullable=False)
    edit_count = Column(Integer, default=0, nullable=False)
    pending_count = Column(Integer, default=0, nullable=False)
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    author = relationship("User")
    category = relationship("Category")
    answers = relationship("Answer", back_populates="question", cascade="all, delete-orphan", passive_deletes=True)


class Answer(Base):
    __tablename__ = "answers"
    id = Column(UUIDType, primary_key=True, default=new_id)
    question_id = Column(UUIDType, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(UUIDType, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    upvotes = Column(Integer, default=0, nullable=False)
    required_upvotes = Column(Integer, default=0, nullable=False)  # fixed at submission: ceiling - author reputation
    is_current_answer = Column(Boolean, default=False, nullable=False)
    last_edited_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    question = relationship("Question", back_populates="answers")
    author = relationship("User")

    __table_args__ = (
        Index("ix_answers_question_ranking", "question_id", "upvotes", "is_current_answer"),
    )

    @property
    def is_qualified(self) -> bool:
        return self.upvotes >= self.required_upvotes
