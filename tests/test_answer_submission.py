"""
Tests for the Answer Submission Pipeline.
"""
import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from answerboard.errors import DuplicateError, NotFoundError, StorageError, ValidationError
from answerboard.models import Answer
from answerboard.services.answer_submission import required_upvotes_for, submit_answer
from tests.helpers.qa_helpers import make_question, make_user, reload


@pytest.mark.parametrize("reputation,expected", [
    (5, 20),
    (0, 25),
    (25, 0),
    (30, -5),
    (-4, 29),
])
def test_required_upvotes_from_reputation(reputation, expected):
    assert required_upvotes_for(reputation) == expected


def test_submit_stores_answer_and_bumps_pending(db: Session, question):
    answerer = make_user(db, "answerer")

    answer = submit_answer(db, question.id, answerer.id, "Always to never", reputation=5)

    assert answer.id is not None
    assert answer.upvotes == 0
    assert answer.required_upvotes == 20
    assert answer.is_current_answer is False
    assert reload(db, question).pending_count == 1


def test_full_question_rejects_submission(db: Session, author, category):
    question = make_question(db, author, category, pending_count=5)
    answerer = make_user(db, "answerer")

    with pytest.raises(ValidationError):
        submit_answer(db, question.id, answerer.id, "Too late", reputation=5)

    assert db.query(Answer).count() == 0
    assert reload(db, question).pending_count == 5


def test_fifth_slot_is_last(db: Session, author, category):
    question = make_question(db, author, category, pending_count=4)
    first = make_user(db, "first")
    second = make_user(db, "second")

    submit_answer(db, question.id, first.id, "Made it", reputation=5)
    with pytest.raises(ValidationError):
        submit_answer(db, question.id, second.id, "Did not", reputation=5)

    assert reload(db, question).pending_count == 5
    assert db.query(Answer).count() == 1


def test_duplicate_submission_rejected_without_state_change(db: Session, question):
    answerer = make_user(db, "answerer")
    submit_answer(db, question.id, answerer.id, "Not Utah", reputation=10)

    with pytest.raises(DuplicateError):
        submit_answer(db, question.id, answerer.id, "Not Utah", reputation=10)

    assert reload(db, question).pending_count == 1
    assert db.query(Answer).count() == 1


def test_same_content_with_different_threshold_is_not_duplicate(db: Session, question):
    answerer = make_user(db, "answerer")
    submit_answer(db, question.id, answerer.id, "Not Utah", reputation=10)
    submit_answer(db, question.id, answerer.id, "Not Utah", reputation=11)

    assert db.query(Answer).count() == 2
    assert reload(db, question).pending_count == 2


def test_empty_content_rejected(db: Session, question):
    answerer = make_user(db, "answerer")
    with pytest.raises(ValidationError):
        submit_answer(db, question.id, answerer.id, "   ", reputation=5)


def test_unknown_question_raises_not_found(db: Session):
    answerer = make_user(db, "answerer")
    with pytest.raises(NotFoundError):
        submit_answer(db, str(uuid.uuid4()), answerer.id, "Hello", reputation=5)


def test_malformed_ids_raise_not_found(db: Session, question):
    answerer = make_user(db, "answerer")
    with pytest.raises(NotFoundError):
        submit_answer(db, "q-42", answerer.id, "Hello", reputation=5)
    with pytest.raises(NotFoundError):
        submit_answer(db, question.id, "u-42", "Hello", reputation=5)

    assert db.query(Answer).count() == 0
    assert reload(db, question).pending_count == 0


def test_storage_failure_leaves_nothing_behind(db: Session, question, monkeypatch):
    """The answer row and the pending bump commit together or not at all."""
    answerer = make_user(db, "answerer")
    real_commit = db.commit

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(StorageError):
        submit_answer(db, question.id, answerer.id, "Lost", reputation=5)
    monkeypatch.setattr(db, "commit", real_commit)

    assert db.query(Answer).count() == 0
    assert reload(db, question).pending_count == 0
