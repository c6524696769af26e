"""
HTTP tests for answer voting, including the promotion it triggers.
"""
import uuid

from fastapi.testclient import TestClient

from tests.helpers.qa_helpers import make_answer, make_question, make_user, reload


def auth(user) -> dict:
    return {"X-User-Id": str(user.id)}


def test_upvote_rewards_voter(client: TestClient, db, question):
    voter = make_user(db, "voter")
    answer = make_answer(db, question, upvotes=4)

    response = client.post(f"/v1/answers/{answer.id}/upvote", headers=auth(voter))

    assert response.status_code == 200
    body = response.json()
    assert body["question_id"] == question.id
    assert body["rewarded_user_id"] == voter.id
    assert body["reward"] == 1
    assert reload(db, answer).upvotes == 5
    assert client.get(f"/v1/reputation/fitness/{voter.id}").json()["score"] == 6


def test_vote_direction_is_case_insensitive(client: TestClient, db, question):
    voter = make_user(db, "voter")
    answer = make_answer(db, question, upvotes=4)

    response = client.post(f"/v1/answers/{answer.id}/DOWNVOTE", headers=auth(voter))

    assert response.status_code == 200
    assert reload(db, answer).upvotes == 3


def test_qualifying_vote_promotes_and_demotes(client: TestClient, db, author, category):
    question = make_question(db, author, category, title="contested", pending_count=1)
    old = make_answer(db, question, upvotes=15, required_upvotes=15, current=True)
    challenger = make_answer(db, question, upvotes=29, required_upvotes=20)
    voter = make_user(db, "voter")

    response = client.post(f"/v1/answers/{challenger.id}/upvote", headers=auth(voter))

    assessment = response.json()["assessment"]
    assert assessment["outcome"] == "promoted_and_demoted"
    assert assessment["promoted_id"] == challenger.id
    assert assessment["demoted_id"] == old.id

    post = client.get(f"/v1/questions/{question.id}").json()
    assert post["answer"]["id"] == challenger.id
    assert post["question"]["edit_count"] == 1


def test_downvote_to_zero_purges(client: TestClient, db, question):
    voter = make_user(db, "voter")
    answer = make_answer(db, question, upvotes=1)
    answer_id = answer.id

    response = client.post(f"/v1/answers/{answer_id}/downvote", headers=auth(voter))

    assert response.status_code == 200
    assert response.json()["assessment"]["purged_ids"] == [answer_id]

    again = client.post(f"/v1/answers/{answer_id}/upvote", headers=auth(voter))
    assert again.status_code == 404


def test_vote_requires_caller(client: TestClient, db, question):
    answer = make_answer(db, question, upvotes=4)

    response = client.post(f"/v1/answers/{answer.id}/upvote")

    assert response.status_code == 401
    assert reload(db, answer).upvotes == 4


def test_unknown_answer(client: TestClient, author):
    response = client.post(f"/v1/answers/{uuid.uuid4()}/upvote", headers=auth(author))

    assert response.status_code == 404


def test_malformed_answer_id(client: TestClient, author):
    response = client.post("/v1/answers/not-a-uuid/upvote", headers=auth(author))

    assert response.status_code == 422
