from answerboard.schemas import AssessmentOut, VoteOut
from answerboard.services.flows import VoteResult


def vote_response(result: VoteResult) -> VoteOut:
    assessment = result.assessment
    return VoteOut(
        question_id=result.question_id,
        answer_id=result.answer_id,
        recipient_id=result.recipient_id,
        rewarded_user_id=result.rewarded_user_id,
        reward=result.reward,
        assessment=AssessmentOut(
            outcome=assessment.outcome.value,
            promoted_id=assessment.promoted_id,
            demoted_id=assessment.demoted_id,
            purged_ids=assessment.purged_ids,
        ),
    )
