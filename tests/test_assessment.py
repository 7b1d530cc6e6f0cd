import json

import pytest

from interview_pipeline.core.assessment import AssessmentAggregator, compute_metrics
from interview_pipeline.core.errors import ParseError
from interview_pipeline.models.analysis import AnswerScores
from interview_pipeline.models.assessment import InterviewRecord, TurnRecord
from interview_pipeline.models.proctoring import Severity, Violation, ViolationAction, ViolationType

from conftest import FakeTextProvider


def assessment_payload(**overrides) -> dict:
    payload = {
        "overallScore": 78,
        "breakdown": {"communication": 82, "technical": 74, "problemSolving": 70, "confidence": 85},
        "strengths": ["Clear structure", "Concrete metrics", "Calm delivery"],
        "improvements": ["More depth on trade-offs", "Shorter intros", "Name the tools"],
        "recommendations": ["Practice STAR", "Prepare system design", "Review SQL", "Mock more", "Sleep", "Extra"],
        "feedback": "A solid interview with room to deepen technical answers.",
        "questionTypeAnalysis": {"behavioral": "Strong", "technical": "Adequate"},
    }
    payload.update(overrides)
    return payload


def high_violation() -> Violation:
    return Violation(
        type=ViolationType.MULTIPLE_FACES,
        severity=Severity.HIGH,
        description="2 faces detected - only one person allowed",
        confidence=0.95,
        action=ViolationAction.PAUSE_INTERVIEW,
    )


@pytest.fixture
def interview():
    return InterviewRecord(
        interview_id="int-1",
        interview_type="mixed",
        duration_seconds=900,
        turns=[
            TurnRecord(
                question="Tell me about a conflict on your team.",
                question_type="behavioral",
                response_text="We disagreed on the rollout plan so I set up a review.",
                confidence=0.9,
                scores=AnswerScores(clarity=80, relevance=70, depth=60, structure=75),
                violations=[high_violation()],
            ),
            TurnRecord(
                question="How would you design a rate limiter?",
                question_type="technical",
                response_text="A token bucket per client stored in Redis.",
                confidence=0.7,
            ),
            TurnRecord(
                question="Why this company?",
                answered=False,
            ),
        ],
    )


async def test_aggregate_maps_provider_fields(settings, interview):
    provider = FakeTextProvider("Assessment:\n" + json.dumps(assessment_payload()))

    assessment = await AssessmentAggregator(provider, settings).aggregate(interview)

    assert assessment.interview_id == "int-1"
    assert assessment.overall_score == 78
    assert assessment.breakdown.problem_solving == 70
    assert assessment.recommendations == [
        "Practice STAR", "Prepare system design", "Review SQL", "Mock more", "Sleep",
    ]
    assert assessment.question_type_analysis.technical == "Adequate"
    assert len(provider.calls) == 1
    assert provider.calls[0]["temperature"] == 0.3
    assert provider.calls[0]["max_tokens"] == 1500


async def test_prompt_embeds_turns_and_individual_scores(settings, interview):
    provider = FakeTextProvider(json.dumps(assessment_payload()))
    await AssessmentAggregator(provider, settings).aggregate(interview)

    prompt = provider.calls[0]["prompt"]
    assert "Q2: How would you design a rate limiter?" in prompt
    assert "A3: No response provided" in prompt
    assert "Question 1 AI Analysis:" in prompt
    assert "- Clarity: 80/100" in prompt
    assert "- Relevance: 70/100" in prompt
    assert "- Depth: 60/100" in prompt
    assert "- Structure: 75/100" in prompt
    assert "- Communication:" not in prompt
    assert "Question 2 AI Analysis:" not in prompt


async def test_scores_are_clamped(settings, interview):
    payload = assessment_payload(overallScore=130)
    payload["breakdown"]["technical"] = -4

    assessment = await AssessmentAggregator(FakeTextProvider(json.dumps(payload)), settings).aggregate(interview)

    assert assessment.overall_score == 100
    assert assessment.breakdown.technical == 0


async def test_no_json_fails(settings, interview):
    aggregator = AssessmentAggregator(FakeTextProvider("The candidate did well overall."), settings)
    with pytest.raises(ParseError):
        await aggregator.aggregate(interview)


@pytest.mark.parametrize("overrides", [
    {"overallScore": "high"},
    {"breakdown": None},
    {"strengths": ["Only one", "Two"]},
    {"feedback": ""},
])
async def test_incomplete_assessment_fails(settings, interview, overrides):
    provider = FakeTextProvider(json.dumps(assessment_payload(**overrides)))

    with pytest.raises(ParseError) as exc_info:
        await AssessmentAggregator(provider, settings).aggregate(interview)

    assert exc_info.value.component == "assessment"


async def test_non_finite_scores_fail(settings, interview):
    payload = assessment_payload(overallScore=float("nan"))
    payload["breakdown"]["technical"] = float("inf")

    with pytest.raises(ParseError) as exc_info:
        await AssessmentAggregator(FakeTextProvider(json.dumps(payload)), settings).aggregate(interview)

    assert "overallScore" in str(exc_info.value)


async def test_missing_breakdown_dimension_fails(settings, interview):
    payload = assessment_payload()
    del payload["breakdown"]["problemSolving"]

    with pytest.raises(ParseError):
        await AssessmentAggregator(FakeTextProvider(json.dumps(payload)), settings).aggregate(interview)


def test_local_metrics(interview):
    metrics = compute_metrics(interview)

    assert metrics.average_confidence == 80
    assert metrics.total_violations == 1
    assert metrics.completion_rate == 67
    # 12 and 8 words
    assert metrics.average_word_count == 10
    assert metrics.questions_with_ai == 1
    assert metrics.total_questions == 3


def test_metrics_for_empty_interview():
    metrics = compute_metrics(InterviewRecord(interview_id="empty"))
    assert metrics.average_confidence == 0
    assert metrics.completion_rate == 0
    assert metrics.total_questions == 0
