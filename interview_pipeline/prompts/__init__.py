"""
AI prompt templates for the interview pipeline.

Contains structured prompts for:
- Follow-up question generation
- Per-answer analysis
- Whole-interview assessment
"""

from interview_pipeline.prompts.interviewer import InterviewerPrompts
from interview_pipeline.prompts.evaluator import EvaluatorPrompts
from interview_pipeline.prompts.assessment import AssessmentPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
    "AssessmentPrompts",
]
