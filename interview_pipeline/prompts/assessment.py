"""
AI Assessment Prompt Templates

Contains the prompt for the final, whole-interview assessment.
"""

from interview_pipeline.models.assessment import InterviewRecord


class AssessmentPrompts:
    """
    Prompt templates for the overall interview assessment.

    The prompt embeds every question/answer pair and, where available, the
    per-answer scores so the model can weigh them.
    """

    SYSTEM_CONTEXT = (
        "You are an expert interview assessor. Analyze the complete interview and "
        "provide detailed feedback with scores out of 100."
    )

    def generate_assessment_prompt(self, interview: InterviewRecord) -> str:
        """Generate prompt for the final assessment."""
        response_lines = []
        individual_lines = []

        for i, turn in enumerate(interview.turns, 1):
            response_lines.append(f"Q{i}: {turn.question}")
            response_lines.append(f"Type: {turn.question_type}")
            response_lines.append(f"A{i}: {turn.response_text or 'No response provided'}")
            response_lines.append("")

            if turn.scores:
                individual_lines.append(f"\nQuestion {i} AI Analysis:")
                individual_lines.append(f"- Clarity: {turn.scores.clarity:.0f}/100")
                individual_lines.append(f"- Relevance: {turn.scores.relevance:.0f}/100")
                individual_lines.append(f"- Depth: {turn.scores.depth:.0f}/100")
                individual_lines.append(f"- Structure: {turn.scores.structure:.0f}/100")

        responses = "\n".join(response_lines)
        individual = ""
        if individual_lines:
            individual = "Individual Question AI Assessments:" + "\n".join(individual_lines) + "\n"

        return f"""Interview Type: {interview.interview_type}
Duration: {interview.duration_seconds:.0f} seconds
Total Questions: {len(interview.turns)}

Questions and Responses:
{responses}
{individual}
Please provide a comprehensive final assessment that considers:

1. **Response Quality Analysis:**
   - Clarity and articulation of responses
   - Depth of technical knowledge demonstrated
   - Use of specific examples and STAR method
   - Consistency across all questions

2. **Question Type Performance:**
   - Behavioral question responses (leadership, teamwork, problem-solving)
   - Technical question responses (knowledge depth, problem-solving approach)
   - Communication effectiveness across different question types

3. **Overall Interview Performance:**
   - Response consistency and coherence
   - Time management and response completeness
   - Confidence and presentation skills
   - Adaptability to different question types

4. **Improvement Areas:**
   - Specific weaknesses identified
   - Areas for skill development
   - Communication enhancement opportunities

Please provide the assessment in the following JSON format:
{{
  "overallScore": <number 0-100>,
  "breakdown": {{
    "communication": <number 0-100>,
    "technical": <number 0-100>,
    "problemSolving": <number 0-100>,
    "confidence": <number 0-100>
  }},
  "strengths": [<array of 3-5 specific strength points with examples>],
  "improvements": [<array of 3-5 specific improvement areas with actionable suggestions>],
  "recommendations": [<array of 3-5 specific recommendations for future interviews>],
  "feedback": "<detailed paragraph feedback covering overall performance, specific examples from responses, and next steps>",
  "questionTypeAnalysis": {{
    "behavioral": "<analysis of behavioral question performance>",
    "technical": "<analysis of technical question performance>"
  }}
}}

IMPORTANT:
- Provide realistic scores based on actual response quality, not length
- Consider individual question AI assessments if available
- Give specific examples from the candidate's responses
- Focus on actionable feedback and improvement suggestions
- Consider the interview type and question difficulty in scoring"""
