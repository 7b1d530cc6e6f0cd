"""
AI Evaluator Prompt Templates

Contains structured prompts for analyzing a single candidate answer.

Scoring dimensions (0-100):
- Clarity
- Relevance
- Depth
- Structure
"""


class EvaluatorPrompts:
    """
    Prompt templates for AI analysis of one answer.

    Key principles:
    - Objective, dimension-based scoring
    - STAR method for behavioral answers
    - Actionable improvement suggestions
    """

    SYSTEM_CONTEXT = (
        "You are an expert interview coach with deep knowledge of technical and "
        "behavioral interviews. Provide detailed, actionable feedback with specific "
        "scores and improvement suggestions."
    )

    def generate_analysis_prompt(
        self,
        transcript: str,
        question: str,
        question_type: str,
    ) -> str:
        """Generate prompt for analyzing a response."""
        return f"""Question Type: {question_type}
Original Question: "{question}"
Candidate Response: "{transcript}"

Please provide a comprehensive analysis in the following JSON format:
{{
  "analysis": "Detailed analysis of the response quality, structure, and content",
  "confidence": <number 0-1>,
  "scores": {{
    "clarity": <number 0-100>,
    "relevance": <number 0-100>,
    "depth": <number 0-100>,
    "structure": <number 0-100>
  }},
  "suggestions": ["Specific improvement suggestion 1", "Specific improvement suggestion 2", "Specific improvement suggestion 3"]
}}

Focus on:
- Response clarity and articulation
- Relevance to the question
- Depth of technical knowledge (for technical questions)
- Use of specific examples and STAR method (for behavioral questions)
- Structure and organization of the response
- Actionable improvement suggestions"""
