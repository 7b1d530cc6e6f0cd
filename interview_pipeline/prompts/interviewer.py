"""
AI Interviewer Prompt Templates

Prompts for generating follow-up questions after a candidate's answer.
"""


class InterviewerPrompts:
    """
    Prompt templates for follow-up question generation.

    Follow-ups probe three directions:
    - Depth: dig deeper into the response
    - Vagueness: clarify unclear points
    - Examples: explore concrete details they mentioned
    """

    SYSTEM_CONTEXT = (
        "You are a professional interview coach. Generate exactly 3 short, insightful "
        "follow-up questions based on the candidate's response. Keep questions concise "
        "and relevant."
    )

    def generate_followup_prompt(
        self,
        answer_text: str,
        original_question: str,
        question_type: str,
    ) -> str:
        """Generate prompt for three follow-up questions."""
        return f"""Original Interview Question ({question_type}): "{original_question}"

Candidate's Response: "{answer_text}"

Generate exactly 3 short follow-up questions (each under 15 words) that:
1. Dig deeper into their response
2. Clarify any vague points
3. Explore specific examples or details they mentioned

Format: Return only the 3 questions, numbered 1-3, one per line."""
