"""
Prompt builder.

Assembles the role-tagged message lists sent to the model for each kind of
interaction: summarization, the opening question, follow-ups, and the final
feedback.
"""

from ai_interviewer.models.llm_client import Message
from ai_interviewer.orchestrator.response_parser import END_INTERVIEW_MARKER


class PromptBuilder:
    """
    Builds chat prompts from condensed documents and transcript projections.

    Every method is pure: the same inputs always give the same messages.
    """

    SUMMARY_PROMPT = """Please summarize the following text. The summary will be used for {purpose}. Condense it significantly while retaining all key information, names, skills, and dates relevant to that purpose. Aim for a summary that is around {target_length} tokens or less if possible, but prioritize completeness of key information over strict token count if necessary.

Text to summarize:
---
{text}
---
Summary:"""

    OPENING_PROMPT = """You are an AI interviewer. Your task is to formulate an engaging opening interview question.

Use the **Job Description Summary** below to understand the requirements and skills needed for the role.
Use the **Resume Summary** below to understand the candidate's experience.

Based on BOTH, ask an initial question that either:
a) Asks the candidate to elaborate on a specific experience from their **Resume Summary** that seems relevant to a key requirement in the **Job Description Summary**.
OR
b) Poses a general question about their interest or suitability for the role, referencing a key aspect of the **Job Description Summary**.

Do NOT assume the Job Description is the candidate's experience.

Job Description Summary:
{job_description}

Resume Summary:
{resume}

Opening Question:"""

    FOLLOW_UP_PROMPT = f"""You are an AI interviewer. You have already been provided with the candidate's resume and the job description for the role. Continue the interview based on the conversation history. Focus on asking follow-up questions based on the candidate's answers, relating them back to their experience (from the resume) and the job requirements (from the job description) where appropriate. Do not repeat questions. Evaluate the user's response and compare it with the job description to judge the candidate's suitability for the role.

IMPORTANT: After asking a sufficient number of questions (e.g., 5-7 substantive questions, or if you feel you have a strong assessment), you can choose to conclude the interview. To do this, begin your final response with the exact phrase {END_INTERVIEW_MARKER} followed by your concluding remarks or a final neutral statement. Do not ask another question if you are ending the interview."""

    FEEDBACK_PROMPT = """You are an expert interviewer and talent acquisition specialist.
Based on the provided Resume Summary, Job Description Summary, and the full Interview Transcript, provide comprehensive feedback for the candidate.

Your feedback should include:
1. A brief summary of the candidate's performance during the interview.
2. Strengths demonstrated by the candidate relevant to the job description summary.
3. Areas for improvement or aspects where the candidate could have been more convincing.
4. An overall assessment of the candidate's suitability for the role described in the Job Description Summary. Clearly state whether you consider the candidate a strong fit, a potential fit (mentioning any gaps), or not a good fit at this time, and provide a concise justification for your assessment.

Resume Summary: {resume}
Job Description Summary: {job_description}

Interview Transcript is provided next. Focus your feedback on the transcript content in light of the resume and JD summaries."""

    def summary(self, text: str, purpose: str, target_length: int) -> list[Message]:
        """
        Build a single-message summarization request.

        Args:
            text: Text to condense.
            purpose: What the summary will be used for.
            target_length: Approximate summary size in tokens.

        Returns:
            Messages for the completion client.
        """
        content = self.SUMMARY_PROMPT.format(
            purpose=purpose,
            target_length=target_length,
            text=text,
        )
        return [Message(role="user", content=content)]

    def opening_question(self, resume: str, job_description: str) -> list[Message]:
        """
        Build the request for the first interview question.

        Args:
            resume: Condensed resume text.
            job_description: Condensed job description text.

        Returns:
            Messages for the completion client.
        """
        content = self.OPENING_PROMPT.format(
            job_description=job_description,
            resume=resume,
        )
        return [Message(role="user", content=content)]

    def follow_up(self, history: list[Message]) -> list[Message]:
        """
        Build the request for the next interviewer turn.

        The whole conversation is replayed after the fixed system
        instruction on every turn.

        Args:
            history: Transcript projected onto assistant/user roles.

        Returns:
            Messages for the completion client.
        """
        return [Message(role="system", content=self.FOLLOW_UP_PROMPT), *history]

    def feedback(self, resume: str, job_description: str, history: list[Message]) -> list[Message]:
        """
        Build the request for the final assessment.

        Args:
            resume: Condensed resume text.
            job_description: Condensed job description text.
            history: Transcript projected onto assistant/user roles.

        Returns:
            Messages for the completion client.
        """
        content = self.FEEDBACK_PROMPT.format(
            resume=resume,
            job_description=job_description,
        )
        return [Message(role="system", content=content), *history]
