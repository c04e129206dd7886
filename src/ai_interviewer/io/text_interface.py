"""
Text-based interview interface.

Provides a command-line interface for conducting interviews
via text input/output.
"""

import os
from abc import ABC, abstractmethod

from ai_interviewer.errors import DocumentError, InterviewError
from ai_interviewer.io.documents import read_document
from ai_interviewer.orchestrator.interview_orchestrator import InterviewOrchestrator

END_COMMANDS = ("quit", "exit", "end")


class InterviewInterface(ABC):
    """Abstract base class for interview interfaces."""

    @abstractmethod
    async def run(self) -> None:
        """Run the interview interface."""
        ...

    @abstractmethod
    async def send_message(self, message: str) -> None:
        """
        Send a message to the user.

        Args:
            message: Message to display.
        """
        ...

    @abstractmethod
    async def receive_input(self) -> str:
        """
        Receive input from the user.

        Returns:
            User's input string.
        """
        ...


class TextInterface(InterviewInterface):
    """
    Command-line text interface for interviews.

    Provides a simple REPL for conducting interviews via terminal.
    """

    def __init__(
        self,
        orchestrator: InterviewOrchestrator,
        resume_text: str | None = None,
        job_description_text: str | None = None,
    ) -> None:
        """
        Initialize the text interface.

        Args:
            orchestrator: Interview orchestrator to use.
            resume_text: Resume text (asked for interactively if None).
            job_description_text: Job description text (asked for interactively if None).
        """
        self._orchestrator = orchestrator
        self._resume_text = resume_text
        self._job_description_text = job_description_text

    async def run(self) -> None:
        """Run the interactive interview session."""
        print("\n" + "=" * 60)
        print("Welcome to the AI Interviewer")
        print("=" * 60 + "\n")

        resume_text = self._resume_text or await self._get_document("resume")
        job_description_text = self._job_description_text or await self._get_document("job description")

        try:
            started = await self._orchestrator.start_interview(resume_text, job_description_text)
        except InterviewError as e:
            print(f"Could not start the interview: {e}")
            return

        print("\n" + "-" * 60)
        print(f"Interview {started.interview_id}")
        print(f"Type one of {', '.join(END_COMMANDS)} to finish early.")
        print("-" * 60 + "\n")

        await self.send_message(f"Interviewer: {started.first_question}")

        # Interview loop
        while True:
            candidate_input = await self.receive_input()

            if candidate_input.strip().lower() in END_COMMANDS:
                print("\nEnding interview...")
                await self._orchestrator.end_interview(started.interview_id)
                break

            if not candidate_input.strip():
                continue

            answer = await self._orchestrator.submit_answer(started.interview_id, candidate_input)
            await self.send_message(f"Interviewer: {answer.next_question}")
            if answer.should_end:
                break

        await self._display_feedback(started.interview_id)

    async def send_message(self, message: str) -> None:
        """
        Display a message to the terminal.

        Args:
            message: Message to display.
        """
        print(f"\n{message}\n")

    async def receive_input(self) -> str:
        """
        Get input from the terminal.

        Returns:
            User's input string.
        """
        return await self._get_input("You: ")

    async def _get_input(self, prompt: str) -> str:
        """
        Get input with a specific prompt.

        Args:
            prompt: Prompt to display.

        Returns:
            User's input.
        """
        try:
            return input(prompt)
        except EOFError:
            return "exit"

    async def _get_document(self, label: str) -> str:
        """
        Get a document either from a file path or as pasted text.

        Args:
            label: Human-readable name of the document.

        Returns:
            The document text (may be empty).
        """
        print(f"\nProvide the {label}: enter a file path, or paste the text")
        print("followed by a blank line.\n")

        while True:
            first = await self._get_input("")
            if first == "exit":
                return ""
            candidate_path = os.path.abspath(os.path.expanduser(first.strip())) if first.strip() else ""
            if not (candidate_path and os.path.isfile(candidate_path)):
                break
            try:
                return read_document(candidate_path)
            except DocumentError as e:
                print(f"Could not read that file: {e}")
                print(f"Try another path, or paste the {label} text.\n")

        lines: list[str] = [first]
        while True:
            line = await self._get_input("")
            if not line.strip() or line == "exit":
                break
            lines.append(line)
        return "\n".join(lines).strip()

    async def _display_feedback(self, interview_id: str) -> None:
        """
        Display the stored feedback for an interview.

        Args:
            interview_id: Interview to display.
        """
        result = await self._orchestrator.get_feedback(interview_id)
        session = await self._orchestrator.get_session(interview_id)

        print("\n" + "=" * 60)
        print("Interview Feedback")
        print("=" * 60)
        print(f"\nInterview: {interview_id}")
        print(f"Total turns: {len(session.transcript)}")
        print(f"\n{result.feedback}")
        print("\n" + "=" * 60)
