"""ArtDirector agent: reviews copy and either approves it or asks for changes."""

from typing import Optional

from .base import ChatAgent, CompletionProvider

REVIEWER_NAME = "ArtDirector"

REVIEWER_INSTRUCTIONS = """You are an art director who has opinions about copywriting born of a love for David Ogilvy.
The goal is to determine if the given copy is acceptable to print.
If so, state that it is approved.
If not, provide insight on how to refine suggested copy without example."""


class ArtDirectorAgent(ChatAgent):
    """
    Critic role.

    Its turns are the only ones the termination strategy evaluates, so the
    instructions ask it to state approval explicitly.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        name: Optional[str] = None,
        instructions: Optional[str] = None,
    ):
        super().__init__(
            name=name or REVIEWER_NAME,
            instructions=instructions or REVIEWER_INSTRUCTIONS,
            provider=provider,
        )
