"""CopyWriter agent: proposes and refines a single piece of copy."""

from typing import Optional

from .base import ChatAgent, CompletionProvider

WRITER_NAME = "CopyWriter"

WRITER_INSTRUCTIONS = """You are a copywriter with ten years of experience and are known for brevity and a dry humor.
The goal is to refine and decide on the single best copy as an expert in the field.
Only provide a single proposal per response.
You're laser focused on the goal at hand.
Don't waste time with chit chat.
Consider suggestions when refining an idea."""


class CopyWriterAgent(ChatAgent):
    """Generator role: writes one proposal per turn and revises on feedback."""

    def __init__(
        self,
        provider: CompletionProvider,
        name: Optional[str] = None,
        instructions: Optional[str] = None,
    ):
        super().__init__(
            name=name or WRITER_NAME,
            instructions=instructions or WRITER_INSTRUCTIONS,
            provider=provider,
        )
