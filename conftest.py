"""Shared fakes for the group chat tests."""

from typing import Callable, List, Optional, Sequence, Tuple, Union

import pytest

from groupchat.agents import ArtDirectorAgent, CopyWriterAgent
from groupchat.orchestration import (
    ApprovalTerminationStrategy,
    GroupChatOrchestrator,
    PromptSelectionStrategy,
    SelectionPolicy,
)
from groupchat.utils.errors import CompletionProviderError, ErrorContext, ErrorType

Answer = Union[str, Callable[[str], str]]


class ScriptedProvider:
    """
    Completion provider that replays canned answers.

    Answers are used in order and the last one repeats once the script runs
    out. An answer may be a callable taking the prompt context. fail_on is
    the 1-based call number that raises CompletionProviderError.
    """

    def __init__(self, answers: Sequence[Answer], fail_on: Optional[int] = None):
        self.answers = list(answers)
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str]] = []

    async def complete(self, instructions: str, context: str) -> str:
        self.calls.append((instructions, context))
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise CompletionProviderError(
                ErrorContext(
                    error_type=ErrorType.BEDROCK_SERVICE_ERROR,
                    message="provider unavailable",
                    recoverable=False,
                )
            )
        answer = self.answers[min(len(self.calls), len(self.answers)) - 1]
        return answer(context) if callable(answer) else answer


def build_chat(
    writer_answers: Sequence[Answer] = ("Wake up and smell the ambition.",),
    reviewer_answers: Sequence[Answer] = ("Needs more punch.",),
    selection_answers: Sequence[Answer] = ("CopyWriter", "ArtDirector"),
    termination_answers: Sequence[Answer] = ("no",),
    maximum_iterations: int = 10,
):
    """Build an orchestrator wired to scripted providers; returns (chat, providers)."""
    providers = {
        "writer": ScriptedProvider(writer_answers),
        "reviewer": ScriptedProvider(reviewer_answers),
        "selection": ScriptedProvider(selection_answers),
        "termination": ScriptedProvider(termination_answers),
    }
    writer = CopyWriterAgent(providers["writer"])
    reviewer = ArtDirectorAgent(providers["reviewer"])
    chat = GroupChatOrchestrator(
        agents=[writer, reviewer],
        selection_strategy=PromptSelectionStrategy(
            providers["selection"], SelectionPolicy.for_agents(writer.name, reviewer.name)
        ),
        termination_strategy=ApprovalTerminationStrategy(
            providers["termination"], agents=[reviewer], maximum_iterations=maximum_iterations
        ),
    )
    return chat, providers


@pytest.fixture
def writer():
    return CopyWriterAgent(ScriptedProvider(["Fresh brew, fresh you."]))


@pytest.fixture
def reviewer():
    return ArtDirectorAgent(ScriptedProvider(["Approved."]))
