"""Tests for the group chat orchestrator loop."""

import pytest

from conftest import ScriptedProvider, build_chat
from groupchat.agents import ArtDirectorAgent, CopyWriterAgent
from groupchat.models.turn import AuthorRole
from groupchat.orchestration import (
    ApprovalTerminationStrategy,
    ChatState,
    CompletionReason,
    GroupChatOrchestrator,
    PromptSelectionStrategy,
    SelectionPolicy,
)
from groupchat.utils.errors import AgentError, CompletionProviderError, ConfigurationError, ErrorType

TASK = "Write a tagline for a coffee shop."
TAGLINE = "Fresh grounds for a fresh start."


def alternate(context: str) -> str:
    """Pick the critic after the writer, and the writer after anything else."""
    last_line = context.strip().splitlines()[-1]
    return "ArtDirector" if last_line.startswith("assistant-CopyWriter:") else "CopyWriter"


def approves_latest(context: str) -> str:
    return "yes" if context.rstrip().endswith("Approved.") else "no"


async def collect(chat):
    return [turn async for turn in chat.invoke()]


@pytest.mark.asyncio
async def test_tagline_session_ends_on_approval():
    chat, providers = build_chat(
        writer_answers=[TAGLINE],
        reviewer_answers=["Needs more punch.", "Approved."],
        selection_answers=[alternate],
        termination_answers=[approves_latest],
    )
    chat.add_user_message(TASK)

    turns = await collect(chat)

    assert [t.name for t in turns] == ["CopyWriter", "ArtDirector", "CopyWriter", "ArtDirector"]
    assert turns[-1].content == "Approved."
    assert all(t.role is AuthorRole.ASSISTANT for t in turns)
    assert chat.state is ChatState.TERMINATED
    assert chat.completion_reason is CompletionReason.APPROVED
    assert chat.transcript == turns
    assert len(providers["termination"].calls) == 2


@pytest.mark.asyncio
async def test_first_turn_sees_seeded_user_input():
    chat, providers = build_chat(selection_answers=[alternate], termination_answers=["yes"])
    chat.add_user_message(TASK)

    await collect(chat)

    instructions, context = providers["writer"].calls[0]
    assert context == f"user: {TASK}"
    assert instructions.startswith("You are a copywriter")


@pytest.mark.asyncio
async def test_iteration_ceiling_is_absolute():
    chat, providers = build_chat(selection_answers=[alternate], termination_answers=["no"], maximum_iterations=10)
    chat.add_user_message(TASK)

    turns = await collect(chat)

    assert len(turns) == 10
    assert chat.iteration_count == 10
    assert chat.completion_reason is CompletionReason.MAXIMUM_ITERATIONS
    assert len(chat.history) == 1 + 10
    # critic spoke on turns 2, 4, 6, 8; turn 10 hit the ceiling before evaluation
    assert len(providers["termination"].calls) == 4


@pytest.mark.asyncio
async def test_history_grows_by_one_per_iteration():
    chat, _ = build_chat(selection_answers=[alternate], termination_answers=["no"], maximum_iterations=3)
    chat.add_user_message(TASK)
    seeded = len(chat.history)

    renderings = []
    async for _ in chat.invoke():
        renderings.append(chat.history.render())
        assert len(chat.history) == seeded + chat.iteration_count + 1

    assert len(chat.history) == seeded + chat.iteration_count
    assert chat.iteration_count <= chat.maximum_iterations
    for earlier, later in zip(renderings, renderings[1:]):
        assert later.startswith(earlier)


@pytest.mark.asyncio
async def test_generator_turns_never_trigger_termination_check():
    chat, providers = build_chat(selection_answers=["CopyWriter"], termination_answers=["yes"], maximum_iterations=3)
    chat.add_user_message(TASK)

    turns = await collect(chat)

    assert [t.name for t in turns] == ["CopyWriter"] * 3
    assert providers["termination"].calls == []
    assert chat.completion_reason is CompletionReason.MAXIMUM_ITERATIONS


@pytest.mark.asyncio
async def test_unmatched_selection_defaults_to_generator():
    chat, _ = build_chat(selection_answers=["Nobody"], maximum_iterations=2)
    chat.add_user_message(TASK)

    turns = await collect(chat)

    assert [t.name for t in turns] == ["CopyWriter", "CopyWriter"]


@pytest.mark.asyncio
async def test_provider_failure_propagates_and_keeps_history():
    shared = ScriptedProvider([TAGLINE], fail_on=2)
    writer = CopyWriterAgent(shared)
    reviewer = ArtDirectorAgent(shared)
    chat = GroupChatOrchestrator(
        agents=[writer, reviewer],
        selection_strategy=PromptSelectionStrategy(
            ScriptedProvider([alternate]), SelectionPolicy.for_agents(writer.name, reviewer.name)
        ),
        termination_strategy=ApprovalTerminationStrategy(ScriptedProvider(["no"]), agents=[reviewer]),
    )
    chat.add_user_message(TASK)

    produced = []
    with pytest.raises(CompletionProviderError):
        async for turn in chat.invoke():
            produced.append(turn)

    assert [t.content for t in produced] == [TAGLINE]
    assert [(t.role, t.name) for t in chat.history.get_turns()] == [
        (AuthorRole.USER, None),
        (AuthorRole.ASSISTANT, "CopyWriter"),
    ]
    assert not chat.is_complete


@pytest.mark.asyncio
async def test_caller_can_stop_early():
    chat, _ = build_chat(selection_answers=[alternate])
    chat.add_user_message(TASK)

    async for turn in chat.invoke():
        assert turn.name == "CopyWriter"
        break

    assert len(chat.history) == 2
    assert chat.history.get_latest_turn().content == turn.content
    assert not chat.is_complete


@pytest.mark.asyncio
async def test_completed_chat_cannot_be_restarted():
    chat, _ = build_chat(selection_answers=[alternate], termination_answers=["yes"])
    chat.add_user_message(TASK)
    await collect(chat)

    with pytest.raises(AgentError) as exc_info:
        await collect(chat)
    assert exc_info.value.context.error_type is ErrorType.CHAT_ALREADY_COMPLETE

    with pytest.raises(AgentError):
        chat.add_user_message("again")


@pytest.mark.asyncio
async def test_invoke_requires_user_input():
    chat, providers = build_chat()
    assert chat.state is ChatState.IDLE

    with pytest.raises(AgentError) as exc_info:
        await collect(chat)

    assert exc_info.value.context.error_type is ErrorType.CHAT_NOT_SEEDED
    assert providers["selection"].calls == []


def test_roster_names_must_be_unique():
    provider = ScriptedProvider(["x"])
    writer = CopyWriterAgent(provider)
    clone = ArtDirectorAgent(provider, name=writer.name)

    with pytest.raises(ConfigurationError):
        GroupChatOrchestrator(
            agents=[writer, clone],
            selection_strategy=PromptSelectionStrategy(provider, SelectionPolicy.for_agents(writer.name, clone.name)),
            termination_strategy=ApprovalTerminationStrategy(provider, agents=[clone]),
        )
