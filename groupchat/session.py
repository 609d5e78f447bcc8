"""
Session entry point for the copy review group chat.

Builds a fresh roster, strategies and history for every user request and
streams the resulting turns back to the caller.
"""

from __future__ import annotations

import logging
import uuid
from typing import AsyncIterator, Callable, Optional

from .agents import ArtDirectorAgent, CompletionProvider, CopyWriterAgent
from .models.turn import ChatTurn
from .orchestration import (
    ApprovalTerminationStrategy,
    ConversationHistory,
    GroupChatOrchestrator,
    PromptSelectionStrategy,
    SelectionPolicy,
)
from .utils.bedrock_client import BedrockClient
from .utils.config import Config
from .utils.logging import set_context

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], CompletionProvider]

# Loaded on first use
_config: Optional[Config] = None


def get_config(config_path: str = "config.yaml") -> Config:
    """
    Load configuration once per process.

    Raises:
        ConfigurationError: If a required value is missing
    """
    global _config

    if _config is None:
        _config = Config.load(config_path)

    return _config


def bedrock_provider_factory(config: Config) -> ProviderFactory:
    """Return a factory that builds one BedrockClient per agent/strategy binding."""
    def factory() -> CompletionProvider:
        return BedrockClient(
            region=config.aws_region,
            model_id=config.bedrock.model_id,
            timeout=config.bedrock.timeout,
            temperature=config.bedrock.temperature,
            max_tokens=config.bedrock.max_tokens,
        )
    return factory


def build_group_chat(
    config: Config,
    provider_factory: Optional[ProviderFactory] = None,
    session_id: Optional[str] = None,
) -> GroupChatOrchestrator:
    """
    Build a new group chat for one session.

    Args:
        config: Loaded configuration
        provider_factory: Builds a completion provider per binding
            (defaults to Bedrock clients built from config)
        session_id: Optional identifier for logging

    Returns:
        Orchestrator with an empty history
    """
    new_provider = provider_factory or bedrock_provider_factory(config)

    writer = CopyWriterAgent(
        provider=new_provider(),
        name=config.writer.name,
        instructions=config.writer.instructions,
    )
    reviewer = ArtDirectorAgent(
        provider=new_provider(),
        name=config.reviewer.name,
        instructions=config.reviewer.instructions,
    )

    selection = PromptSelectionStrategy(
        provider=new_provider(),
        policy=SelectionPolicy.for_agents(generator=writer.name, critic=reviewer.name),
        instructions=config.chat.system_prompt,
    )
    termination = ApprovalTerminationStrategy(
        provider=new_provider(),
        agents=[reviewer],
        maximum_iterations=config.chat.max_iterations,
        instructions=config.chat.system_prompt,
    )

    return GroupChatOrchestrator(
        agents=[writer, reviewer],
        selection_strategy=selection,
        termination_strategy=termination,
        history=ConversationHistory(session_id=session_id),
    )


async def run_session(
    user_input: str,
    config: Optional[Config] = None,
    provider_factory: Optional[ProviderFactory] = None,
) -> AsyncIterator[ChatTurn]:
    """
    Run one group chat session for a line of user input.

    Args:
        user_input: Free-text request that seeds the chat
        config: Configuration (loaded from config.yaml/environment when omitted)
        provider_factory: Optional provider factory, see build_group_chat

    Yields:
        Agent turns as they are produced

    Raises:
        ConfigurationError: If configuration is incomplete
        CompletionProviderError: If a completion call fails mid-session
    """
    config = config or get_config()

    session_id = f"SESSION-{uuid.uuid4().hex[:8].upper()}"
    set_context(session_id=session_id)
    logger.info(f"Processing request in {session_id}")

    chat = build_group_chat(config, provider_factory=provider_factory, session_id=session_id)
    chat.add_user_message(user_input)

    async for turn in chat.invoke():
        yield turn

    logger.info(
        f"{session_id} finished: reason={chat.completion_reason.value}, turns={chat.iteration_count}"
    )
