"""Orchestration layer for the agent group chat."""

from .conversation import ConversationHistory
from .strategies import (
    ApprovalTerminationStrategy,
    PromptSelectionStrategy,
    SelectionPolicy,
    parse_agent_name,
    parse_approval,
)
from .group_chat import ChatState, CompletionReason, GroupChatOrchestrator

__all__ = [
    "ConversationHistory",
    "ApprovalTerminationStrategy",
    "PromptSelectionStrategy",
    "SelectionPolicy",
    "parse_agent_name",
    "parse_approval",
    "ChatState",
    "CompletionReason",
    "GroupChatOrchestrator",
]
