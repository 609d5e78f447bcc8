"""Group chat orchestrator: turn-taking loop over a fixed roster of agents."""

import logging
from enum import Enum
from typing import AsyncIterator, List, Optional, Sequence, Tuple

from ..agents.base import ChatAgent
from ..models.turn import AuthorRole, ChatTurn
from ..utils.errors import AgentError, ConfigurationError
from .conversation import ConversationHistory
from .strategies import ApprovalTerminationStrategy, PromptSelectionStrategy

logger = logging.getLogger(__name__)


class ChatState(Enum):
    """Orchestrator states."""
    IDLE = "idle"
    SEEDED = "seeded"
    SELECTING = "selecting"
    SPEAKING = "speaking"
    EVALUATING = "evaluating"
    TERMINATED = "terminated"


class CompletionReason(Enum):
    """Why a chat reached the TERMINATED state."""
    APPROVED = "approved"
    MAXIMUM_ITERATIONS = "maximum_iterations"


class GroupChatOrchestrator:
    """
    Runs a sequential group chat between a fixed roster of agents.

    Each iteration asks the selection strategy for a speaker, lets that
    agent produce one turn, appends it to the history, yields it to the
    caller and then decides whether to stop. The loop ends when the
    termination strategy reports approval after an observed agent's turn,
    or unconditionally once maximum_iterations agent turns have been
    produced.

    Attributes:
        agents: Roster, fixed for the session
        history: Conversation history owned by this orchestrator
        selection_strategy: Chooses the next speaker
        termination_strategy: Decides completion and holds the iteration ceiling
    """

    def __init__(
        self,
        agents: Sequence[ChatAgent],
        selection_strategy: PromptSelectionStrategy,
        termination_strategy: ApprovalTerminationStrategy,
        history: Optional[ConversationHistory] = None,
    ):
        names = [agent.name for agent in agents]
        if not names:
            raise ConfigurationError.invalid_value("agents", names, "roster must not be empty")
        if len(set(names)) != len(names):
            raise ConfigurationError.invalid_value("agents", names, "agent names must be unique")

        self.agents: Tuple[ChatAgent, ...] = tuple(agents)
        self.selection_strategy = selection_strategy
        self.termination_strategy = termination_strategy
        self.history = history if history is not None else ConversationHistory()

        self.state = ChatState.SEEDED if len(self.history) else ChatState.IDLE
        self.completion_reason: Optional[CompletionReason] = None
        self.iteration_count = 0
        self.transcript: List[ChatTurn] = []

        logger.info(
            f"Initialized GroupChatOrchestrator with agents={names}, "
            f"maximum_iterations={termination_strategy.maximum_iterations}"
        )

    @property
    def is_complete(self) -> bool:
        return self.state is ChatState.TERMINATED

    @property
    def maximum_iterations(self) -> int:
        return self.termination_strategy.maximum_iterations

    def add_user_message(self, content: str) -> ChatTurn:
        """
        Seed the chat with user input.

        Args:
            content: Free-text user request

        Returns:
            The appended user turn
        """
        if self.is_complete:
            raise AgentError.chat_already_complete(self.completion_reason.value)

        turn = self.history.add_message(AuthorRole.USER, content)
        self.state = ChatState.SEEDED
        logger.info(f"Seeded chat with user input ({len(content)} chars)")
        return turn

    async def invoke(self) -> AsyncIterator[ChatTurn]:
        """
        Run the chat, yielding each agent turn as soon as it is appended.

        The caller may stop iterating at any point; turns already appended
        stay in the history. Completion provider errors propagate unchanged
        and leave earlier turns intact.

        Yields:
            Agent turns in the order they were produced

        Raises:
            AgentError: If the chat has already terminated or has no input
        """
        if self.is_complete:
            raise AgentError.chat_already_complete(self.completion_reason.value)
        if not len(self.history):
            raise AgentError.chat_not_seeded()

        logger.info(f"Starting group chat for session: {self.history.session_id or 'unknown'}")

        while True:
            self.state = ChatState.SELECTING
            agent = await self.selection_strategy.next(self.history, self.agents)

            self.state = ChatState.SPEAKING
            turn = await agent.invoke(self.history)
            self.history.add_turn(turn)
            self.transcript.append(turn)
            yield turn

            self.state = ChatState.EVALUATING
            self.iteration_count += 1

            if self.iteration_count >= self.maximum_iterations:
                logger.info(
                    f"Terminating: maximum iterations ({self.maximum_iterations}) reached without approval"
                )
                self._terminate(CompletionReason.MAXIMUM_ITERATIONS)
                return

            if await self.termination_strategy.should_terminate(agent, self.history):
                logger.info(f"Terminating: {agent.name} approved after {self.iteration_count} turns")
                self._terminate(CompletionReason.APPROVED)
                return

    def _terminate(self, reason: CompletionReason) -> None:
        self.state = ChatState.TERMINATED
        self.completion_reason = reason
        logger.info(
            f"Group chat completed: reason={reason.value}, turns={self.iteration_count}, "
            f"history_length={len(self.history)}"
        )
