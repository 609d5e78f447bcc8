"""Base agent class for group chat participants."""

import logging
from typing import TYPE_CHECKING, Protocol

from ..models.turn import AuthorRole, ChatTurn

if TYPE_CHECKING:
    from ..orchestration.conversation import ConversationHistory

logger = logging.getLogger(__name__)


class CompletionProvider(Protocol):
    """Anything that can turn role instructions plus a prompt into text."""

    async def complete(self, instructions: str, context: str) -> str:
        ...


class ChatAgent:
    """
    A named participant bound to fixed instructions and a completion provider.

    Attributes:
        name: Agent name, unique within a roster
        instructions: System instructions sent with every completion
        provider: Completion provider used to generate turns
    """

    def __init__(self, name: str, instructions: str, provider: CompletionProvider):
        self.name = name
        self.instructions = instructions
        self.provider = provider

        logger.info(f"Initialized {self.__class__.__name__}: {name}")

    async def invoke(self, history: "ConversationHistory") -> ChatTurn:
        """
        Produce this agent's next turn from the conversation so far.

        The provider receives the agent's instructions and the rendered
        history. Provider failures propagate unchanged; the returned text is
        not validated.

        Args:
            history: Conversation history to respond to

        Returns:
            Assistant turn authored by this agent
        """
        try:
            text = await self.provider.complete(self.instructions, history.render())
        except Exception as e:
            logger.error(f"Error getting response from {self.name}: {str(e)}")
            raise

        logger.debug(f"{self.name} generated response: {text[:100]}...")
        return ChatTurn(role=AuthorRole.ASSISTANT, content=text, name=self.name)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"

    __repr__ = __str__
