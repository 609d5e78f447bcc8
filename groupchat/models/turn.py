"""Conversation turn data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthorRole(Enum):
    """Who authored a turn."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ChatTurn:
    """
    A single turn in the group chat.

    Attributes:
        role: Author role (user, assistant, system)
        content: Message text
        name: Agent name for assistant turns; None for user input
    """
    role: AuthorRole
    content: str
    name: Optional[str] = None

    def label(self) -> str:
        """Return "role-name" when the turn has an author name, else "role"."""
        if self.name:
            return f"{self.role.value}-{self.name}"
        return self.role.value
