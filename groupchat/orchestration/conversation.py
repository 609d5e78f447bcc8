"""Conversation history shared by the agents and control strategies."""

import logging
from typing import List, Dict, Any, Optional

from ..models.turn import AuthorRole, ChatTurn

logger = logging.getLogger(__name__)


class ConversationHistory:
    """
    Append-only log of chat turns for one session.

    The orchestrator is the only writer. Agents and strategies only read it,
    normally through render(), which is the transcript they receive as
    prompt input.

    Attributes:
        session_id: Optional session identifier for logging
    """

    def __init__(self, session_id: Optional[str] = None):
        """
        Initialize conversation history.

        Args:
            session_id: Optional session identifier for tracking
        """
        self._turns: List[ChatTurn] = []
        self.session_id = session_id

        logger.debug(f"Initialized ConversationHistory for session: {session_id or 'unknown'}")

    def add_turn(self, turn: ChatTurn) -> ChatTurn:
        """
        Append a turn to the end of the history.

        Args:
            turn: Turn to append

        Returns:
            The appended turn

        Raises:
            ValueError: If the turn has no content
        """
        if turn is None or turn.content is None:
            raise ValueError("Cannot append a turn without content")

        self._turns.append(turn)

        logger.debug(
            f"Added turn {len(self._turns)} from {turn.label()}: "
            f"{turn.content[:100] if turn.content else 'empty'}..."
        )

        return turn

    def add_message(self, role: AuthorRole, content: str, name: Optional[str] = None) -> ChatTurn:
        """Build a ChatTurn from its parts and append it."""
        return self.add_turn(ChatTurn(role=role, content=content, name=name))

    def get_turns(self) -> List[ChatTurn]:
        return self._turns.copy()

    def get_latest_turn(self, name: Optional[str] = None) -> Optional[ChatTurn]:
        """
        Get the most recent turn, optionally filtered by author name.

        Args:
            name: Optional agent name to filter by

        Returns:
            Most recent ChatTurn, or None if no turn matches
        """
        for turn in reversed(self._turns):
            if name is None or turn.name == name:
                return turn
        return None

    def get_turn_count(self) -> int:
        return len(self._turns)

    def render(self) -> str:
        """
        Render the history as a plain-text transcript in append order.

        Each turn becomes "role-name: content" (or "role: content" when the
        turn has no author name). The output is deterministic, and a
        rendering taken earlier in a session is always a prefix of a later one.
        """
        return "\n".join(f"{turn.label()}: {turn.content}" for turn in self._turns)

    def format_for_display(self) -> List[Dict[str, Any]]:
        """Format conversation history for display."""
        return [
            {
                "turn_number": i,
                "role": turn.role.value,
                "name": turn.name,
                "content": turn.content,
            }
            for i, turn in enumerate(self._turns, 1)
        ]

    def export_to_dict(self) -> Dict[str, Any]:
        """Export the entire conversation history to a dictionary."""
        return {
            "session_id": self.session_id,
            "total_turns": len(self._turns),
            "turns": self.format_for_display(),
        }

    def __len__(self) -> int:
        return len(self._turns)

    def __str__(self) -> str:
        return f"ConversationHistory(session_id={self.session_id}, turns={len(self._turns)})"
