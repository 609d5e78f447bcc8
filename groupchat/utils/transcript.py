"""Transcript formatting for console display."""

from typing import Dict, Iterable, Optional

from ..models.turn import ChatTurn

DEFAULT_STYLE = "bright_black"


class TranscriptFormatter:
    """
    Formats chat turns for the console.

    Attributes:
        styles: Mapping of agent name to rich style name
    """

    def __init__(self, styles: Optional[Dict[str, str]] = None):
        self.styles = dict(styles or {})

    @classmethod
    def for_agents(cls, writer: str, reviewer: str) -> "TranscriptFormatter":
        return cls({writer: "magenta", reviewer: "green"})

    @staticmethod
    def format_turn(turn: ChatTurn) -> str:
        """Return "role-name: content", or "role: content" for unnamed turns."""
        return f"{turn.label()}: {turn.content}"

    def style_for(self, turn: ChatTurn) -> str:
        return self.styles.get(turn.name or "", DEFAULT_STYLE)

    def format_transcript(self, turns: Iterable[ChatTurn]) -> str:
        return "\n".join(self.format_turn(turn) for turn in turns)
