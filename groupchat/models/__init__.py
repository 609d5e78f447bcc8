"""Data models for the group chat."""

from .turn import AuthorRole, ChatTurn

__all__ = [
    "AuthorRole",
    "ChatTurn",
]
