"""Group chat participants."""

from .base import ChatAgent, CompletionProvider
from .copywriter import CopyWriterAgent, WRITER_NAME
from .art_director import ArtDirectorAgent, REVIEWER_NAME

__all__ = [
    "ChatAgent",
    "CompletionProvider",
    "CopyWriterAgent",
    "ArtDirectorAgent",
    "WRITER_NAME",
    "REVIEWER_NAME",
]
