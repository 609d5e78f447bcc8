"""Utility modules for configuration, logging, errors and AWS integration."""

from .transcript import TranscriptFormatter

__all__ = [
    'TranscriptFormatter'
]
