"""Copy review group chat: a writer and an art director take turns under model-driven control."""

__version__ = "0.1.0"
