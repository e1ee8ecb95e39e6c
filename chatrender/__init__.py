"""Styled terminal text, text wrapping, message entities and message layout for chat clients."""

__version__ = "0.1.0"

__all__ = [
    "style",
    "tstring",
    "wrap",
    "entities",
    "blocks",
    "messages",
    "colornames",
]