"""Exceptions raised by the summarization pipeline.

Every message is meant to be shown to the user as-is.
"""

from __future__ import annotations


class SummarizerError(Exception):
    """Base class for all summarizer failures."""


class InvalidInputError(SummarizerError):
    """Empty text, or no model selected."""


class ModelLoadError(SummarizerError):
    """The encoder behind a model could not be loaded."""

    def __init__(self, model_name: str, reason: str = "") -> None:
        self.model_name = model_name
        message = f"Failed to load the {model_name} model. Try another model or switch to local processing."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EmbeddingError(SummarizerError):
    """Sentence vectors could not be produced."""

    def __init__(self, model_name: str, reason: str) -> None:
        self.model_name = model_name
        super().__init__(f"Error processing text with {model_name}: {reason}")


class UnsupportedModelError(SummarizerError):
    """No embedding strategy exists for the requested model."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Embedding method not implemented for model: {model_name}")
