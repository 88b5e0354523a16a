"""Service layer for external collaborators."""

from .generator import LiteLLMGenerator, get_generator

__all__ = [
    "LiteLLMGenerator",
    "get_generator",
]
