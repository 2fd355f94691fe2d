"""OpenAI Chat Completions provider package."""

from .adapter import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
