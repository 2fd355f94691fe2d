"""Anthropic Messages provider package (provider id ``claude``)."""

from .adapter import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
