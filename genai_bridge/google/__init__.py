"""Google Generative Language provider package."""

from .adapter import GoogleAdapter

__all__ = ["GoogleAdapter"]
