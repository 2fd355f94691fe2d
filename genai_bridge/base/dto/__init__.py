"""Typed DTOs exposed at the client boundary."""

from .client_config import ClientConfig

__all__ = ["ClientConfig"]
