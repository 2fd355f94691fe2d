"""Streaming primitives (SSE frame decoding)."""

from .sse import Fragment, SSEDecoder

__all__ = ["Fragment", "SSEDecoder"]
