"""genai_bridge package

One call shape over three vendor generation APIs (Google Generative
Language, OpenAI Chat Completions, Anthropic Messages).

Public API (re-exported):
    - Client: :class:`GenAIClient`, :func:`create`
    - Configuration: :class:`ClientConfig`, :class:`Provider`
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`,
      :class:`CancelledError`
    - Cancellation: :class:`CancellationToken`

Example::

    from genai_bridge import ClientConfig, GenAIClient

    with GenAIClient("openai") as client:
        print(client.generate("Name one Greek letter."))

    with GenAIClient("claude", config=ClientConfig(stream=True)) as client:
        for delta in client.stream("Count to five."):
            print(delta, end="")
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import ClientConfig
from .base.errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    RequestError,
    ResponseParseError,
    StreamBufferOverflowError,
    TransientNetworkError,
)
from .base.provider import Provider
from .client import ChunkCallback, GenAIClient, create

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "GenAIClient",
    "ChunkCallback",
    "create",
    "ClientConfig",
    "Provider",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "RequestError",
    "TransientNetworkError",
    "ResponseParseError",
    "StreamBufferOverflowError",
]
