"""Server-sent-event frame decoding.

:class:`SSEDecoder` accepts raw response fragments as they arrive, buffers
partial frames and returns the ``data:`` payloads of every completed frame.
Frames end at a blank line (``\\n\\n`` or ``\\r\\n\\r\\n``). Bytes are decoded
with an incremental UTF-8 decoder so a multi-byte character split across
fragments survives.

The buffer is capped; a frame that grows past ``max_buffer_bytes`` without a
terminator raises :class:`StreamBufferOverflowError` instead of consuming
memory without bound.
"""
from __future__ import annotations

import codecs
import re
from typing import Iterable, Iterator, List, Optional, Union

from ...config.defaults import (
    DEFAULT_MAX_STREAM_BUFFER_BYTES,
    SSE_DATA_PREFIX,
    SSE_FRAME_TERMINATOR,
)
from ..errors import StreamBufferOverflowError


_FRAME_END = re.compile(SSE_FRAME_TERMINATOR)


Fragment = Union[bytes, bytearray, str]


class SSEDecoder:
    """Incremental SSE decoder yielding one payload per ``data:`` line."""

    def __init__(
        self,
        *,
        max_buffer_bytes: int = DEFAULT_MAX_STREAM_BUFFER_BYTES,
        provider: str = "unknown",
        model: Optional[str] = None,
    ) -> None:
        self._buffer = ""
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._max = max_buffer_bytes
        self._provider = provider
        self._model = model

    @property
    def pending(self) -> str:
        """Buffered text of the incomplete frame (if any)."""
        return self._buffer

    def feed(self, fragment: Fragment) -> List[str]:
        """Append ``fragment`` and return payloads of newly completed frames."""
        if isinstance(fragment, (bytes, bytearray)):
            text = self._utf8.decode(bytes(fragment))
        else:
            text = fragment
        self._buffer += text

        payloads: List[str] = []
        while (end := _FRAME_END.search(self._buffer)) is not None:
            frame = self._buffer[: end.start()]
            self._buffer = self._buffer[end.end():]
            payloads.extend(_data_lines(frame))

        if len(self._buffer.encode("utf-8")) > self._max:
            raise StreamBufferOverflowError(
                message=f"stream frame exceeded {self._max} bytes without a terminator",
                provider=self._provider,
                model=self._model,
                limit=self._max,
            )
        return payloads

    def iter_payloads(self, fragments: Iterable[Fragment]) -> Iterator[str]:
        """Feed every fragment in order, yielding payloads as frames complete."""
        for fragment in fragments:
            yield from self.feed(fragment)


def _data_lines(frame: str) -> Iterator[str]:
    for line in frame.split("\n"):
        if line.startswith(SSE_DATA_PREFIX):
            yield line[len(SSE_DATA_PREFIX):].lstrip().rstrip("\r")


__all__ = ["SSEDecoder", "Fragment"]
