"""Text normalization and redaction helpers."""
from __future__ import annotations

import re
import unicodedata
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def normalize_prompt(text: str) -> str:
    """NFC-normalize, collapse whitespace runs to one space and strip."""
    return _WHITESPACE.sub(" ", unicodedata.normalize("NFC", text)).strip()


def normalize_delta(text: str) -> str:
    """NFC-normalize a streamed fragment (content is otherwise untouched)."""
    return unicodedata.normalize("NFC", text)


def redact(text: Optional[str], secret: Optional[str], mask: str = "***") -> Optional[str]:
    """Replace every occurrence of ``secret`` in ``text`` with ``mask``."""
    if not text or not secret:
        return text
    return text.replace(secret, mask)


__all__ = ["normalize_prompt", "normalize_delta", "redact"]
