"""HTTP utilities package.

Exposes the httpx client builder and the single-attempt send helpers.
"""

from .client import build_httpx_client, open_stream, send_request

__all__ = ["build_httpx_client", "open_stream", "send_request"]
