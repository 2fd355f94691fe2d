"""HTTP transport helpers.

Purpose:
    Send one attempt described by an :class:`HttpRequestSpec` through an
    ``httpx.Client`` and translate every failure into the error taxonomy.

External dependencies:
    - ``httpx`` for the synchronous client, per-phase timeouts and streamed
      response bodies.

Timeout strategy:
    - Connect/read/write/pool timeouts come from the client's
      :class:`TimeoutConfig` (``httpx.Timeout``).
    - The optional ``overall`` cap guards the blocking phase of each attempt
      with :func:`operation_timeout`. For streams that phase ends when the
      response headers arrive.

Failure semantics:
    - Timeouts and connection resets raise :class:`TransientNetworkError`.
    - HTTP 429 raises :class:`TransientNetworkError` with ``retry_after``.
    - Any other non-2xx raises :class:`RequestError` with status and body.
    - The credential is redacted from every message and body kept on errors.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..errors import error_from_response, wrap_transport_error
from ..models import HttpRequestSpec
from ..timeouts import TimeoutConfig, operation_timeout
from ..utils.text import redact


def build_httpx_client(
    timeouts: TimeoutConfig, *, transport: Optional[httpx.BaseTransport] = None
) -> httpx.Client:
    """Return a new ``httpx.Client`` configured with ``timeouts``."""
    return httpx.Client(timeout=timeouts.to_httpx(), transport=transport)


def send_request(
    client: httpx.Client,
    spec: HttpRequestSpec,
    *,
    provider: str,
    model: Optional[str],
    overall_timeout: Optional[float] = None,
    secret: Optional[str] = None,
) -> httpx.Response:
    """Send a non-streaming request and return the successful response."""
    try:
        with operation_timeout(overall_timeout):
            resp = client.request(
                spec.method,
                spec.url,
                params=spec.params or None,
                headers=spec.headers,
                json=spec.body,
            )
    except (httpx.HTTPError, OSError) as e:
        raise wrap_transport_error(
            e, provider=provider, model=model, message=redact(str(e) or type(e).__name__, secret)
        ) from e
    if resp.is_success:
        return resp
    raise error_from_response(resp, provider=provider, model=model, body=redact(resp.text, secret))


def open_stream(
    client: httpx.Client,
    spec: HttpRequestSpec,
    *,
    provider: str,
    model: Optional[str],
    overall_timeout: Optional[float] = None,
    secret: Optional[str] = None,
) -> httpx.Response:
    """Send a streaming request and return the open response.

    The caller owns the returned response and must close it. Error responses
    are read in full (for the diagnostic body) and closed here.
    """
    request = client.build_request(
        spec.method,
        spec.url,
        params=spec.params or None,
        headers=spec.headers,
        json=spec.body,
    )
    try:
        with operation_timeout(overall_timeout):
            resp = client.send(request, stream=True)
            if not resp.is_success:
                try:
                    body = resp.read().decode("utf-8", errors="replace")
                finally:
                    resp.close()
                raise error_from_response(resp, provider=provider, model=model, body=redact(body, secret))
    except (httpx.HTTPError, OSError) as e:
        raise wrap_transport_error(
            e, provider=provider, model=model, message=redact(str(e) or type(e).__name__, secret)
        ) from e
    return resp


__all__ = ["build_httpx_client", "send_request", "open_stream"]
