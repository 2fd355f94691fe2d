"""Unified generation client.

Purpose:
    One call shape over Google Generative Language, OpenAI Chat Completions
    and Anthropic Messages: a prompt plus optional system instruction,
    generation parameters and model override in, generated text out.

Construction:
    ``GenAIClient(provider, api_key=None, config=None)`` binds the client to
    one provider for its lifetime, resolves the credential (explicit argument,
    then the provider's env-var list) and the endpoint/model (built-in
    defaults, optional config file, env overrides, ``ClientConfig``). The
    environment is read here and never again.

Calls:
    - ``generate`` returns the full text, or, when a chunk callback is given
      and streaming is enabled, feeds each delta to the callback and returns
      ``None``.
    - ``stream`` returns a lazy iterator of deltas.

Retries:
    Every attempt rebuilds the request through the adapter (fresh
    idempotency key) and runs under :class:`RetryPolicy`. A stream is
    retried only until its first delta has been yielded; later failures
    propagate because replaying would duplicate text.

Thread-safety:
    Configuration is immutable and retry state is call-local; the owned
    ``httpx.Client`` is thread-safe, so one instance may serve concurrent
    calls.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import closing
from typing import Any, Callable, Iterator, Mapping, Optional, Union

import httpx

from .base.cancellation import CancellationToken
from .base.dto import ClientConfig
from .base.errors import ConfigurationError, ProviderError, ResponseParseError, wrap_transport_error
from .base.factory import create_adapter
from .base.http import build_httpx_client, open_stream, send_request
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import GenerationRequest
from .base.provider import Provider
from .base.resilience.retry import RetryPolicy
from .base.streaming import SSEDecoder
from .base.utils.text import normalize_delta, redact
from .config import get_provider_config
from .config.env import get_env_var_candidates, is_placeholder, resolve_provider_key


ChunkCallback = Callable[[str], None]


class GenAIClient:
    """Client bound to a single provider."""

    def __init__(
        self,
        provider: Union[Provider, str],
        api_key: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        """Bind the client to ``provider`` and resolve its settings.

        Parameters
        ----------
        provider:
            ``"google"``, ``"openai"`` or ``"claude"`` (or a :class:`Provider`).
        api_key:
            Explicit credential. When empty, the provider's environment
            variables are consulted in priority order.
        config:
            Optional :class:`ClientConfig`; defaults apply otherwise.
        environ:
            Configuration source used for credential, endpoint and model
            resolution. Defaults to ``os.environ``.
        http_client:
            Optional pre-built ``httpx.Client`` (e.g. with a mock transport).
            When supplied, the caller keeps ownership and timeouts configured
            on it take precedence.
        sleep:
            Optional replacement for retry waits.

        Raises
        ------
        ConfigurationError
            Unknown provider or no credential found.
        """
        self._provider = Provider.parse(provider)
        self._config = config or ClientConfig()
        self._logger = get_logger("client")

        key = (api_key or "").strip()
        source = "argument"
        if not key:
            env_key, env_name = resolve_provider_key(self._provider.value, environ)
            key, source = env_key or "", env_name or ""
        if not key:
            names = ", ".join(get_env_var_candidates(self._provider.value))
            raise ConfigurationError(
                message=f"API key missing for {self._provider.value} (set one of: {names})",
                provider=self._provider.value,
            )
        self._api_key = key

        resolved = get_provider_config(
            self._provider.value,
            overrides={"model": self._config.model, "base_url": self._config.base_url},
            environ=environ,
        )
        self._default_model: str = resolved["model"]
        self._base_url: str = resolved["base_url"]

        self._adapter = create_adapter(self._provider)
        self._owns_http = http_client is None
        self._http = http_client or build_httpx_client(self._config.timeout_config())
        self._sleep = sleep

        normalized_log_event(
            self._logger,
            "client.init",
            LogContext(provider=self._provider.value, model=self._default_model),
            phase="init",
            credential_source=source,
            placeholder_credential=is_placeholder(key) or None,
            stream=self._config.stream,
            retries=self._config.retries,
        )

    # ---- Properties ----
    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def base_url(self) -> str:
        return self._base_url

    # ---- Lifecycle ----
    def close(self) -> None:
        """Close the owned HTTP client (no-op for an injected one)."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "GenAIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GenAIClient(provider={self._provider.value!r}, model={self._default_model!r})"

    # ---- Public API ----
    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Mapping[str, Any]] = None,
        model_id: Optional[str] = None,
        on_chunk: Optional[ChunkCallback] = None,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Generate text for ``prompt``.

        With ``on_chunk`` and a streaming-enabled config, each delta is passed
        to ``on_chunk`` in arrival order and ``None`` is returned; callers
        accumulate fragments themselves. Otherwise one non-streaming call is
        made and the extracted text returned.

        Raises
        ------
        RequestError
            Non-2xx response or retries exhausted (``TransientNetworkError``).
        ResponseParseError
            The full response body is not JSON.
        CancelledError
            ``cancel_token`` was cancelled.
        """
        if on_chunk is not None and self._config.stream:
            for delta in self.stream(
                prompt,
                system_instruction=system_instruction,
                generation_config=generation_config,
                model_id=model_id,
                cancel_token=cancel_token,
            ):
                on_chunk(delta)
            return None

        request = self._build_generation_request(prompt, system_instruction, generation_config, model_id)
        ctx = self._context(request)
        policy = self._retry_policy(ctx, phase="generate")
        normalized_log_event(
            self._logger,
            "generate.start",
            ctx,
            phase="start",
            has_system=bool(system_instruction),
            has_config=bool(generation_config),
        )

        t0 = time.perf_counter()
        try:
            resp = policy.run(lambda attempt: self._send_once(request), cancel_token=cancel_token)
            text = self._adapter.extract_text(self._parse_body(resp, request))
        except ProviderError as e:
            self._log_error(ctx, e)
            raise
        normalized_log_event(
            self._logger,
            "generate.end",
            ctx,
            phase="finalize",
            emitted=True,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            text_len=len(text),
        )
        return text

    def stream(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Mapping[str, Any]] = None,
        model_id: Optional[str] = None,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Iterator[str]:
        """Return a lazy, finite iterator over NFC-normalized text deltas.

        Nothing is sent until the first item is requested. Closing the
        iterator early closes the HTTP response.
        """
        request = self._build_generation_request(prompt, system_instruction, generation_config, model_id)
        return self._stream_deltas(request, cancel_token)

    # ---- Internals ----
    def _build_generation_request(
        self,
        prompt: str,
        system_instruction: Optional[str],
        generation_config: Optional[Mapping[str, Any]],
        model_id: Optional[str],
    ) -> GenerationRequest:
        return GenerationRequest(
            prompt=prompt,
            model=(model_id or "").strip() or self._default_model,
            system_instruction=system_instruction,
            generation_config=generation_config,
        )

    def _context(self, request: GenerationRequest) -> LogContext:
        return LogContext(
            provider=self._provider.value,
            model=request.model,
            request_id=uuid.uuid4().hex[:12],
        )

    def _retry_policy(self, ctx: LogContext, *, phase: str) -> RetryPolicy:
        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None) -> None:
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase=phase,
                attempt=attempt,
                error_code=(error.code.value if error else None),
                level=logging.WARNING if error is not None and delay is not None else logging.INFO,
                max_attempts=max_attempts,
                delay=delay,
                will_retry=bool(error and delay is not None),
                status_code=getattr(error, "status_code", None),
            )

        return RetryPolicy(self._config.retry_config(attempt_logger=_attempt_logger), sleep=self._sleep)

    def _send_once(self, request: GenerationRequest) -> httpx.Response:
        spec = self._adapter.build_request(
            request, api_key=self._api_key, base_url=self._base_url, stream=False
        )
        return send_request(
            self._http,
            spec,
            provider=self._provider.value,
            model=request.model,
            overall_timeout=self._config.overall_timeout,
            secret=self._api_key,
        )

    def _parse_body(self, resp: httpx.Response, request: GenerationRequest) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise ResponseParseError(
                message=f"response body is not valid JSON: {e}",
                provider=self._provider.value,
                model=request.model,
                body=redact(resp.text, self._api_key),
                raw=e,
            ) from e

    def _stream_deltas(
        self, request: GenerationRequest, cancel_token: Optional[CancellationToken]
    ) -> Iterator[str]:
        ctx = self._context(request)
        policy = self._retry_policy(ctx, phase="stream")
        normalized_log_event(self._logger, "stream.start", ctx, phase="start")

        t0 = time.perf_counter()
        first_token_ms: Optional[float] = None
        emitted = 0
        attempt = 1
        while True:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            try:
                with closing(self._stream_once(request, cancel_token)) as deltas:
                    for delta in deltas:
                        if first_token_ms is None:
                            first_token_ms = (time.perf_counter() - t0) * 1000.0
                        emitted += 1
                        yield delta
                policy.record_success(attempt)
                break
            except ProviderError as e:
                if emitted:
                    self._log_error(ctx, e, emitted=emitted)
                    raise
                try:
                    delay = policy.delay_for(e, attempt)
                except ProviderError:
                    self._log_error(ctx, e, emitted=emitted)
                    raise
                policy.pause(delay, cancel_token)
                attempt += 1

        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            attempt=attempt,
            emitted=emitted,
            metrics={
                "time_to_first_token_ms": first_token_ms,
                "total_duration_ms": (time.perf_counter() - t0) * 1000.0,
                "emitted_count": emitted,
            },
        )

    def _stream_once(
        self, request: GenerationRequest, cancel_token: Optional[CancellationToken]
    ) -> Iterator[str]:
        spec = self._adapter.build_request(
            request, api_key=self._api_key, base_url=self._base_url, stream=True
        )
        resp = open_stream(
            self._http,
            spec,
            provider=self._provider.value,
            model=request.model,
            overall_timeout=self._config.overall_timeout,
            secret=self._api_key,
        )
        decoder = SSEDecoder(
            max_buffer_bytes=self._config.max_stream_buffer_bytes,
            provider=self._provider.value,
            model=request.model,
        )
        try:
            for fragment in self._iter_fragments(resp, request):
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
                for payload in decoder.feed(fragment):
                    delta = self._adapter.extract_delta(payload)
                    if delta:
                        yield normalize_delta(delta)
        finally:
            resp.close()

    def _iter_fragments(self, resp: httpx.Response, request: GenerationRequest) -> Iterator[bytes]:
        try:
            yield from resp.iter_bytes()
        except (httpx.HTTPError, OSError) as e:
            raise wrap_transport_error(
                e,
                provider=self._provider.value,
                model=request.model,
                message=redact(str(e) or type(e).__name__, self._api_key),
            ) from e

    def _log_error(self, ctx: LogContext, error: ProviderError, *, emitted: Optional[int] = None) -> None:
        normalized_log_event(
            self._logger,
            "generate.error",
            ctx,
            phase="finalize",
            error_code=error.code.value,
            level=logging.ERROR,
            emitted=emitted,
            status_code=getattr(error, "status_code", None),
            error=redact(error.message, self._api_key),
        )


def create(provider: Union[Provider, str], **kwargs: Any) -> GenAIClient:
    """Convenience factory: ``create("openai")`` == ``GenAIClient("openai")``."""
    return GenAIClient(provider, **kwargs)


__all__ = ["GenAIClient", "ChunkCallback", "create"]
