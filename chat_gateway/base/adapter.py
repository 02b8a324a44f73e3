"""Base adapter contract shared by every provider.

Purpose:
- Hold the per-instance configuration (credential, endpoint, deadline) and
  bind the adapter to exactly one :class:`Provider` identity.
- Provide the shared plumbing every provider uses: deadline-bounded dispatch
  (``fetch_with_timeout``), HTTP status classification
  (``handle_http_error`` / ``raise_for_response``) and the SSE delta loop
  (``stream_deltas``).

External dependencies:
- ``httpx`` for the asynchronous HTTP transport. Clients are created per call
  through :func:`chat_gateway.base.http.create_async_client`.

Failure modes:
- Every failure leaving ``chat`` / ``chat_stream`` is an :class:`AdapterError`.
  Only ``validate_api_key`` (returns ``False``), per-line stream parsing
  (skips the line) and ``list_models`` (returns the defaults) recover locally.

Logging:
- Events ``chat.start``, ``chat.end``, ``chat.error``, ``stream.start``,
  ``stream.end``, ``stream.decode_error``, ``models.fallback`` and
  ``validate.result`` are emitted through :func:`log_event`. Credentials and
  URLs carrying them are never logged.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from contextlib import aclosing
from typing import (
    Any,
    AsyncIterator,
    Callable,
    ClassVar,
    Dict,
    List,
    Mapping,
    NoReturn,
    Optional,
    Union,
)

import httpx

from ..config.defaults import DEFAULT_ENDPOINTS, DEFAULT_MODELS
from .constants import Provider
from .dto import AdapterConfig
from .errors import AdapterError, ErrorCode, error_for_exception, error_for_status
from .http import create_async_client
from .logging import LogContext, get_logger, log_event
from .models import ChatRequest, ChatResponse
from .streaming import DATA_PREFIX, iter_sse_deltas
from .timeouts import with_deadline

DeltaExtractor = Callable[[Any], Optional[str]]


class BaseAdapter(ABC):
    """Abstract provider adapter.

    Subclasses set the ``provider`` class attribute and implement ``chat``,
    ``chat_stream``, ``validate_api_key`` and ``list_models``.

    Parameters:
        config: :class:`AdapterConfig` or a mapping with the same fields.
        transport: Optional ``httpx`` transport used for every request made
            by this adapter (tests pass ``httpx.MockTransport``).
    """

    provider: ClassVar[Provider]

    def __init__(
        self,
        config: Union[AdapterConfig, Mapping[str, Any]],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cfg = AdapterConfig.coerce(config)
        self._api_key = cfg.api_key
        self._endpoint = cfg.endpoint or self.get_default_endpoint()
        self._timeout_ms = cfg.timeout
        self._transport = transport
        self._logger = get_logger(f"chat_gateway.{self.provider.value}")

    # ----- Identity & configuration -----
    @property
    def provider_name(self) -> str:
        return self.provider.value

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    @classmethod
    def get_default_endpoint(cls) -> str:
        """Return the provider's built-in base URL."""
        return DEFAULT_ENDPOINTS[cls.provider.value]

    @classmethod
    def default_models(cls) -> List[str]:
        """Return a fresh copy of the provider's fixed model list."""
        return list(DEFAULT_MODELS.get(cls.provider.value, ()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._endpoint!r}, timeout_ms={self._timeout_ms})"

    # ----- Abstract surface -----
    @abstractmethod
    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Perform one non-streaming completion."""

    @abstractmethod
    def chat_stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Return a lazy async iterator over the completion's text deltas."""

    @abstractmethod
    async def validate_api_key(self, api_key: str) -> bool:
        """Return ``True`` iff the provider accepts ``api_key``."""

    @abstractmethod
    async def list_models(self) -> List[str]:
        """Return available model ids (defaults when discovery fails)."""

    # ----- Helpers -----
    def _url(self, path: str) -> str:
        return f"{self._endpoint.rstrip('/')}/{path.lstrip('/')}"

    def _client(self) -> httpx.AsyncClient:
        return create_async_client(transport=self._transport)

    def _ctx(self, model: Optional[str] = None, **extra: Any) -> LogContext:
        return LogContext(provider=self.provider_name, model=model, extra=extra)

    async def fetch_with_timeout(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        stream: bool = False,
        **options: Any,
    ) -> httpx.Response:
        """Dispatch one request bounded by ``timeout_ms``.

        The deadline covers dispatch up to the response headers when
        ``stream`` is true, and up to the full body otherwise. It is released
        as soon as the call settles.

        Raises:
            AdapterError: ``NETWORK_TIMEOUT`` (retryable) when the deadline
                elapses or the transport times out; ``UNKNOWN_ERROR`` with the
                original exception as ``details`` for any other failure.
        """
        try:
            request = client.build_request(method, url, **options)
            return await with_deadline(client.send(request, stream=stream), self._timeout_ms)
        except Exception as exc:
            raise error_for_exception(exc) from exc

    def handle_http_error(self, status: int, body: Any) -> NoReturn:
        """Raise the classified :class:`AdapterError` for a non-2xx ``status``."""
        raise error_for_status(status, body)

    async def raise_for_response(self, response: httpx.Response) -> None:
        """Raise for a non-2xx ``response``; no-op on success.

        The error body is read and parsed as JSON; an unreadable or non-JSON
        body becomes ``{}``.
        """
        if response.is_success:
            return
        body: Any
        try:
            await response.aread()
            body = response.json()
        except (ValueError, httpx.HTTPError):
            body = {}
        self.handle_http_error(response.status_code, body)

    async def _read_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            raise error_for_exception(exc) from exc

    async def stream_deltas(
        self,
        response: httpx.Response,
        extract: DeltaExtractor,
        prefix: str = DATA_PREFIX,
        ctx: Optional[LogContext] = None,
    ) -> AsyncIterator[str]:
        """Yield text deltas decoded from an open SSE ``response``.

        A non-2xx response raises before anything is yielded. The response is
        closed on every exit path, including early abandonment by the consumer.
        """
        emitted = 0

        def _on_error(line: str, exc: Exception) -> None:
            log_event(self._logger, "stream.decode_error", ctx, level=logging.DEBUG, error=str(exc))

        try:
            await self.raise_for_response(response)
            async with aclosing(iter_sse_deltas(self._read_body(response), extract, prefix, _on_error)) as deltas:
                async for delta in deltas:
                    emitted += 1
                    yield delta
            log_event(self._logger, "stream.end", ctx, deltas=emitted)
        finally:
            await response.aclose()

    async def _sse_stream(
        self,
        url: str,
        *,
        extract: DeltaExtractor,
        prefix: str = DATA_PREFIX,
        ctx: Optional[LogContext] = None,
        **options: Any,
    ) -> AsyncIterator[str]:
        """POST ``url`` as a streaming request and yield its deltas."""
        log_event(self._logger, "stream.start", ctx)
        try:
            async with self._client() as client:
                response = await self.fetch_with_timeout(client, "POST", url, stream=True, **options)
                async with aclosing(self.stream_deltas(response, extract, prefix, ctx)) as deltas:
                    async for delta in deltas:
                        yield delta
        except AdapterError as exc:
            log_event(self._logger, "chat.error", ctx, level=logging.WARNING, code=exc.code.value, stream=True)
            raise

    async def _complete(
        self,
        url: str,
        *,
        parse: Callable[[Any], ChatResponse],
        ctx: Optional[LogContext] = None,
        **options: Any,
    ) -> ChatResponse:
        """POST ``url``, classify failures and parse the JSON envelope."""
        log_event(self._logger, "chat.start", ctx)
        t0 = time.perf_counter()
        try:
            async with self._client() as client:
                response = await self.fetch_with_timeout(client, "POST", url, **options)
            await self.raise_for_response(response)
            try:
                data = response.json()
            except ValueError as exc:
                raise AdapterError.create(
                    ErrorCode.UNKNOWN_ERROR,
                    "Invalid JSON in provider response",
                    details=response.text,
                ) from exc
            try:
                result = parse(data)
            except (TypeError, ValueError, AttributeError, KeyError) as exc:
                raise AdapterError.create(
                    ErrorCode.UNKNOWN_ERROR,
                    "Invalid provider response",
                    details=data,
                ) from exc
        except AdapterError as exc:
            log_event(self._logger, "chat.error", ctx, level=logging.WARNING, code=exc.code.value)
            raise
        log_event(
            self._logger,
            "chat.end",
            ctx,
            latency_ms=int((time.perf_counter() - t0) * 1000),
            finish_reason=result.finish_reason,
        )
        return result

    async def _check_key(self, method: str, url: str, **options: Any) -> bool:
        """Issue one validation request; ``True`` iff it returns 2xx."""
        try:
            async with self._client() as client:
                response = await self.fetch_with_timeout(client, method, url, **options)
        except AdapterError as exc:
            log_event(self._logger, "validate.result", self._ctx(), ok=False, code=exc.code.value)
            return False
        ok = response.is_success
        log_event(self._logger, "validate.result", self._ctx(), ok=ok, status=response.status_code)
        return ok

    async def _discover_models(
        self,
        url: str,
        parse: Callable[[Any], List[str]],
        **options: Any,
    ) -> List[str]:
        """GET ``url`` and parse model ids, falling back to the defaults."""
        reason: Optional[str] = None
        models: List[str] = []
        try:
            async with self._client() as client:
                response = await self.fetch_with_timeout(client, "GET", url, **options)
            if response.is_success:
                models = parse(response.json())
            else:
                reason = f"HTTP {response.status_code}"
        except AdapterError as exc:
            reason = exc.code.value
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            reason = f"unparseable response: {type(exc).__name__}"
        if models:
            return models
        log_event(self._logger, "models.fallback", self._ctx(), reason=reason or "empty model list")
        return self.default_models()

    def _headers(self, api_key: Optional[str] = None, **extra: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key if api_key is not None else self._api_key}",
        }
        headers.update(extra)
        return headers


__all__ = ["BaseAdapter"]
