"""Ollama generation provider adapter.

Talks to a local Ollama server's native ``/api/generate`` endpoint with
httpx.  One POST per call with the JSON body ``{model, prompt, stream}``:

- ``stream=false`` -- the server answers with a single JSON object, returned
  here as raw bytes for :class:`ResponseAggregator` to decode.
- ``stream=true``  -- the server answers with NDJSON; the raw body chunks
  are yielded unchanged, in arrival order, for
  :class:`StreamingEventDecoder` to reassemble.

The endpoint URL comes from :class:`Settings` at construction (``OLLAMA_URL``,
default ``http://127.0.0.1:11434/api/generate``).

Setup: Install Ollama (https://ollama.ai), then ``ollama pull mistral`` and
``ollama serve``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import structlog

from docprompt.config.settings import Settings
from docprompt.interfaces.llm_provider import IGenerationProvider
from docprompt.models.generation import GenerationRequest
from docprompt.utils.errors import GenerationError, ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)

# Upper bound on how much of an error body is echoed back to the user.
_MAX_ERROR_BODY = 2000


class OllamaGenerationProvider(IGenerationProvider):
    """Generation provider backed by a local Ollama server.

    Parameters
    ----------
    settings:
        Supplies the endpoint URL and timeouts.
    transport:
        Optional httpx transport; tests pass ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._url = settings.ollama_url
        self._timeout = httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout)
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def generate(self, model: str, prompt: str) -> bytes:
        """POST with ``stream=false`` and return the raw JSON body."""
        request = GenerationRequest(model=model, prompt=prompt, stream=False)
        try:
            async with self._client() as client:
                response = await client.post(self._url, json=request.model_dump())
                if response.is_error:
                    raise self._status_error(response.status_code, response.text)
                logger.info(
                    "ollama_generate",
                    model=model,
                    status=response.status_code,
                    bytes=len(response.content),
                )
                return response.content
        except httpx.HTTPError as exc:
            raise self._transport_error(exc) from exc

    async def stream_generate(self, model: str, prompt: str) -> AsyncIterator[bytes]:
        """POST with ``stream=true`` and yield body chunks as they arrive."""
        request = GenerationRequest(model=model, prompt=prompt, stream=True)
        try:
            async with self._client() as client:
                async with client.stream("POST", self._url, json=request.model_dump()) as response:
                    if response.is_error:
                        body = (await response.aread()).decode("utf-8", errors="replace")
                        raise self._status_error(response.status_code, body)
                    logger.info("ollama_stream_opened", model=model, status=response.status_code)
                    async for chunk in response.aiter_bytes():
                        if chunk:
                            yield chunk
        except httpx.HTTPError as exc:
            raise self._transport_error(exc) from exc

    def get_provider_name(self) -> str:
        return "ollama"

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    def _status_error(self, status_code: int, body: str) -> GenerationError:
        logger.error("ollama_request_failed", status=status_code, url=self._url)
        return GenerationError(
            message=f"Ollama request failed {status_code}: {body[:_MAX_ERROR_BODY]}",
            provider_name=self.get_provider_name(),
            status_code=status_code,
        )

    def _transport_error(self, exc: httpx.HTTPError) -> GenerationError | ProviderUnavailableError:
        if isinstance(exc, httpx.ConnectError):
            logger.error("ollama_unreachable", url=self._url, error=str(exc))
            return ProviderUnavailableError(
                message=f"Connection refused by {self._settings.api_base_url}",
                provider_name=self.get_provider_name(),
            )
        if isinstance(exc, httpx.TimeoutException):
            logger.error("ollama_timeout", url=self._url, error=str(exc))
            return GenerationError(
                message=f"Request to {self._url} timed out",
                provider_name=self.get_provider_name(),
            )
        logger.error("ollama_http_error", url=self._url, error=str(exc))
        return GenerationError(
            message=f"Ollama request failed: {exc}",
            provider_name=self.get_provider_name(),
        )
