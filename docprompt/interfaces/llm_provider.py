"""Abstract base class for text-generation providers.

Defines the transport contract used once a prompt has been assembled: send
it to a model and hand back either the whole response body or the raw byte
stream.  Decoding the body is the job of
``docprompt/services/generation/``, not of the provider, so the same
decoder works against any transport that yields bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


# Concrete implementations: OllamaGenerationProvider
# Located in: docprompt/providers/llm/
class IGenerationProvider(ABC):
    """Contract for a generate endpoint reachable over HTTP."""

    @abstractmethod
    async def generate(self, model: str, prompt: str) -> bytes:
        """Request a buffered (non-streamed) completion.

        Parameters
        ----------
        model:
            Model name as understood by the endpoint (not validated here).
        prompt:
            Full prompt text.

        Returns
        -------
        bytes
            The raw response body: a single JSON object.

        Raises
        ------
        docprompt.utils.errors.GenerationError
            If the endpoint answers with a non-success status.
        docprompt.utils.errors.ProviderUnavailableError
            If the endpoint cannot be reached.
        """

    @abstractmethod
    def stream_generate(self, model: str, prompt: str) -> AsyncIterator[bytes]:
        """Request a streamed completion and yield raw body chunks.

        Chunks arrive exactly as the transport delivers them; they are not
        aligned to NDJSON line boundaries.  Closing the iterator early
        (``aclose()``) releases the underlying connection.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"ollama"``."""
