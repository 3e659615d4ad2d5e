"""Custom exception hierarchy for docprompt.

All application exceptions inherit from :class:`DocPromptError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "ollama", "pymupdf", "zipfile") caused the failure.

The hierarchy is organized by stage:

    DocPromptError  (base -- catch-all for any docprompt error)
    +-- DocumentNotFoundError     (input path does not exist; also a FileNotFoundError)
    +-- UnreadableDocumentError   (format-specific parse failure)
    |   +-- ContainerReadError    (file is not a valid ZIP container)
    +-- ContainerEmptyError       (no container member matched the request)
    +-- PromptError               (nothing to send to the model)
    +-- ConfigurationError        (invalid settings or YAML config)
    +-- GenerationError           (HTTP call failed or body was unusable)
    +-- ProviderUnavailableError  (endpoint unreachable)

Extraction errors are fatal for the whole batch: the assembler stops at the
first one and no request is ever sent with a partial prompt.
"""

from __future__ import annotations

from pathlib import Path


class DocPromptError(Exception):
    """Base exception for all docprompt errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[ollama] Connection refused``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Document extraction errors
# ---------------------------------------------------------------------------

class DocumentNotFoundError(DocPromptError, FileNotFoundError):
    """Raised when an input path does not exist.

    Also a :class:`FileNotFoundError`, so callers that only know about the
    builtin can still catch it.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        super().__init__(message=f"File not found: {self._path}")

    @property
    def path(self) -> str:
        return self._path


class UnreadableDocumentError(DocPromptError):
    """Raised when a document cannot be parsed by its format extractor.

    Carries the offending ``source_path`` and the underlying ``cause`` so the
    CLI can report both.
    """

    def __init__(
        self,
        source_path: str | Path,
        cause: BaseException | str | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._source_path = str(source_path)
        self._cause = cause
        detail = str(cause) if cause is not None else "unknown error"
        super().__init__(
            message=f"Failed to read {self._source_path}: {detail}",
            provider_name=provider_name,
        )

    @property
    def source_path(self) -> str:
        return self._source_path

    @property
    def cause(self) -> BaseException | str | None:
        return self._cause


class ContainerReadError(UnreadableDocumentError):
    """Raised when a packaged document is not a readable ZIP container."""

    def __init__(
        self,
        source_path: str | Path,
        cause: BaseException | str | None = None,
    ) -> None:
        super().__init__(source_path, cause, provider_name="zipfile")


class ContainerEmptyError(DocPromptError):
    """Raised when no member of a ZIP container matches the caller's request.

    Not fatal on its own: slide decks with no slides yield an empty body.
    Extractors that need a specific part escalate it to
    :class:`UnreadableDocumentError`.
    """

    def __init__(self, source_path: str | Path, wanted: str = "") -> None:
        self._source_path = str(source_path)
        suffix = f" ({wanted})" if wanted else ""
        super().__init__(
            message=f"No matching member in {self._source_path}{suffix}",
            provider_name="zipfile",
        )

    @property
    def source_path(self) -> str:
        return self._source_path


# ---------------------------------------------------------------------------
# Prompt / configuration errors
# ---------------------------------------------------------------------------

class PromptError(DocPromptError):
    """Raised when no prompt text could be resolved from the inputs."""

    def __init__(
        self,
        message: str = "No prompt text found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(DocPromptError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Generation endpoint errors
# ---------------------------------------------------------------------------

class GenerationError(DocPromptError):
    """Raised when a generation call fails or returns an unusable body."""

    def __init__(
        self,
        message: str = "Generation request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code


class ProviderUnavailableError(DocPromptError):
    """Raised when the generation endpoint cannot be reached.

    The CLI catches this to print instructions for starting the local server.
    """

    def __init__(
        self,
        message: str = "Generation endpoint is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
