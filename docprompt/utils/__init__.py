"""Utility modules for docprompt.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at DocPromptError;
  extraction, prompt, and generation stages each raise their own subclass so
  callers can handle failures granularly without broad ``except Exception``.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.  Always
  writes to stderr.
- **text_normalizer** -- Whitespace collapsing for text runs pulled out of
  packaged XML documents.
"""

# -- Exception hierarchy ------------------------------------------------------
from docprompt.utils.errors import (
    ConfigurationError,
    ContainerEmptyError,
    ContainerReadError,
    DocPromptError,
    DocumentNotFoundError,
    GenerationError,
    PromptError,
    ProviderUnavailableError,
    UnreadableDocumentError,
)

# -- Structured logging (structlog) --------------------------------------------
from docprompt.utils.logging import configure_logging, get_logger

# -- Text normalization ----------------------------------------------------------
from docprompt.utils.text_normalizer import collapse_whitespace, normalize_lines

__all__ = [
    "ConfigurationError",
    "ContainerEmptyError",
    "ContainerReadError",
    "DocPromptError",
    "DocumentNotFoundError",
    "GenerationError",
    "PromptError",
    "ProviderUnavailableError",
    "UnreadableDocumentError",
    "collapse_whitespace",
    "configure_logging",
    "get_logger",
    "normalize_lines",
]
