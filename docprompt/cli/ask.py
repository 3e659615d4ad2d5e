# =============================================================================
# docprompt/cli/ask.py — Send documents and/or a prompt to a local model
# =============================================================================
#
# Typical usage:
#   docprompt mistral "Why is the sky blue?"
#   docprompt --model llama3.1 --file notes.docx --file deck.pptx \
#       --task "Summarise into key points and action items" --stream
#   python -m docprompt.cli --prompt "Summarise this" --file report.pdf
#
# Model selection:   --model  >  first positional word  >  DEFAULT_MODEL
# Prompt selection:  --prompt >  combined file text     >  remaining words
#
# All files are extracted before the request is sent.  A missing or
# unreadable file aborts the run with exit code 1 and nothing is sent.
#
# stdout carries only the model's answer; logs and errors go to stderr.
# =============================================================================

"""Command-line client: documents in, model answer out.

Usage::

    docprompt [MODEL] [WORDS ...] [--model M] [--prompt P] [--task T]
              [--file PATH ...] [--stream] [--quiet] [--json-logs]

Exit status is 0 on success and 1 on any error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from docprompt.config.loader import build_settings
from docprompt.config.settings import Settings
from docprompt.main import PromptJob, run_prompt
from docprompt.utils.errors import (
    ConfigurationError,
    DocPromptError,
    DocumentNotFoundError,
    PromptError,
    ProviderUnavailableError,
    UnreadableDocumentError,
)
from docprompt.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)


@dataclass
class ModelAndWords:
    model: str
    words: list[str] = field(default_factory=list)


def _split_model_and_words(
    explicit_model: str | None,
    positional: Sequence[str],
    default_model: str,
) -> ModelAndWords:
    """Apply the model precedence rule.

    When the model comes from the first positional word, the remaining words
    form the positional prompt; with ``--model`` every word is prompt text.
    """
    if explicit_model:
        return ModelAndWords(model=explicit_model, words=list(positional))
    if positional:
        return ModelAndWords(model=positional[0], words=list(positional[1:]))
    return ModelAndWords(model=default_model)


def _connection_hint(app_settings: Settings) -> str:
    return (
        "Connection refused. Ensure Ollama is running:\n"
        "  • Open the Ollama UI app  OR  run `ollama serve`\n"
        f"  • Verify: curl {app_settings.api_base_url}/api/tags\n"
    )


def _report(exc: DocPromptError, app_settings: Settings) -> None:
    """Print a user-facing error message to stderr."""
    if isinstance(exc, ProviderUnavailableError):
        print(_connection_hint(app_settings), file=sys.stderr)
    elif isinstance(exc, (DocumentNotFoundError, UnreadableDocumentError, PromptError)):
        # These messages already name the path / list the accepted inputs.
        print(exc.message, file=sys.stderr)
    else:
        print(f"Error: {exc}", file=sys.stderr)


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    """Run one prompt; returns the process exit code."""
    selection = _split_model_and_words(args.model, args.words, app_settings.default_model)
    job = PromptJob(
        model=selection.model,
        explicit_prompt=args.prompt,
        files=args.files,
        positional_words=selection.words,
        task=args.task,
        stream=args.stream,
    )
    try:
        await run_prompt(job, app_settings)
    except DocPromptError as exc:
        logger.debug("run_failed", error_type=type(exc).__name__, error=str(exc))
        _report(exc, app_settings)
        return 1
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the docprompt CLI."""
    parser = argparse.ArgumentParser(
        prog="docprompt",
        description=(
            "Turn .docx, .pdf, .pptx, .md, .txt and .json files into a prompt "
            "and send it to a local Ollama model."
        ),
    )
    parser.add_argument(
        "words",
        nargs="*",
        help="Optional model name followed by free-form prompt text.",
    )
    parser.add_argument("--model", "-m", default=None, help="Model name (e.g. mistral, llama3.1).")
    parser.add_argument("--prompt", "-p", default=None, help="Prompt text; overrides file content.")
    parser.add_argument(
        "--task",
        "-t",
        default=None,
        help="Instruction placed before the prompt, e.g. 'Summarise into key points'.",
    )
    parser.add_argument(
        "--file",
        "-f",
        action="append",
        dest="files",
        default=[],
        metavar="PATH",
        help="Document to include (repeatable). Supports .docx, .pdf, .pptx, .md, .txt, .json.",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Print tokens as they are generated.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML defaults file (environment variables still take precedence).",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines on stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point; exits the process with the run's status code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        app_settings = build_settings(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    log_level = "WARNING" if args.quiet else app_settings.log_level
    configure_logging(log_level=log_level, json_output=args.json_logs)

    exit_code = asyncio.run(_run(args, app_settings))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
