"""Prompt resolution: decides which text is actually sent to the model.

Precedence, highest first:

    1. an explicit prompt (``--prompt``)
    2. the combined text of the input files, if it has any non-whitespace
    3. free-form words given on the command line after the model name

An optional task instruction is prepended with a blank line so the model
knows what to do with the documents, e.g. ``"Summarise into key points"``.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from docprompt.utils.errors import PromptError

logger = structlog.get_logger(logger_name=__name__)

NO_PROMPT_HELP = (
    "No prompt text found.\n"
    "Provide one of:\n"
    '  • --prompt "Summarise this"\n'
    "  • --file /path/to/doc (repeatable; supports .docx, .pdf, .pptx, .md, .txt, .json)\n"
    "  • free text after the model name\n"
    "Optional:\n"
    '  • --task "Summarise into key points and action items"\n'
)


def resolve_prompt(
    explicit_prompt: str | None = None,
    combined_text: str = "",
    positional_words: Sequence[str] = (),
    task: str | None = None,
) -> str:
    """Pick the prompt text and apply the optional task prefix.

    Args:
        explicit_prompt: Prompt given directly; wins when non-empty.
        combined_text: Output of the document assembler.
        positional_words: Remaining command-line words, joined with spaces.
        task: Instruction placed before the prompt.

    Returns:
        The final prompt.

    Raises:
        PromptError: If every source is empty or whitespace-only.
    """
    if explicit_prompt:
        prompt, source = explicit_prompt, "explicit"
    elif combined_text.strip():
        prompt, source = combined_text, "files"
    elif positional_words:
        prompt, source = " ".join(positional_words), "positional"
    else:
        prompt, source = "", "none"

    if task and task.strip() and prompt:
        prompt = f"{task.strip()}\n\n{prompt}"

    if not prompt.strip():
        raise PromptError(NO_PROMPT_HELP)

    logger.debug("prompt_resolved", source=source, chars=len(prompt), task=bool(task))
    return prompt
