"""docprompt application wiring.

Builds the extraction, provider, and aggregation components from
:class:`Settings` and runs one prompt end to end:

    files ─▶ DocumentAssembler ─▶ resolve_prompt ─▶ provider ─▶ ResponseAggregator ─▶ sink

Extraction always finishes (or fails) before the provider is called, so a
bad input file never results in a partial prompt being sent.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from docprompt.config.settings import Settings
from docprompt.interfaces.llm_provider import IGenerationProvider
from docprompt.providers.llm.ollama_provider import OllamaGenerationProvider
from docprompt.services.extraction.document_assembler import DocumentAssembler
from docprompt.services.generation.response_aggregator import ResponseAggregator, TextSink
from docprompt.services.prompt_service import resolve_prompt

logger = structlog.get_logger(logger_name=__name__)


@dataclass
class PromptJob:
    """Everything needed for one generation run."""

    model: str
    explicit_prompt: str | None = None
    files: Sequence[str | Path] = ()
    positional_words: Sequence[str] = ()
    task: str | None = None
    stream: bool = False


@dataclass
class Components:
    assembler: DocumentAssembler
    provider: IGenerationProvider
    aggregator: ResponseAggregator


def _build_provider(app_settings: Settings) -> IGenerationProvider:
    """Only the Ollama endpoint is supported."""
    return OllamaGenerationProvider(settings=app_settings)


def build_components(
    app_settings: Settings,
    provider: IGenerationProvider | None = None,
) -> Components:
    """Wire the default components; ``provider`` overrides the transport."""
    provider = provider or _build_provider(app_settings)
    return Components(
        assembler=DocumentAssembler(),
        provider=provider,
        aggregator=ResponseAggregator(provider_name=provider.get_provider_name()),
    )


def _stdout_sink(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


async def run_prompt(
    job: PromptJob,
    app_settings: Settings,
    sink: TextSink | None = None,
    components: Components | None = None,
    base_dir: str | Path | None = None,
) -> str:
    """Assemble the prompt, call the model, and write the answer to ``sink``.

    Returns the answer text (without the trailing newline).

    Raises:
        DocumentNotFoundError, UnreadableDocumentError: extraction failed; no
            request was made.
        PromptError: nothing to send.
        GenerationError, ProviderUnavailableError: the request failed.
    """
    sink = sink or _stdout_sink
    components = components or build_components(app_settings)

    combined_text = ""
    if job.files:
        combined_text = await components.assembler.assemble_text(job.files, base_dir)

    prompt = resolve_prompt(
        explicit_prompt=job.explicit_prompt,
        combined_text=combined_text,
        positional_words=job.positional_words,
        task=job.task,
    )
    logger.info(
        "prompt_ready",
        model=job.model,
        files=len(job.files),
        chars=len(prompt),
        stream=job.stream,
    )

    if job.stream:
        chunks = components.provider.stream_generate(job.model, prompt)
        summary = await components.aggregator.aggregate_stream(chunks, sink)
        return summary.text

    body = await components.provider.generate(job.model, prompt)
    answer = components.aggregator.aggregate_buffered(body)
    sink(answer + "\n")
    return answer

