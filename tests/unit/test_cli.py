"""Unit tests for the docprompt CLI (docprompt.cli.ask)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from docprompt.cli.ask import _build_parser, _run, _split_model_and_words, main
from docprompt.config.settings import Settings
from docprompt.utils.errors import (
    DocumentNotFoundError,
    GenerationError,
    PromptError,
    ProviderUnavailableError,
    UnreadableDocumentError,
)

_RUN_PROMPT = "docprompt.cli.ask.run_prompt"


# ======================================================================
# Argument parsing
# ======================================================================


class TestParser:
    def test_defaults(self) -> None:
        args = _build_parser().parse_args([])
        assert args.words == []
        assert args.files == []
        assert args.model is None
        assert args.stream is False
        assert args.config == "config/config.yaml"

    def test_repeatable_file_and_flags(self) -> None:
        args = _build_parser().parse_args(
            ["mistral", "why", "--file", "a.docx", "-f", "b.pdf", "--stream", "-t", "Summarise", "-q"]
        )
        assert args.words == ["mistral", "why"]
        assert args.files == ["a.docx", "b.pdf"]
        assert args.stream is True
        assert args.task == "Summarise"
        assert args.quiet is True

    def test_long_options(self) -> None:
        args = _build_parser().parse_args(["--model", "llama3.1", "--prompt", "hi", "--json-logs"])
        assert args.model == "llama3.1"
        assert args.prompt == "hi"
        assert args.json_logs is True


class TestSplitModelAndWords:
    def test_explicit_model_keeps_all_words(self) -> None:
        result = _split_model_and_words("llama3.1", ["why", "blue"], "mistral")
        assert result.model == "llama3.1"
        assert result.words == ["why", "blue"]

    def test_first_word_is_model(self) -> None:
        result = _split_model_and_words(None, ["phi3", "why", "blue"], "mistral")
        assert result.model == "phi3"
        assert result.words == ["why", "blue"]

    def test_default_model(self) -> None:
        result = _split_model_and_words(None, [], "mistral")
        assert result.model == "mistral"
        assert result.words == []


# ======================================================================
# _run
# ======================================================================


class TestRun:
    @pytest.mark.asyncio
    async def test_builds_job_from_args(self, test_settings: Settings) -> None:
        args = _build_parser().parse_args(
            ["phi3", "extra", "words", "-f", "a.md", "--task", "Summarise", "--stream"]
        )
        with patch(_RUN_PROMPT, new_callable=AsyncMock, return_value="answer") as run_prompt:
            code = await _run(args, test_settings)

        assert code == 0
        job = run_prompt.await_args.args[0]
        assert job.model == "phi3"
        assert list(job.positional_words) == ["extra", "words"]
        assert list(job.files) == ["a.md"]
        assert job.task == "Summarise"
        assert job.stream is True
        assert job.explicit_prompt is None

    @pytest.mark.asyncio
    async def test_default_model_from_settings(self, test_settings: Settings) -> None:
        args = _build_parser().parse_args(["--prompt", "hello"])
        with patch(_RUN_PROMPT, new_callable=AsyncMock, return_value="") as run_prompt:
            await _run(args, test_settings)
        assert run_prompt.await_args.args[0].model == "mistral"

    @pytest.mark.asyncio
    async def test_missing_file_reports_path(self, test_settings: Settings, capsys) -> None:
        args = _build_parser().parse_args(["-f", "gone.docx"])
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=DocumentNotFoundError("/w/gone.docx")):
            code = await _run(args, test_settings)
        captured = capsys.readouterr()
        assert code == 1
        assert "File not found: /w/gone.docx" in captured.err
        assert captured.out == ""

    @pytest.mark.asyncio
    async def test_unreadable_file_reports_cause(self, test_settings: Settings, capsys) -> None:
        args = _build_parser().parse_args(["-f", "bad.pdf"])
        error = UnreadableDocumentError("/w/bad.pdf", "cannot open broken document")
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=error):
            code = await _run(args, test_settings)
        assert code == 1
        assert "Failed to read /w/bad.pdf: cannot open broken document" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_no_prompt_prints_help(self, test_settings: Settings, capsys) -> None:
        args = _build_parser().parse_args([])
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=PromptError("No prompt text found.\n--prompt")):
            code = await _run(args, test_settings)
        assert code == 1
        assert "--prompt" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_unreachable_server_prints_hint(self, test_settings: Settings, capsys) -> None:
        args = _build_parser().parse_args(["hi"])
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=ProviderUnavailableError("refused")):
            code = await _run(args, test_settings)
        err = capsys.readouterr().err
        assert code == 1
        assert "ollama serve" in err
        assert "http://127.0.0.1:11434/api/tags" in err

    @pytest.mark.asyncio
    async def test_generation_error_is_prefixed(self, test_settings: Settings, capsys) -> None:
        args = _build_parser().parse_args(["hi"])
        error = GenerationError("Ollama request failed 404: not found", provider_name="ollama")
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=error):
            code = await _run(args, test_settings)
        assert code == 1
        assert "Error: [ollama] Ollama request failed 404: not found" in capsys.readouterr().err


# ======================================================================
# main
# ======================================================================


class TestMain:
    @pytest.fixture(autouse=True)
    def _no_logging_setup(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        # configure_logging binds sys.stderr at call time; keep capsys streams out of it.
        for name in ("OLLAMA_URL", "DEFAULT_MODEL", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)
        with patch("docprompt.cli.ask.configure_logging") as configure:
            yield configure

    def test_success_exits_zero(self, tmp_path: Path, _no_logging_setup) -> None:
        with patch(_RUN_PROMPT, new_callable=AsyncMock, return_value="ok"):
            with pytest.raises(SystemExit) as exc_info:
                main(["--config", str(tmp_path / "none.yaml"), "mistral", "hi"])
        assert exc_info.value.code == 0
        _no_logging_setup.assert_called_once_with(log_level="INFO", json_output=False)

    def test_quiet_lowers_log_level(self, tmp_path: Path, _no_logging_setup) -> None:
        with patch(_RUN_PROMPT, new_callable=AsyncMock, return_value="ok"):
            with pytest.raises(SystemExit):
                main(["--config", str(tmp_path / "none.yaml"), "-q", "--json-logs", "hi"])
        _no_logging_setup.assert_called_once_with(log_level="WARNING", json_output=True)

    def test_failure_exits_one(self, tmp_path: Path) -> None:
        with patch(_RUN_PROMPT, new_callable=AsyncMock, side_effect=PromptError()):
            with pytest.raises(SystemExit) as exc_info:
                main(["--config", str(tmp_path / "none.yaml")])
        assert exc_info.value.code == 1

    def test_bad_config_exits_one(self, tmp_path: Path, capsys) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("generation:\n  url: nope\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config), "hi"])
        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err
