"""Generation provider adapters.

One concrete implementation of IGenerationProvider
(docprompt/interfaces/llm_provider.py):
    - OllamaGenerationProvider — local models via Ollama's /api/generate
"""

from docprompt.providers.llm.ollama_provider import OllamaGenerationProvider

__all__ = ["OllamaGenerationProvider"]
