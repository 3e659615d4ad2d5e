"""docprompt — send documents to a local text-generation model.

Extracts text from .docx, .pdf, .pptx and plain-text files, combines it into
one prompt, and submits it to an Ollama ``/api/generate`` endpoint in either
buffered or streaming mode.
"""

__version__ = "0.1.0"
