"""Multi-format document extraction.

Turns input files into one ordered text stream:

1. **Resolve** (document_assembler.py / DocumentAssembler) -- absolute
   paths, existence checks, batch ordering.
2. **Read** (package_reader.py / PackageReader) -- ZIP member access for
   packaged XML formats.
3. **Parse** (xml_tree.py / parse_xml, TextRunCollector) -- typed XML tree
   and document-order text-run collection.
4. **Extract** (extractors/) -- one strategy per format: plain text, DOCX,
   PDF, PPTX.
"""

from docprompt.services.extraction.document_assembler import DocumentAssembler
from docprompt.services.extraction.extractors import ExtractorRegistry
from docprompt.services.extraction.package_reader import PackageReader
from docprompt.services.extraction.xml_tree import TextRunCollector, parse_xml

__all__ = [
    "DocumentAssembler",
    "ExtractorRegistry",
    "PackageReader",
    "TextRunCollector",
    "parse_xml",
]
