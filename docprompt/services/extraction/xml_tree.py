"""Typed XML tree and text-run collection for packaged documents.

``parse_xml`` converts an XML part into a small tagged-variant tree:

    XmlElement(tag, attributes, children)   -- an element
    XmlText(value)                          -- character data between elements

Element text and tails become :class:`XmlText` children at the position
they occupy in the source, so a depth-first walk sees every piece of text
in document order.  Tags use ElementTree's Clark notation
(``{namespace-uri}local``); the ``*_TAG`` constants below spell out the
Office Open XML ones.

:class:`TextRunCollector` is format-agnostic: give it the text-run tag of a
format (``w:t`` for Word, ``a:t`` for DrawingML slides) and it returns the
scalar value of every such element, in order.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Office Open XML namespaces and tags
# ---------------------------------------------------------------------------

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
DRAWING_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
MARKUP_COMPAT_NS = "http://schemas.openxmlformats.org/markup-compatibility/2006"


def qname(namespace: str, local: str) -> str:
    """Clark-notation tag, e.g. ``qname(WORD_NS, "t") == "{...main}t"``."""
    return f"{{{namespace}}}{local}"


WORD_PARAGRAPH_TAG = qname(WORD_NS, "p")
WORD_TEXT_RUN_TAG = qname(WORD_NS, "t")
WORD_TAB_TAG = qname(WORD_NS, "tab")
WORD_BREAK_TAG = qname(WORD_NS, "br")
WORD_CARRIAGE_RETURN_TAG = qname(WORD_NS, "cr")
SLIDE_TEXT_RUN_TAG = qname(DRAWING_NS, "t")
MC_ALTERNATE_CONTENT_TAG = qname(MARKUP_COMPAT_NS, "AlternateContent")
MC_CHOICE_TAG = qname(MARKUP_COMPAT_NS, "Choice")
MC_FALLBACK_TAG = qname(MARKUP_COMPAT_NS, "Fallback")


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class XmlText:
    """Character data found between (or inside) elements."""

    value: str = ""


@dataclass(frozen=True)
class XmlElement:
    """An element with its attributes and ordered children."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[XmlElement | XmlText, ...] = ()

    @property
    def text(self) -> str:
        """Concatenated direct text children; ``""`` when there are none."""
        return "".join(child.value for child in self.children if isinstance(child, XmlText))


XmlNode = XmlElement | XmlText


def _convert(element: ET.Element) -> XmlElement:
    # Iterative post-order conversion; deeply nested parts would overflow a
    # recursive version.
    stack: list[tuple[ET.Element, list[XmlNode]]] = [(element, [])]
    built: dict[int, XmlElement] = {}
    while stack:
        current, children = stack[-1]
        pending = [child for child in current if id(child) not in built]
        if pending:
            for child in reversed(pending):
                stack.append((child, []))
            continue
        stack.pop()
        if current.text:
            children.append(XmlText(current.text))
        for child in current:
            children.append(built.pop(id(child)))
            if child.tail:
                children.append(XmlText(child.tail))
        built[id(current)] = XmlElement(
            tag=current.tag,
            attributes=dict(current.attrib),
            children=tuple(children),
        )
    return built[id(element)]


def parse_xml(data: bytes) -> XmlElement:
    """Parse an XML document into an :class:`XmlElement` tree.

    Raises:
        xml.etree.ElementTree.ParseError: If ``data`` is not well-formed XML.
    """
    return _convert(ET.fromstring(data))


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def select_alternate(element: XmlElement) -> XmlElement | None:
    """Pick the one branch of an ``mc:AlternateContent`` to read.

    Word stores modern shapes (text boxes, SmartArt) twice: once under
    ``mc:Choice`` and once as a legacy ``mc:Fallback``.  The fallback is
    preferred when present, otherwise the first choice.
    """
    first_choice: XmlElement | None = None
    for child in element.children:
        if not isinstance(child, XmlElement):
            continue
        if child.tag == MC_FALLBACK_TAG:
            return child
        if child.tag == MC_CHOICE_TAG and first_choice is None:
            first_choice = child
    return first_choice


def content_children(element: XmlElement) -> tuple[XmlNode, ...]:
    """Children that carry content, with alternate content resolved to one branch."""
    if element.tag == MC_ALTERNATE_CONTENT_TAG:
        branch = select_alternate(element)
        return branch.children if branch is not None else ()
    return element.children


def walk(
    node: XmlNode,
    prune: Callable[[XmlElement], bool] | None = None,
) -> Iterator[XmlNode]:
    """Yield ``node`` and its descendants, depth-first, left-to-right.

    An element for which ``prune`` returns True is yielded but not descended
    into.  Only one branch of each ``mc:AlternateContent`` is visited.
    """
    stack: list[XmlNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        if not isinstance(current, XmlElement):
            continue
        if prune is not None and prune(current):
            continue
        stack.extend(reversed(content_children(current)))


def iter_outermost(node: XmlNode, tag: str) -> Iterator[XmlElement]:
    """Yield elements matching ``tag`` without descending into a match.

    Word nests paragraphs inside text boxes that themselves sit inside a
    paragraph; only the outer paragraph is yielded so text is not repeated.
    """
    def is_match(element: XmlElement) -> bool:
        return element.tag == tag

    for current in walk(node, prune=is_match):
        if isinstance(current, XmlElement) and is_match(current):
            yield current


class TextRunCollector:
    """Collects the values of leaf text-run elements in document order.

    Parameters
    ----------
    leaf_tag:
        Clark-notation tag of the format's text-run element.
    """

    def __init__(self, leaf_tag: str) -> None:
        self._leaf_tag = leaf_tag

    @property
    def leaf_tag(self) -> str:
        return self._leaf_tag

    def collect(self, node: XmlNode) -> list[str]:
        """Return the text of every ``leaf_tag`` element under ``node``.

        Empty or missing text yields ``""`` rather than being skipped, so the
        output length equals the number of text-run elements.  Callers
        normalize with :func:`docprompt.utils.text_normalizer.normalize_lines`.
        """
        return [element.text for element in iter_outermost(node, self._leaf_tag)]
