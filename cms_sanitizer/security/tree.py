"""Parse untrusted HTML into the minimal node tree the sanitizer walks.

html5lib recovers from malformed markup the same way browsers do. Its
ElementTree builder is converted into plain ``Text`` and ``Element`` nodes so
the rewriter depends on nothing but tag names, attribute pairs and ordered
children.
"""

from dataclasses import dataclass, field
from typing import Iterator, Union
from xml.etree import ElementTree

import html5lib


class TreeAdapterError(Exception):
    """Raised when the parser hands back a node the adapter cannot represent."""


@dataclass(frozen=True)
class Text:
    content: str


@dataclass
class Element:
    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: list["Node"] = field(default_factory=list)


Node = Union[Text, Element]


def parse_html(html: str) -> Element:
    """Parse an HTML string and return its ``<body>`` as an ``Element``.

    Content the parser moves into ``<head>`` (a leading ``<script>`` or
    ``<style>``, ``<title>``, ``<meta>``) is not part of the result, matching
    what a browser renders from the same string.

    Args:
        html: Raw, possibly malformed HTML

    Returns:
        Root element tagged ``body`` holding the converted document content

    Raises:
        TreeAdapterError: If the parsed tree contains an unknown node type
    """
    parser = html5lib.HTMLParser(
        tree=html5lib.getTreeBuilder("etree", ElementTree), namespaceHTMLElements=False
    )
    document = parser.parse(html)
    if document is None:
        raise TreeAdapterError("Parser returned no document")
    body = document.find("body")
    if body is None:
        body = document

    root = Element(tag="body")
    stack = [(body, root)]
    while stack:
        source, target = stack.pop()
        _append_text(target, source.text)
        for child in source:
            node = _convert(child)
            if node is not None:
                target.children.append(node)
                if isinstance(node, Element):
                    stack.append((child, node))
            # Text following a child lives on the child, dropped comments included
            _append_text(target, child.tail)
    return root


def _append_text(target: Element, text: Union[str, None]) -> None:
    if not text:
        return
    if target.children and isinstance(target.children[-1], Text):
        target.children[-1] = Text(target.children[-1].content + text)
    else:
        target.children.append(Text(text))


def _convert(child: ElementTree.Element) -> Union[Node, None]:
    if child.tag is ElementTree.Comment:
        return None
    if not isinstance(child.tag, str):
        raise TreeAdapterError(f"Unrecognized node type: {child.tag!r}")
    # Foreign content keeps its "{namespace}name" tag and never matches the allow-list
    return Element(tag=child.tag, attributes=tuple(child.attrib.items()))


def text_content(node: Node) -> str:
    """Concatenate all text below a node in document order.

    Text inside ``<script>`` and ``<style>`` counts as text, comments do not
    (they never reach the tree).
    """
    if isinstance(node, Text):
        return node.content

    parts = []
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.content)
        else:
            stack.extend(reversed(current.children))
    return "".join(parts)


def iter_elements(root: Element) -> Iterator[Element]:
    """Yield every element below ``root`` in document order."""
    stack = list(reversed(root.children))
    while stack:
        current = stack.pop()
        if isinstance(current, Element):
            yield current
            stack.extend(reversed(current.children))
