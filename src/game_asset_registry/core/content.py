"""Content parsing for discovered asset files.

Files are decoded as JSON first and as XML markup second. Markup trees keep
attributes under ``$``, text under ``_`` and child elements, in document
order, under ``$$``. Each element records its tag as ``#name``.
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any

from .types import NO_DATA, ContentFormat, ParsedContent, RawFile

logger = logging.getLogger(__name__)

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"
CHILDREN_KEY = "$$"
NAME_KEY = "#name"


def _new_node(element: ET.Element) -> dict[str, Any]:
    node: dict[str, Any] = {NAME_KEY: element.tag}
    if element.attrib:
        node[ATTRIBUTES_KEY] = dict(element.attrib)
    return node


def _element_to_tree(root: ET.Element) -> dict[str, Any]:
    """Convert an element tree iteratively.

    Text before the first child and the tail after each child are joined
    into ``_``, so mixed content keeps all of its text.
    """
    root_node = _new_node(root)
    pending = [(root, root_node)]

    while pending:
        element, node = pending.pop()

        text = "".join([element.text or ""] + [child.tail or "" for child in element]).strip()
        if text:
            node[TEXT_KEY] = text

        children = []
        for child in element:
            child_node = _new_node(child)
            children.append(child_node)
            pending.append((child, child_node))
        if children:
            node[CHILDREN_KEY] = children

    return root_node


def parse_markup(content: bytes) -> dict[str, Any]:
    """Parse an XML document into an order-preserving tree.

    Example:
        b'<map tiledversion="1.2"><layer/></map>' ->
        {"map": {"#name": "map", "$": {"tiledversion": "1.2"},
                 "$$": [{"#name": "layer"}]}}

    Raises:
        ET.ParseError: If the content is not well-formed XML
    """
    root = ET.fromstring(content)
    return {root.tag: _element_to_tree(root)}


def parse_content(raw: RawFile) -> ParsedContent:
    """Decode a file's bytes into a structured value.

    Never raises: content that is neither JSON nor XML yields a
    ParsedContent without data.
    """
    try:
        return ParsedContent(raw.path, json.loads(raw.content), ContentFormat.JSON)
    except (ValueError, RecursionError):
        pass

    try:
        return ParsedContent(raw.path, parse_markup(raw.content), ContentFormat.MARKUP)
    except (ET.ParseError, ValueError, RecursionError):
        pass

    logger.debug("No structured content in %s", raw.path)
    return ParsedContent(raw.path, NO_DATA, ContentFormat.NONE)
