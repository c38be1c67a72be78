import logging
import xml.etree.ElementTree as ET

from tree_sitter import Node

from autonotify.core.syntax import node_text

logger = logging.getLogger(__name__)

_DOC_PREFIX = "///"


def collect_documentation(node: Node, source_bytes: bytes) -> str | None:
    """Return the ``///`` lines directly above ``node`` as one XML fragment, or None."""
    lines: list[str] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = node_text(sibling, source_bytes).strip()
        if not text.startswith(_DOC_PREFIX):
            break
        lines.append(text[len(_DOC_PREFIX) :])
        sibling = sibling.prev_sibling
    if not lines:
        return None
    lines.reverse()
    return "\n".join(line[1:] if line.startswith(" ") else line for line in lines)


def summary_text(documentation: str | None) -> str | None:
    """Collapse the ``<summary>`` text (or the first element's text) of a doc comment into one line."""
    if documentation is None or not documentation.strip():
        return None
    try:
        member = ET.fromstring(f"<member>{documentation}</member>")
    except ET.ParseError as exc:
        logger.debug("Ignoring malformed documentation comment: %s", exc)
        return None

    element = member.find("summary")
    if element is None:
        element = next(iter(member), None)
    if element is None:
        return None

    text = " ".join("".join(element.itertext()).split())
    return text or None
