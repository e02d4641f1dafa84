"""Depth-first serialization of element trees to indented UTF-8 XML.

The writer walks the tree once, emitting one line per tag (or per text leaf)
to a binary sink. Open tags are written pre-order and close tags post-order,
each nesting level indented by one tab.
"""

from typing import TYPE_CHECKING, BinaryIO, Dict, List, Optional, Tuple

from simple_xml_builder.shared.errors import XMLWriteError
from simple_xml_builder.shared.logging import get_logger
from simple_xml_builder.tree.content import (
    ChildrenContent,
    EmptyContent,
    TextContent,
)

if TYPE_CHECKING:
    from simple_xml_builder.tree.element import XMLElement

XML_DECLARATION = '<?xml version = "1.0" encoding = "UTF-8"?>'
INDENT_UNIT = "\t"
LINE_TERMINATOR = "\n"
OUTPUT_ENCODING = "utf-8"


def format_attributes(attributes: Dict[str, str]) -> str:
    """Build the attribute fragment of an opening tag.

    Returns an empty string for no attributes, otherwise `` name="value"``
    for each attribute in insertion order.
    """
    return "".join(f' {name}="{value}"' for name, value in attributes.items())


class XMLWriter:
    """Serializes element trees to a binary sink."""

    def __init__(self, sink: BinaryIO, correlation_id: Optional[str] = None) -> None:
        """Initialize writer.

        Args:
            sink: Binary destination with a ``write(bytes)`` method
            correlation_id: Optional correlation ID for log records
        """
        self.sink = sink
        self.logger = get_logger(__name__, "writer", correlation_id)
        self.bytes_written = 0
        self.elements_written = 0

    def write_document(self, root: "XMLElement") -> None:
        """Write the XML declaration followed by ``root`` at level 0.

        Raises:
            XMLWriteError: If the sink fails; output written before the
                failure remains in the sink
        """
        self.bytes_written = 0
        self.elements_written = 0
        self.logger.debug("Starting document serialization", extra={"root": root.name})

        self._write_line(XML_DECLARATION)
        self._write_element(root, 0)

        self.logger.debug(
            "Document serialization complete",
            extra={
                "root": root.name,
                "elements_written": self.elements_written,
                "bytes_written": self.bytes_written,
            },
        )

    def _write_element(self, root: "XMLElement", level: int) -> None:
        """Write ``root`` and its subtree starting at the given nesting level.

        Uses an explicit stack of (element, level, closing) frames so tree
        depth is not bounded by the interpreter recursion limit.
        """
        stack: List[Tuple["XMLElement", int, bool]] = [(root, level, False)]

        while stack:
            element, depth, closing = stack.pop()
            prefix = INDENT_UNIT * depth

            if closing:
                self._write_line(f"{prefix}</{element.name}>")
                continue

            attrs = format_attributes(element.attributes)
            content = element.content
            self.elements_written += 1

            if isinstance(content, EmptyContent):
                self._write_line(f"{prefix}<{element.name}{attrs} />")
            elif isinstance(content, ChildrenContent):
                self._write_line(f"{prefix}<{element.name}{attrs}>")
                stack.append((element, depth, True))
                for child in reversed(content.elements):
                    stack.append((child, depth + 1, False))
            elif isinstance(content, TextContent):
                self._write_line(
                    f"{prefix}<{element.name}{attrs}>{content.text}</{element.name}>"
                )
            else:
                raise TypeError(f"Unknown element content: {type(content).__name__}")

    def _write_line(self, line: str) -> None:
        """Encode a line with its terminator and hand it to the sink.

        Short writes from raw sinks are retried with the remaining bytes. A
        sink returning None from ``write`` is taken to have accepted all data.
        """
        data = (line + LINE_TERMINATOR).encode(OUTPUT_ENCODING)
        try:
            remaining = data
            while remaining:
                written = self.sink.write(remaining)
                if written is None:
                    break
                if written <= 0:
                    raise OSError("Sink accepted no bytes")
                remaining = remaining[written:]
        except (OSError, ValueError) as e:
            self.logger.error(
                "Failed writing XML output",
                extra={
                    "bytes_written": self.bytes_written,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            raise XMLWriteError(f"Failed writing XML output: {e}") from e
        self.bytes_written += len(data)


def write_document(
    root: "XMLElement", sink: BinaryIO, correlation_id: Optional[str] = None
) -> None:
    """Write a UTF-8 XML document with ``root`` as the root element.

    Args:
        root: Root element of the document
        sink: Binary destination with a ``write(bytes)`` method
        correlation_id: Optional correlation ID for log records

    Raises:
        XMLWriteError: If writing to the sink fails
    """
    XMLWriter(sink, correlation_id).write_document(root)
