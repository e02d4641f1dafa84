"""XML element data model and its construction contract.

An element carries a tag name, an insertion-ordered attribute mapping and one
content variant. Attribute values and text are escaped as soon as they are
added, so the tree only ever holds output-ready strings.
"""

import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional, Tuple

from simple_xml_builder.serialization.escaping import escape_str
from simple_xml_builder.shared.errors import StructuralContractError
from simple_xml_builder.tree.content import (
    ChildrenContent,
    ElementContent,
    EmptyContent,
    TextContent,
)


def to_text(value: Any) -> str:
    """Convert a value with ``str()`` and check it can be written as UTF-8.

    Raises:
        ValueError: If the text holds lone surrogates
    """
    text = str(value)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"Text is not valid UTF-8 data: {text!r}") from e
    return text


@dataclass
class XMLElement:
    """A single XML element of a write-only document tree.

    Elements are built bottom-up: create children first, fill them, then hand
    them to their parent with ``add_child``. The parent owns its children; a
    child should not be modified after it has been added.

    Example:
        >>> person = XMLElement("person")
        >>> person.add_attribute("id", 232)
        >>> age = XMLElement("age")
        >>> age.add_text(24)
        >>> person.add_child(age)
        >>> print(person, end="")
        <?xml version = "1.0" encoding = "UTF-8"?>
        <person id="232">
        	<age>24</age>
        </person>
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict, init=False)
    content: ElementContent = field(default_factory=EmptyContent, init=False)

    def __post_init__(self) -> None:
        """Convert the tag name to its textual representation."""
        self.name = to_text(self.name)

    def __str__(self) -> str:
        """Serialize the element as a complete XML document."""
        return self.to_string()

    @property
    def is_empty(self) -> bool:
        """Check if element has neither children nor text."""
        return isinstance(self.content, EmptyContent)

    @property
    def children(self) -> Tuple["XMLElement", ...]:
        """Child elements in insertion order (empty for text and empty elements)."""
        if isinstance(self.content, ChildrenContent):
            return tuple(self.content.elements)
        return ()

    @property
    def text(self) -> Optional[str]:
        """Escaped text content, or None if the element holds no text."""
        if isinstance(self.content, TextContent):
            return self.content.text
        return None

    def add_attribute(self, name: Any, value: Any) -> None:
        """Add an attribute, or replace the value of an existing one.

        The value may be of any type; it is converted with ``str()`` and
        escaped. A replaced attribute keeps its original position.

        Raises:
            ValueError: If name or value cannot be encoded as UTF-8
        """
        attr_name = to_text(name)
        self.attributes[attr_name] = escape_str(to_text(value))

    def add_child(self, child: "XMLElement") -> None:
        """Add a child element after any previously added children.

        May only be called on an element that is empty or already has
        children.

        Raises:
            TypeError: If child is not an XMLElement
            StructuralContractError: If the element contains text, or if the
                element is added to itself
        """
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")
        if child is self:
            raise StructuralContractError("Attempted adding element to itself.")

        if isinstance(self.content, EmptyContent):
            self.content = ChildrenContent([child])
        elif isinstance(self.content, ChildrenContent):
            self.content.elements.append(child)
        else:
            raise StructuralContractError(
                "Attempted adding child element to element with text."
            )

    def add_text(self, text: Any) -> None:
        """Set the text of the element.

        May only be called on an empty element. The text may be of any type;
        it is converted with ``str()`` and escaped.

        Raises:
            StructuralContractError: If the element is not empty
            ValueError: If the text cannot be encoded as UTF-8
        """
        if not isinstance(self.content, EmptyContent):
            raise StructuralContractError("Attempted adding text to non-empty element.")
        self.content = TextContent(escape_str(to_text(text)))

    def write(self, sink: BinaryIO, correlation_id: Optional[str] = None) -> None:
        """Write a UTF-8 XML document with this element as the root.

        Args:
            sink: Binary destination with a ``write(bytes)`` method
            correlation_id: Optional correlation ID for log records

        Raises:
            XMLWriteError: If writing to the sink fails
        """
        from simple_xml_builder.serialization.writer import write_document

        write_document(self, sink, correlation_id)

    def to_string(self) -> str:
        """Serialize the document into memory and return it as text."""
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue().decode("utf-8")
