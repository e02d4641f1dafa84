"""Content variants of an XML element.

An element is either empty (self-closing), a container of child elements, or
a text leaf. Exactly one variant is active at a time.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Union

if TYPE_CHECKING:
    from simple_xml_builder.tree.element import XMLElement


@dataclass(frozen=True)
class EmptyContent:
    """No children and no text; serialized as a self-closing tag."""


@dataclass
class ChildrenContent:
    """Ordered child elements owned by the parent."""

    elements: List["XMLElement"] = field(default_factory=list)


@dataclass(frozen=True)
class TextContent:
    """Escaped text payload."""

    text: str


ElementContent = Union[EmptyContent, ChildrenContent, TextContent]
