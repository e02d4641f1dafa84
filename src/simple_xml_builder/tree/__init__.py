"""Element tree for simple XML building.

Key Components:
    XMLElement: Element with tag name, ordered attributes and content
    EmptyContent, ChildrenContent, TextContent: Mutually exclusive content variants
    element_from_dict: Builds a tree from a plain dict/JSON description
"""

from .content import (
    ChildrenContent,
    ElementContent,
    EmptyContent,
    TextContent,
)
from .element import XMLElement
from .loader import element_from_dict

__all__ = [
    "ChildrenContent",
    "ElementContent",
    "EmptyContent",
    "TextContent",
    "XMLElement",
    "element_from_dict",
]
