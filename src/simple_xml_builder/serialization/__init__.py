"""Escaping and serialization of element trees."""

from .escaping import escape_str
from .writer import (
    XML_DECLARATION,
    XMLWriter,
    format_attributes,
    write_document,
)

__all__ = [
    "XML_DECLARATION",
    "XMLWriter",
    "escape_str",
    "format_attributes",
    "write_document",
]
