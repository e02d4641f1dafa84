"""Simple XML Builder.

Builds write-only XML document trees in memory and serializes them to
indented UTF-8 XML.

Usage:
- Create elements with XMLElement(name)
- Add attributes with add_attribute() and either text (add_text()) or
  children (add_child())
- Write the document with root.write(sink) or get it as text with str(root)
"""

__version__ = "1.1.0"
__author__ = "Simple XML Builder Team"

from .tree import XMLElement, element_from_dict
from .serialization import escape_str, write_document
from .shared.errors import (
    StructuralContractError,
    TreeDescriptionError,
    XMLBuilderError,
    XMLWriteError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Tree construction
    "XMLElement",
    "element_from_dict",

    # Serialization
    "escape_str",
    "write_document",

    # Errors
    "StructuralContractError",
    "TreeDescriptionError",
    "XMLBuilderError",
    "XMLWriteError",
]
