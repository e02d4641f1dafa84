"""Escaping of reserved XML characters.

Values are escaped once, when they are handed to an element, never at write
time.
"""

from typing import Tuple

# Ampersand first so the entities produced by later replacements stay intact.
XML_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def escape_str(value: str) -> str:
    """Replace reserved XML characters with their entity references.

    Already escaped input is escaped again:

    >>> escape_str("&< &")
    '&amp;&lt; &amp;'
    >>> escape_str("&amp;")
    '&amp;amp;'
    """
    for char, entity in XML_ESCAPES:
        value = value.replace(char, entity)
    return value
