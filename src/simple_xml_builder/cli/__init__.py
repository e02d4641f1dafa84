"""Command-line interface module for Simple XML Builder.

This module provides the ``simple-xml-builder build`` command, which turns
JSON tree descriptions into XML documents.
"""

from .main import main

__all__ = ["main"]
