"""jdcheck.java - Java source adapter (tree-sitter)."""

from jdcheck.java.adapter import (
    Declaration,
    DeclaredType,
    JavaFile,
    load_java,
    parse_java,
)

__all__ = [
    "Declaration",
    "DeclaredType",
    "JavaFile",
    "load_java",
    "parse_java",
]
