"""jdcheck.javadoc - Verification of method Javadoc against signatures."""

from jdcheck.javadoc.models import (
    CommentBlock,
    Diagnostic,
    DiagnosticKind,
    ExceptionDecl,
    MethodSignature,
    ParameterDecl,
    ResolutionContext,
    Tag,
    TagKind,
    TypeRef,
)
from jdcheck.javadoc.exceptions import ClassInfo, ExceptionResolver, HierarchyResolver
from jdcheck.javadoc.narrative import NarrativeScanner
from jdcheck.javadoc.tags import extract_tags
from jdcheck.javadoc.engine import VerificationEngine
from jdcheck.javadoc.messages import format_diagnostic, format_message

__all__ = [
    "ClassInfo",
    "CommentBlock",
    "Diagnostic",
    "DiagnosticKind",
    "ExceptionDecl",
    "ExceptionResolver",
    "HierarchyResolver",
    "MethodSignature",
    "NarrativeScanner",
    "ParameterDecl",
    "ResolutionContext",
    "Tag",
    "TagKind",
    "TypeRef",
    "VerificationEngine",
    "extract_tags",
    "format_diagnostic",
    "format_message",
]
