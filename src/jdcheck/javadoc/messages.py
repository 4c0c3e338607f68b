"""Message catalogue for Javadoc diagnostics."""

from __future__ import annotations

from jdcheck.javadoc.models import Diagnostic, DiagnosticKind

_MESSAGES: dict[DiagnosticKind, str] = {
    DiagnosticKind.MISSING_JAVADOC: "Missing a Javadoc comment.",
    DiagnosticKind.INVALID_INHERIT_DOC: "Invalid use of the {{@inheritDoc}} tag.",
    DiagnosticKind.EXPECTED_PARAM_TAG: "Expected {0} tag for '{1}'.",
    DiagnosticKind.EXPECTED_RETURN_TAG: "Expected an @return tag.",
    DiagnosticKind.EXPECTED_THROWS_TAG: "Expected {0} tag for '{1}'.",
    DiagnosticKind.DUPLICATE_TAG: "Duplicate {0} tag.",
    DiagnosticKind.MIXED_DOCUMENTATION_STYLE: (
        "Mixed @param tags and narrative parameter descriptions."
    ),
}

# UnusedTag names the tag argument when there is one
_UNUSED_WITH_ARG = "Unused {0} tag for '{1}'."
_UNUSED_GENERAL = "Unused {0} tag."


def format_message(diagnostic: Diagnostic) -> str:
    """Render the human-readable text of a diagnostic."""
    if diagnostic.kind is DiagnosticKind.UNUSED_TAG:
        if not diagnostic.args:
            return "Unused Javadoc tag."
        template = _UNUSED_WITH_ARG if len(diagnostic.args) > 1 else _UNUSED_GENERAL
    else:
        template = _MESSAGES[diagnostic.kind]
    return template.format(*diagnostic.args)


def format_diagnostic(path: str, diagnostic: Diagnostic) -> str:
    """Format as `path:line:column: message`."""
    return f"{path}:{diagnostic.line}:{diagnostic.column}: {format_message(diagnostic)}"
