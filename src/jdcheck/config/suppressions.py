"""Per-file suppression of diagnostics."""

from __future__ import annotations

from fnmatch import fnmatch

from pydantic import BaseModel, ConfigDict

from jdcheck.javadoc.models import DiagnosticKind


class Suppression(BaseModel):
    """Silences diagnostics for files matching a glob."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    files: str
    kinds: tuple[DiagnosticKind, ...] = ()  # Empty means every kind

    def matches(self, path: str, kind: DiagnosticKind) -> bool:
        if not fnmatch(path, self.files):
            return False
        return not self.kinds or kind in self.kinds


def is_suppressed(
    suppressions: list[Suppression], path: str, kind: DiagnosticKind
) -> bool:
    return any(s.matches(path, kind) for s in suppressions)
