"""Detection of parameters and return values described in running text.

Some styles describe parameters by writing their names in capitals
("Returns the sum of A and B.") instead of using @param tags, and
describe results with a sentence instead of an @return tag.
"""

from __future__ import annotations

import re
from typing import Iterable

from jdcheck.javadoc.models import CommentBlock, ParameterDecl


class NarrativeScanner:
    """Finds implicit parameter and return-value mentions in a comment."""

    # Potential parameter name written in all capitals
    PARAM_RE = re.compile(r"\b[A-Z_][A-Z0-9_]*\b")
    # A word describing the return of a value
    RETURN_RE = re.compile(r"\b(return|yield)(s|ing)?\b", re.IGNORECASE)

    def mentions_return(self, comment: CommentBlock) -> bool:
        """True if any line talks about returning or yielding a value."""
        return any(self.RETURN_RE.search(line) for line in comment.lines)

    def mentioned_parameters(
        self,
        comment: CommentBlock,
        parameters: Iterable[ParameterDecl],
    ) -> set[str]:
        """Tag names ("x", "<T>") of the parameters written in capitals.

        Value and type parameters are both compared against their bare
        name, ignoring case.
        """
        by_name: dict[str, list[str]] = {}
        for param in parameters:
            by_name.setdefault(param.bare_name.lower(), []).append(param.tag_name)
        if not by_name:
            return set()

        mentioned: set[str] = set()
        for line in comment.lines:
            for token in self.PARAM_RE.findall(line):
                mentioned.update(by_name.get(token.lower(), ()))
        return mentioned
