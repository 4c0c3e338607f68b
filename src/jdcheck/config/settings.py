"""Check settings.

Settings are validated and their patterns compiled once, at start-up; the
resulting model is frozen and safe to share between worker threads.
"""

from __future__ import annotations

from re import Pattern
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Scope = Literal["public", "protected", "package", "private"]

# Most visible first
_SCOPE_ORDER = ("public", "protected", "package", "private")


def scope_includes(scope: str, visibility: str) -> bool:
    """True if a member with `visibility` lies within `scope`."""
    return _SCOPE_ORDER.index(visibility) <= _SCOPE_ORDER.index(scope)


class CheckSettings(BaseModel):
    """Options for Javadoc method verification.

    Every option can also be given under its camelCase property name
    (e.g. `allowNarrativeParamTags`) so existing configurations carry over.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    allow_narrative_param_tags: bool = Field(
        default=False, alias="allowNarrativeParamTags"
    )
    allow_narrative_return_tags: bool = Field(
        default=False, alias="allowNarrativeReturnTags"
    )
    unused_param_format: Pattern[str] | None = Field(
        default=None, alias="unusedParamFormat"
    )
    ignore_method_names_regex: Pattern[str] | None = Field(
        default=None, alias="ignoreMethodNamesRegex"
    )
    allow_missing_param_tags: bool = Field(default=False, alias="allowMissingParamTags")
    allow_missing_return_tag: bool = Field(default=False, alias="allowMissingReturnTag")
    allow_missing_throws_tags: bool = Field(
        default=False, alias="allowMissingThrowsTags"
    )
    allow_undeclared_rte: bool = Field(default=False, alias="allowUndeclaredRTE")
    allow_missing_javadoc: bool = Field(default=False, alias="allowMissingJavadoc")
    min_line_count: int = Field(default=-1, alias="minLineCount")
    allowed_annotations: tuple[str, ...] = Field(
        default=("Override",), alias="allowedAnnotations"
    )
    scope: Scope = "private"
    exclude_scope: Scope | None = Field(default=None, alias="excludeScope")
    # Extra exception classes: qualified name -> qualified superclass
    exception_hierarchy: dict[str, str | None] = Field(
        default_factory=dict, alias="exceptionHierarchy"
    )

    def in_scope(self, visibility: str) -> bool:
        """True if declarations with this visibility are checked at all."""
        if not scope_includes(self.scope, visibility):
            return False
        if self.exclude_scope is not None and scope_includes(
            self.exclude_scope, visibility
        ):
            return False
        return True

    def is_unused_param(self, name: str) -> bool:
        """True if the parameter name need not be documented."""
        return (
            self.unused_param_format is not None
            and self.unused_param_format.fullmatch(name.strip("<>")) is not None
        )
