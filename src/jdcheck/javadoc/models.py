"""Data models for Javadoc method verification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TagKind(Enum):
    PARAM = "param"
    RETURN = "return"
    THROWS = "throws"
    INHERIT_DOC = "inheritDoc"
    SEE_OR_OTHER = "other"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Tag:
    """A block tag (or {@inheritDoc}) found in a Javadoc comment."""

    kind: TagKind
    name: str  # Raw tag name: "param", "throws", "exception", "see", ...
    line: int
    column: int
    first_arg: str | None = None  # Parameter or exception name
    rest: str = ""  # Description, not parsed further


@dataclass(frozen=True)
class ParameterDecl:
    """A value parameter or type parameter of a declaration."""

    name: str
    is_type_parameter: bool = False
    line: int | None = None
    column: int | None = None

    @property
    def bare_name(self) -> str:
        return self.name.strip("<>")

    @property
    def tag_name(self) -> str:
        """Name as written after @param ("<T>" for type parameters)."""
        if self.is_type_parameter:
            return f"<{self.bare_name}>"
        return self.name


@dataclass(frozen=True)
class TypeRef:
    """A type named in a declaration's throws clause."""

    name: str
    line: int | None = None
    column: int | None = None


@dataclass
class ExceptionDecl:
    """Per-pass state for one declared exception.

    `found` only ever goes from False to True during a pass.
    """

    name: str
    resolved: object | None = None  # Opaque handle from the resolver
    found: bool = False
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class ResolutionContext:
    """Where a declaration lives, for resolving relative exception names."""

    package: str | None = None
    imports: dict[str, str] = field(default_factory=dict)  # simple -> qualified
    on_demand_imports: tuple[str, ...] = ()  # "java.util" for "java.util.*"
    enclosing_types: tuple[str, ...] = ()  # Qualified, outermost first


@dataclass(frozen=True)
class MethodSignature:
    """What a host parser tells us about a method or constructor."""

    name: str
    line: int
    column: int
    parameters: tuple[ParameterDecl, ...] = ()
    type_parameters: tuple[ParameterDecl, ...] = ()
    exceptions: tuple[TypeRef, ...] = ()
    returns_value: bool = False
    is_constructor: bool = False
    visibility: str = "public"  # "public" | "protected" | "package" | "private"
    is_static: bool = False
    annotations: tuple[str, ...] = ()  # Simple names, without "@"
    body_line_count: int = 0
    context: ResolutionContext | None = None

    @property
    def inherit_doc_allowed(self) -> bool:
        """{@inheritDoc} only makes sense on overridable instance methods."""
        return not (
            self.is_constructor or self.is_static or self.visibility == "private"
        )


@dataclass(frozen=True)
class CommentBlock:
    """Raw lines of a /** ... */ comment, from the opening to the closing line."""

    lines: tuple[str, ...]
    start_line: int = 1
    start_column: int = 1

    @classmethod
    def from_text(cls, text: str, start_line: int = 1, start_column: int = 1):
        return cls(tuple(text.split("\n")), start_line, start_column)

    def position(self, index: int, offset: int) -> tuple[int, int]:
        """Source position of character `offset` on comment line `index`."""
        if index == 0:
            return self.start_line, self.start_column + offset
        return self.start_line + index, offset + 1


class DiagnosticKind(Enum):
    MISSING_JAVADOC = "MissingJavadoc"
    INVALID_INHERIT_DOC = "InvalidInheritDoc"
    EXPECTED_PARAM_TAG = "ExpectedParamTag"
    EXPECTED_RETURN_TAG = "ExpectedReturnTag"
    EXPECTED_THROWS_TAG = "ExpectedThrowsTag"
    DUPLICATE_TAG = "DuplicateTag"
    UNUSED_TAG = "UnusedTag"
    MIXED_DOCUMENTATION_STYLE = "MixedDocumentationStyle"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding, attached to a source position."""

    kind: DiagnosticKind
    line: int
    column: int
    args: tuple[str, ...] = ()
