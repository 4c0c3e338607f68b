"""Builders for signatures and comments used across the javadoc tests."""

from jdcheck.javadoc import (
    CommentBlock,
    Diagnostic,
    MethodSignature,
    ParameterDecl,
    ResolutionContext,
    TypeRef,
)

# Where the builders put declarations
DECL_LINE = 20
DECL_COLUMN = 5

CONTEXT = ResolutionContext(
    package="demo",
    on_demand_imports=("java.io", "java.util"),
    enclosing_types=("demo.Widget",),
)


def comment(*lines: str, start_line: int = 10, start_column: int = 5) -> CommentBlock:
    """
    A conventionally laid out Javadoc comment.

    Example:
        comment("Adds two numbers.", "@param a first")
        # /**
        #  * Adds two numbers.
        #  * @param a first
        #  */
    """
    body = ["/**", *(f" * {line}" if line else " *" for line in lines), " */"]
    return CommentBlock(tuple(body), start_line, start_column)


def method(
    name: str = "compute",
    params: tuple[str, ...] = (),
    type_params: tuple[str, ...] = (),
    throws: tuple[str, ...] = (),
    returns: bool = False,
    **kwargs,
) -> MethodSignature:
    """A signature with parameters at columns 30, 40, ... of the declaration line."""
    kwargs.setdefault("context", CONTEXT)
    return MethodSignature(
        name=name,
        line=DECL_LINE,
        column=DECL_COLUMN,
        parameters=tuple(
            ParameterDecl(p, False, DECL_LINE, 30 + 10 * i) for i, p in enumerate(params)
        ),
        type_parameters=tuple(
            ParameterDecl(t, True, DECL_LINE, 12 + 2 * i)
            for i, t in enumerate(type_params)
        ),
        exceptions=tuple(
            TypeRef(e, DECL_LINE + 1, 20 + 15 * i) for i, e in enumerate(throws)
        ),
        returns_value=returns,
        **kwargs,
    )


def summary(diagnostics: list[Diagnostic]) -> list[tuple]:
    """(kind name, *args) per diagnostic, for compact assertions."""
    return [(d.kind.value, *d.args) for d in diagnostics]
