"""Java source adapter built on tree-sitter.

Turns a Java compilation unit into `(MethodSignature, CommentBlock | None)`
pairs for the verification engine, and reports the classes the file
declares so `@throws` tags can be matched against them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from jdcheck.base import SourceParseError
from jdcheck.javadoc.exceptions import HierarchyResolver
from jdcheck.javadoc.models import (
    CommentBlock,
    MethodSignature,
    ParameterDecl,
    ResolutionContext,
    TypeRef,
)

log = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)
_METHOD_DECLARATIONS = frozenset(
    {"method_declaration", "constructor_declaration", "compact_constructor_declaration"}
)
_INTERFACE_BODIES = frozenset({"interface_body", "annotation_type_body"})
_BLOCK_COMMENTS = frozenset({"block_comment", "comment"})
_TYPE_NAMES = frozenset({"type_identifier", "scoped_type_identifier", "identifier"})
_GENERIC_ARGS = re.compile(r"<.*>", re.DOTALL)


@dataclass(frozen=True)
class Declaration:
    """A method-like declaration and its Javadoc comment, if any."""

    signature: MethodSignature
    comment: CommentBlock | None


@dataclass(frozen=True)
class DeclaredType:
    """A class, interface, enum or record declared in the file."""

    name: str  # Qualified
    superclass: str | None  # As written in the extends clause
    context: ResolutionContext  # Scope the extends clause is resolved in


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _type_name(node: Node) -> str:
    """Type name without annotations or type arguments."""
    if node.type == "generic_type":
        for child in node.named_children:
            if child.type in _TYPE_NAMES:
                return _text(child)
    return _GENERIC_ARGS.sub("", _text(node)).strip()


def _child_of_type(node: Node, *types: str) -> Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


class JavaFile:
    """A parsed Java compilation unit.

    Example:
        java_file = parse_java(Path("Foo.java").read_text(), "Foo.java")
        for decl in java_file.declarations():
            engine.verify(decl.signature, decl.comment)
    """

    def __init__(self, source: str, path: str = "<source>"):
        self.path = path
        self.source = source
        # Parsers are not thread-safe; each file gets its own
        parser = Parser(JAVA_LANGUAGE)
        data = source.encode("utf-8")
        self.tree = parser.parse(data)
        self._lines = data.split(b"\n")
        self.root = self.tree.root_node
        if self.root.has_error:
            log.warning("%s: syntax errors, checking what could be parsed", path)

        self.package: str | None = None
        self.imports: dict[str, str] = {}
        self.on_demand_imports: list[str] = []
        self._read_header()

    def _read_header(self) -> None:
        for child in self.root.children:
            if child.type == "package_declaration":
                name = _child_of_type(child, "scoped_identifier", "identifier")
                if name is not None:
                    self.package = _text(name)
            elif child.type == "import_declaration":
                if _child_of_type(child, "static") is not None:
                    continue
                name = _child_of_type(child, "scoped_identifier", "identifier")
                if name is None:
                    continue
                path = _text(name)
                if _child_of_type(child, "asterisk") is not None:
                    self.on_demand_imports.append(path)
                else:
                    self.imports[path.rsplit(".", 1)[-1]] = path

    def _position(self, node: Node) -> tuple[int, int]:
        """1-based line and character column (tree-sitter counts bytes)."""
        row, byte_column = node.start_point
        prefix = self._lines[row][:byte_column] if row < len(self._lines) else b""
        return row + 1, len(prefix.decode("utf-8", errors="replace")) + 1

    def _javadoc_before(self, node: Node) -> CommentBlock | None:
        """The /** */ comment directly before a declaration, skipping // comments."""
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "line_comment":
            sibling = sibling.prev_sibling
        if sibling is None or sibling.type not in _BLOCK_COMMENTS:
            return None

        text = _text(sibling)
        if not text.startswith("/**") or text == "/**/":
            return None
        line, column = self._position(sibling)
        return CommentBlock.from_text(text, line, column)

    def _context(self, enclosing: tuple[str, ...]) -> ResolutionContext:
        return ResolutionContext(
            package=self.package,
            imports=dict(self.imports),
            on_demand_imports=tuple(self.on_demand_imports),
            enclosing_types=enclosing,
        )

    def _qualify(self, name: str, enclosing: tuple[str, ...]) -> str:
        if enclosing:
            return f"{enclosing[-1]}.{name}"
        return f"{self.package}.{name}" if self.package else name

    def _walk(
        self, node: Node, enclosing: tuple[str, ...]
    ) -> Iterator[tuple[Node, tuple[str, ...]]]:
        """Yield (node, enclosing type chain) for every node, depth first."""
        stack = [(node, enclosing)]
        while stack:
            current, types = stack.pop()
            yield current, types
            if current.type in _TYPE_DECLARATIONS:
                name = current.child_by_field_name("name")
                if name is not None:
                    types = (*types, self._qualify(_text(name), types))
            stack.extend((child, types) for child in reversed(current.children))

    def declarations(self) -> Iterator[Declaration]:
        """Every method and constructor, in source order."""
        for node, enclosing in self._walk(self.root, ()):
            if node.type in _METHOD_DECLARATIONS:
                signature = self._signature(node, enclosing)
                if signature is not None:
                    yield Declaration(signature, self._javadoc_before(node))

    def declared_types(self) -> list[DeclaredType]:
        """Every type declared in the file, with its extends clause."""
        types = []
        for node, enclosing in self._walk(self.root, ()):
            if node.type not in _TYPE_DECLARATIONS:
                continue
            name = node.child_by_field_name("name")
            if name is None:
                continue
            superclass = None
            extends = node.child_by_field_name("superclass")
            if extends is not None and extends.named_children:
                superclass = _type_name(extends.named_children[-1])
            types.append(
                DeclaredType(
                    self._qualify(_text(name), enclosing),
                    superclass,
                    self._context(enclosing),
                )
            )
        return types

    def resolver(self, base: HierarchyResolver) -> HierarchyResolver:
        """Extend `base` with the classes declared in this file."""
        declared = self.declared_types()
        known = base.with_classes({t.name: None for t in declared})
        table: dict[str, str | None] = {}
        for declared_type in declared:
            if declared_type.superclass is None:
                table[declared_type.name] = None
                continue
            info = known.resolve(declared_type.superclass, declared_type.context)
            table[declared_type.name] = (
                info.name if info is not None else declared_type.superclass
            )
        return base.with_classes(table)

    def _signature(
        self, node: Node, enclosing: tuple[str, ...]
    ) -> MethodSignature | None:
        name = node.child_by_field_name("name")
        if name is None:
            return None
        line, column = self._position(node)
        is_constructor = node.type != "method_declaration"

        modifiers = _child_of_type(node, "modifiers")
        keywords: set[str] = set()
        annotations: list[str] = []
        if modifiers is not None:
            for child in modifiers.children:
                if child.type in ("marker_annotation", "annotation"):
                    annotation = child.child_by_field_name("name")
                    if annotation is not None:
                        annotations.append(_text(annotation).rsplit(".", 1)[-1])
                else:
                    keywords.add(child.type)

        parent = node.parent
        in_interface = parent is not None and parent.type in _INTERFACE_BODIES
        if "private" in keywords:
            visibility = "private"
        elif "public" in keywords or in_interface:
            visibility = "public"
        elif "protected" in keywords:
            visibility = "protected"
        else:
            visibility = "package"

        returns_value = False
        if not is_constructor:
            result_type = node.child_by_field_name("type")
            returns_value = result_type is not None and result_type.type != "void_type"

        body = node.child_by_field_name("body")
        body_lines = 0
        if body is not None:
            body_lines = max(0, body.end_point[0] - body.start_point[0] - 1)

        return MethodSignature(
            name=_text(name),
            line=line,
            column=column,
            parameters=tuple(self._parameters(node)),
            type_parameters=tuple(self._type_parameters(node)),
            exceptions=tuple(self._exceptions(node)),
            returns_value=returns_value,
            is_constructor=is_constructor,
            visibility=visibility,
            is_static="static" in keywords,
            annotations=tuple(annotations),
            body_line_count=body_lines,
            context=self._context(enclosing),
        )

    def _parameters(self, node: Node) -> Iterator[ParameterDecl]:
        params = node.child_by_field_name("parameters")
        if params is None:
            return
        for param in params.named_children:
            if param.type == "formal_parameter":
                name = param.child_by_field_name("name")
            elif param.type == "spread_parameter":
                declarator = _child_of_type(param, "variable_declarator")
                if declarator is not None:
                    name = declarator.child_by_field_name("name")
                else:
                    name = _child_of_type(param, "identifier")
            else:
                # receiver parameters ("Foo this") are not documented
                continue
            if name is not None:
                yield ParameterDecl(_text(name), False, *self._position(name))

    def _type_parameters(self, node: Node) -> Iterator[ParameterDecl]:
        type_params = _child_of_type(node, "type_parameters")
        if type_params is None:
            return
        for param in type_params.named_children:
            if param.type != "type_parameter":
                continue
            name = _child_of_type(param, "type_identifier", "identifier")
            if name is not None:
                yield ParameterDecl(_text(name), True, *self._position(name))

    def _exceptions(self, node: Node) -> Iterator[TypeRef]:
        throws = _child_of_type(node, "throws")
        if throws is None:
            return
        for thrown in throws.named_children:
            if thrown.type in ("marker_annotation", "annotation"):
                continue
            yield TypeRef(_type_name(thrown), *self._position(thrown))


def parse_java(source: str, path: str = "<source>") -> JavaFile:
    """Parse Java source text."""
    return JavaFile(source, path)


def load_java(path: str | Path) -> JavaFile:
    """Read and parse a Java file.

    Raises:
        SourceParseError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceParseError(f"Cannot read source file: {e}", str(path)) from e
    return JavaFile(source, str(path))
