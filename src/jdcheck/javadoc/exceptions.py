"""Matching documented exceptions against declared ones.

There is no whole-program class loader here. Class relationships come from
a name table: the standard Java throwables, anything added through
configuration, and the classes declared in the file being checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Protocol

from jdcheck.base import ResolutionError
from jdcheck.javadoc.models import ExceptionDecl, ResolutionContext

__all__ = [
    "ClassInfo",
    "ExceptionResolver",
    "HierarchyResolver",
    "STANDARD_THROWABLES",
    "is_unchecked_quietly",
    "match_exception",
    "resolve_quietly",
    "simple_name",
]

log = logging.getLogger(__name__)

RUNTIME_EXCEPTION = "java.lang.RuntimeException"
ERROR = "java.lang.Error"

# Qualified name -> qualified superclass
STANDARD_THROWABLES: dict[str, str | None] = {
    "java.lang.Throwable": None,
    "java.lang.Exception": "java.lang.Throwable",
    "java.lang.Error": "java.lang.Throwable",
    "java.lang.RuntimeException": "java.lang.Exception",
    "java.lang.ArithmeticException": RUNTIME_EXCEPTION,
    "java.lang.ArrayStoreException": RUNTIME_EXCEPTION,
    "java.lang.ClassCastException": RUNTIME_EXCEPTION,
    "java.lang.IllegalArgumentException": RUNTIME_EXCEPTION,
    "java.lang.IllegalStateException": RUNTIME_EXCEPTION,
    "java.lang.IndexOutOfBoundsException": RUNTIME_EXCEPTION,
    "java.lang.NegativeArraySizeException": RUNTIME_EXCEPTION,
    "java.lang.NullPointerException": RUNTIME_EXCEPTION,
    "java.lang.SecurityException": RUNTIME_EXCEPTION,
    "java.lang.UnsupportedOperationException": RUNTIME_EXCEPTION,
    "java.lang.ArrayIndexOutOfBoundsException": "java.lang.IndexOutOfBoundsException",
    "java.lang.StringIndexOutOfBoundsException": "java.lang.IndexOutOfBoundsException",
    "java.lang.NumberFormatException": "java.lang.IllegalArgumentException",
    "java.lang.CloneNotSupportedException": "java.lang.Exception",
    "java.lang.InterruptedException": "java.lang.Exception",
    "java.lang.ReflectiveOperationException": "java.lang.Exception",
    "java.lang.ClassNotFoundException": "java.lang.ReflectiveOperationException",
    "java.lang.NoSuchMethodException": "java.lang.ReflectiveOperationException",
    "java.lang.NoSuchFieldException": "java.lang.ReflectiveOperationException",
    "java.lang.InstantiationException": "java.lang.ReflectiveOperationException",
    "java.lang.IllegalAccessException": "java.lang.ReflectiveOperationException",
    "java.lang.AssertionError": ERROR,
    "java.lang.LinkageError": ERROR,
    "java.lang.VirtualMachineError": ERROR,
    "java.lang.OutOfMemoryError": "java.lang.VirtualMachineError",
    "java.lang.StackOverflowError": "java.lang.VirtualMachineError",
    "java.io.IOException": "java.lang.Exception",
    "java.io.EOFException": "java.io.IOException",
    "java.io.FileNotFoundException": "java.io.IOException",
    "java.io.UnsupportedEncodingException": "java.io.IOException",
    "java.io.UncheckedIOException": RUNTIME_EXCEPTION,
    "java.util.ConcurrentModificationException": RUNTIME_EXCEPTION,
    "java.util.EmptyStackException": RUNTIME_EXCEPTION,
    "java.util.NoSuchElementException": RUNTIME_EXCEPTION,
    "java.util.InputMismatchException": "java.util.NoSuchElementException",
    "java.util.concurrent.ExecutionException": "java.lang.Exception",
    "java.util.concurrent.TimeoutException": "java.lang.Exception",
    "java.util.concurrent.CancellationException": "java.lang.IllegalStateException",
}


def simple_name(name: str) -> str:
    """Last segment of a dotted name."""
    return name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ClassInfo:
    """A class known to a resolver."""

    name: str  # Qualified name
    superclass: str | None = None


class ExceptionResolver(Protocol):
    """Class lookups needed to check @throws tags."""

    def resolve(self, name: str, context: ResolutionContext | None) -> ClassInfo | None:
        ...

    def is_subtype(self, sub: ClassInfo, sup: ClassInfo) -> bool:
        ...

    def is_unchecked(self, info: ClassInfo) -> bool:
        ...


class HierarchyResolver:
    """Resolver backed by a table of qualified name -> superclass.

    Example:
        resolver = HierarchyResolver({"org.acme.BadInput": "java.lang.IllegalArgumentException"})
        info = resolver.resolve("BadInput", ResolutionContext(package="org.acme"))
        resolver.is_unchecked(info)  # True
    """

    def __init__(self, hierarchy: Mapping[str, str | None] | None = None):
        self._classes: dict[str, str | None] = dict(STANDARD_THROWABLES)
        if hierarchy:
            self._classes.update(hierarchy)

    def with_classes(self, hierarchy: Mapping[str, str | None]) -> HierarchyResolver:
        """Return a new resolver that also knows the given classes."""
        resolver = HierarchyResolver()
        resolver._classes = {**self._classes, **hierarchy}
        return resolver

    def _candidates(self, name: str, context: ResolutionContext | None) -> Iterable[str]:
        if context is None:
            yield name
            yield f"java.lang.{name}"
            return

        head, _, tail = name.partition(".")
        # Member types of the enclosing types, innermost first
        for enclosing in reversed(context.enclosing_types):
            yield f"{enclosing}.{name}"
        if head in context.imports:
            imported = context.imports[head]
            yield f"{imported}.{tail}" if tail else imported
        if context.package:
            yield f"{context.package}.{name}"
        yield name
        for package in context.on_demand_imports:
            yield f"{package}.{name}"
        yield f"java.lang.{name}"

    def resolve(self, name: str, context: ResolutionContext | None) -> ClassInfo | None:
        for candidate in self._candidates(name, context):
            if candidate in self._classes:
                return ClassInfo(candidate, self._classes[candidate])
        return None

    def is_subtype(self, sub: ClassInfo, sup: ClassInfo) -> bool:
        """True if `sub` is `sup` or extends it, directly or not."""
        seen: set[str] = set()
        current: str | None = sub.name
        while current is not None and current not in seen:
            if current == sup.name:
                return True
            seen.add(current)
            current = self._classes.get(current)
        return False

    def is_unchecked(self, info: ClassInfo) -> bool:
        return any(
            self.is_subtype(info, ClassInfo(root))
            for root in (RUNTIME_EXCEPTION, ERROR)
        )


def _names_match(
    documented: str,
    documented_info: ClassInfo | None,
    decl: ExceptionDecl,
) -> bool:
    if isinstance(documented_info, ClassInfo) and isinstance(decl.resolved, ClassInfo):
        return documented_info.name == decl.resolved.name
    if documented == decl.name:
        return True
    # "java.io.IOException" documents "IOException" and vice versa, but two
    # qualified names must agree in full
    if ("." in documented) != ("." in decl.name):
        return simple_name(documented) == simple_name(decl.name)
    return False


def resolve_quietly(
    resolver: ExceptionResolver,
    name: str,
    context: ResolutionContext | None,
) -> ClassInfo | None:
    """Resolve a name, treating resolver failures as "unknown class"."""
    try:
        return resolver.resolve(name, context)
    except ResolutionError as e:
        log.debug("Cannot resolve %s: %s", name, e)
        return None


def match_exception(
    documented: str,
    documented_info: ClassInfo | None,
    declared: Iterable[ExceptionDecl],
    resolver: ExceptionResolver,
) -> ExceptionDecl | None:
    """Find the declared exception a @throws tag refers to.

    A tag matches a declared exception that names the same class: the
    same resolved class when both sides resolve, otherwise the same text
    or a simple name against a qualified one. Failing that it matches one
    related to it by inheritance in either direction, preferring exceptions
    no earlier tag has matched.
    """
    declared = list(declared)
    for decl in declared:
        if _names_match(documented, documented_info, decl):
            return decl
    if documented_info is None:
        return None

    ordered = [d for d in declared if not d.found] + [d for d in declared if d.found]
    for decl in ordered:
        if isinstance(decl.resolved, ClassInfo):
            try:
                if resolver.is_subtype(documented_info, decl.resolved) or (
                    resolver.is_subtype(decl.resolved, documented_info)
                ):
                    return decl
            except ResolutionError as e:
                log.debug("Hierarchy lookup failed for %s: %s", documented, e)
    return None


def is_unchecked_quietly(resolver: ExceptionResolver, info: ClassInfo) -> bool:
    """Unchecked test that treats resolver failures as "checked"."""
    try:
        return resolver.is_unchecked(info)
    except ResolutionError as e:
        log.debug("Cannot classify %s: %s", info.name, e)
        return False
