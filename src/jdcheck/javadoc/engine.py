"""Verification of a method's Javadoc against its signature.

The engine reconciles the tags of one comment with one declaration and
reports every mismatch. It keeps no state between declarations, so a single
engine can be shared by worker threads.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from jdcheck.config.settings import CheckSettings
from jdcheck.javadoc.exceptions import (
    ClassInfo,
    ExceptionResolver,
    HierarchyResolver,
    is_unchecked_quietly,
    match_exception,
    resolve_quietly,
)
from jdcheck.javadoc.models import (
    CommentBlock,
    Diagnostic,
    DiagnosticKind,
    ExceptionDecl,
    MethodSignature,
    ParameterDecl,
    Tag,
    TagKind,
)
from jdcheck.javadoc.narrative import NarrativeScanner
from jdcheck.javadoc.tags import extract_tags

__all__ = ["VerificationEngine"]

log = logging.getLogger(__name__)

# Kinds the final sweep never reports
_SWEEP_EXEMPT = frozenset({TagKind.SEE_OR_OTHER, TagKind.INHERIT_DOC})


class _TagPool:
    """Tags of one comment, bucketed by kind before anything is consumed.

    Tags are taken out of their bucket when matched or reported; the
    buckets keep comment order.
    """

    def __init__(self, tags: list[Tag], settings: CheckSettings):
        self._order = {id(tag): i for i, tag in enumerate(tags)}
        self._buckets: dict[TagKind, list[Tag]] = defaultdict(list)
        for tag in tags:
            if (
                tag.kind is TagKind.PARAM
                and tag.first_arg is not None
                and settings.is_unused_param(tag.first_arg)
            ):
                continue
            self._buckets[tag.kind].append(tag)

    def take_param(self, tag_name: str) -> Tag | None:
        """Remove and return the first @param tag naming `tag_name`."""
        bucket = self._buckets[TagKind.PARAM]
        for i, tag in enumerate(bucket):
            if tag.first_arg == tag_name:
                return bucket.pop(i)
        return None

    def take_all(self, kind: TagKind) -> list[Tag]:
        """Remove and return every remaining tag of a kind."""
        return self._buckets.pop(kind, [])

    def remaining(self) -> list[Tag]:
        """Everything not yet taken, in comment order."""
        tags = [tag for bucket in self._buckets.values() for tag in bucket]
        return sorted(tags, key=lambda tag: self._order[id(tag)])


class VerificationEngine:
    """Checks that a Javadoc comment documents a method's signature.

    Example:
        engine = VerificationEngine(CheckSettings(allowNarrativeParamTags=True))
        for diagnostic in engine.verify(signature, comment):
            print(diagnostic.line, format_message(diagnostic))

    Args:
        settings: Check options (shared, read-only)
        resolver: Exception class lookups for @throws checking
        narrative: Detector for parameters/returns described in prose
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        resolver: ExceptionResolver | None = None,
        narrative: NarrativeScanner | None = None,
    ):
        self.settings = settings or CheckSettings()
        self.resolver = resolver or HierarchyResolver(self.settings.exception_hierarchy)
        self.narrative = narrative or NarrativeScanner()

    def verify(
        self,
        signature: MethodSignature,
        comment: CommentBlock | None,
        resolver: ExceptionResolver | None = None,
    ) -> list[Diagnostic]:
        """Verify one declaration.

        Args:
            signature: The declaration as seen by the host parser
            comment: Its Javadoc comment, or None if it has none
            resolver: Overrides the engine's resolver for this call

        Returns:
            Diagnostics in reporting order (see module docs)
        """
        if not self.settings.in_scope(signature.visibility):
            return []

        if comment is None:
            if self._missing_javadoc_allowed(signature):
                return []
            return [
                Diagnostic(
                    DiagnosticKind.MISSING_JAVADOC, signature.line, signature.column
                )
            ]

        tags = extract_tags(comment)
        diagnostics: list[Diagnostic] = []

        # A lone {@inheritDoc} stands for the whole comment
        if len(tags) == 1 and tags[0].kind is TagKind.INHERIT_DOC:
            if not signature.inherit_doc_allowed:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.INVALID_INHERIT_DOC, tags[0].line, tags[0].column
                    )
                )
            return diagnostics

        inherited = any(tag.kind is TagKind.INHERIT_DOC for tag in tags)
        pool = _TagPool(tags, self.settings)

        self._check_params(signature, comment, pool, inherited, diagnostics)
        self._check_return(signature, comment, pool, inherited, diagnostics)
        self._check_throws(
            signature, pool, inherited, resolver or self.resolver, diagnostics
        )

        for tag in pool.remaining():
            if tag.kind not in _SWEEP_EXEMPT:
                diagnostics.append(_unused(tag))

        return diagnostics

    def _missing_javadoc_allowed(self, signature: MethodSignature) -> bool:
        settings = self.settings
        if settings.allow_missing_javadoc:
            return True
        if 0 <= settings.min_line_count and signature.body_line_count < (
            settings.min_line_count
        ):
            return True
        if settings.ignore_method_names_regex is not None and (
            settings.ignore_method_names_regex.fullmatch(signature.name)
        ):
            return True
        return any(a in settings.allowed_annotations for a in signature.annotations)

    def _documented_parameters(self, signature: MethodSignature) -> list[ParameterDecl]:
        return [
            param
            for param in (*signature.parameters, *signature.type_parameters)
            if not self.settings.is_unused_param(param.name)
        ]

    def _check_params(
        self,
        signature: MethodSignature,
        comment: CommentBlock,
        pool: _TagPool,
        inherited: bool,
        diagnostics: list[Diagnostic],
    ) -> None:
        params = self._documented_parameters(signature)
        narrated: set[str] | None = None
        tag_found = narrative_found = False

        for param in params:
            if pool.take_param(param.tag_name) is not None:
                tag_found = True
                continue

            if self.settings.allow_narrative_param_tags:
                if narrated is None:
                    narrated = self.narrative.mentioned_parameters(comment, params)
                if param.tag_name in narrated:
                    narrative_found = True
                    continue

            if not self.settings.allow_missing_param_tags and not inherited:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.EXPECTED_PARAM_TAG,
                        param.line or signature.line,
                        param.column or signature.column,
                        ("@param", param.tag_name),
                    )
                )

        if tag_found and narrative_found:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.MIXED_DOCUMENTATION_STYLE,
                    comment.start_line,
                    comment.start_column,
                )
            )

        for tag in pool.take_all(TagKind.PARAM):
            diagnostics.append(_unused(tag))

    def _check_return(
        self,
        signature: MethodSignature,
        comment: CommentBlock,
        pool: _TagPool,
        inherited: bool,
        diagnostics: list[Diagnostic],
    ) -> None:
        # @return on a void method or constructor is left for the final sweep
        if not signature.returns_value:
            return

        returns = pool.take_all(TagKind.RETURN)
        for duplicate in returns[1:]:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.DUPLICATE_TAG,
                    duplicate.line,
                    duplicate.column,
                    ("@return",),
                )
            )

        if returns or self.settings.allow_missing_return_tag or inherited:
            return
        if self.settings.allow_narrative_return_tags and (
            self.narrative.mentions_return(comment)
        ):
            return
        diagnostics.append(
            Diagnostic(DiagnosticKind.EXPECTED_RETURN_TAG, signature.line, signature.column)
        )

    def _declared_exceptions(
        self, signature: MethodSignature, resolver: ExceptionResolver
    ) -> list[ExceptionDecl]:
        declared = []
        for ref in signature.exceptions:
            info = resolve_quietly(resolver, ref.name, signature.context)
            declared.append(
                ExceptionDecl(
                    name=ref.name,
                    resolved=info,
                    line=ref.line,
                    column=ref.column,
                )
            )
        return declared

    def _check_throws(
        self,
        signature: MethodSignature,
        pool: _TagPool,
        inherited: bool,
        resolver: ExceptionResolver,
        diagnostics: list[Diagnostic],
    ) -> None:
        declared = self._declared_exceptions(signature, resolver)

        for tag in pool.take_all(TagKind.THROWS):
            documented = tag.first_arg or ""
            info = resolve_quietly(resolver, documented, signature.context)
            match = match_exception(documented, info, declared, resolver)
            if match is not None:
                match.found = True
                continue

            if (
                self.settings.allow_undeclared_rte
                and isinstance(info, ClassInfo)
                and is_unchecked_quietly(resolver, info)
            ):
                log.debug("Undeclared unchecked exception %s documented", documented)
                continue
            diagnostics.append(_unused(tag))

        if self.settings.allow_missing_throws_tags or inherited:
            return
        for decl in declared:
            if decl.found:
                continue
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.EXPECTED_THROWS_TAG,
                    decl.line or signature.line,
                    decl.column or signature.column,
                    ("@throws", decl.name),
                )
            )


def _unused(tag: Tag) -> Diagnostic:
    args: tuple[str, ...] = (f"@{tag.name}",)
    if tag.first_arg is not None:
        args += (tag.first_arg,)
    return Diagnostic(DiagnosticKind.UNUSED_TAG, tag.line, tag.column, args)
