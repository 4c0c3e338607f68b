"""Tag extraction from raw Javadoc comment lines."""

from __future__ import annotations

import re

from jdcheck.javadoc.models import CommentBlock, Tag, TagKind

# A block tag starts a comment line, after "/**" or the leading "*" and blanks
_BLOCK_TAG = re.compile(r"^\s*(?:/\*\*+|\*+(?!/))?\s*@([A-Za-z]\w*)\b")
_INHERIT_DOC = re.compile(r"\{\s*@(inheritDoc)\s*\}")
_COMMENT_END = re.compile(r"\s*\*+/\s*$")
_ARGUMENT = re.compile(r"\s+(\S+)\s*(.*)$")

_KINDS = {
    "param": TagKind.PARAM,
    "return": TagKind.RETURN,
    "throws": TagKind.THROWS,
    "exception": TagKind.THROWS,
}


def _block_tag(line: str) -> tuple[int, TagKind, str, str | None, str] | None:
    """Parse the block tag at the start of a line, if any.

    Returns (offset of "@", kind, tag name, first argument, description).
    """
    match = _BLOCK_TAG.match(line)
    if not match:
        return None

    name = match.group(1)
    kind = _KINDS.get(name, TagKind.SEE_OR_OTHER)
    remainder = _COMMENT_END.sub("", line[match.end() :])
    offset = match.start(1) - 1

    if kind in (TagKind.PARAM, TagKind.THROWS):
        arg = _ARGUMENT.match(remainder)
        if not arg:
            # @param or @throws with nothing to name
            return offset, TagKind.UNKNOWN, name, None, ""
        return offset, kind, name, arg.group(1), arg.group(2).strip()

    return offset, kind, name, None, remainder.strip()


def extract_tags(comment: CommentBlock) -> list[Tag]:
    """Extract block tags and {@inheritDoc} markers, in comment order.

    Example:
        comment = CommentBlock.from_text("/**\\n * @param a first\\n */")
        extract_tags(comment)[0].first_arg  # "a"
    """
    tags: list[Tag] = []

    for index, line in enumerate(comment.lines):
        found: list[tuple[int, Tag]] = []

        parsed = _block_tag(line)
        if parsed:
            offset, kind, name, first_arg, rest = parsed
            line_no, column = comment.position(index, offset)
            found.append(
                (offset, Tag(kind, name, line_no, column, first_arg, rest))
            )

        for match in _INHERIT_DOC.finditer(line):
            offset = match.start(1) - 1
            line_no, column = comment.position(index, offset)
            found.append(
                (offset, Tag(TagKind.INHERIT_DOC, "inheritDoc", line_no, column))
            )

        found.sort(key=lambda item: item[0])
        tags.extend(tag for _, tag in found)

    return tags
