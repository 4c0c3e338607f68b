"""Tests for Javadoc tag extraction."""

from jdcheck.javadoc import CommentBlock, TagKind, extract_tags
from tests.javadoc.helpers import comment


class TestBlockTags:
    """Block tags at the start of comment lines."""

    def test_param_tag(self):
        """@param splits into name and description."""
        tags = extract_tags(comment("Adds.", "@param a the first addend"))
        assert len(tags) == 1
        tag = tags[0]
        assert tag.kind is TagKind.PARAM
        assert tag.name == "param"
        assert tag.first_arg == "a"
        assert tag.rest == "the first addend"

    def test_type_parameter_tag_keeps_brackets(self):
        """<T> is kept as the argument."""
        tags = extract_tags(comment("@param <T> element type"))
        assert tags[0].first_arg == "<T>"

    def test_return_tag_needs_no_argument(self):
        """A bare @return is a RETURN tag."""
        tags = extract_tags(comment("@return"))
        assert tags[0].kind is TagKind.RETURN
        assert tags[0].first_arg is None

    def test_return_description(self):
        """@return keeps the whole description."""
        tags = extract_tags(comment("@return the sum of A and B"))
        assert tags[0].rest == "the sum of A and B"

    def test_throws_and_exception_are_synonyms(self):
        """@exception is a THROWS tag."""
        tags = extract_tags(
            comment("@throws IOException if reading fails", "@exception Oops never")
        )
        assert [t.kind for t in tags] == [TagKind.THROWS, TagKind.THROWS]
        assert [t.name for t in tags] == ["throws", "exception"]
        assert [t.first_arg for t in tags] == ["IOException", "Oops"]

    def test_other_tags_are_kept(self):
        """Other block tags are SEE_OR_OTHER."""
        tags = extract_tags(comment("@see Object#equals", "@since 1.2", "@author Pat"))
        assert [t.kind for t in tags] == [TagKind.SEE_OR_OTHER] * 3
        assert [t.name for t in tags] == ["see", "since", "author"]

    def test_param_without_name_is_unknown(self):
        """A nameless @param is UNKNOWN."""
        tags = extract_tags(comment("@param"))
        assert tags[0].kind is TagKind.UNKNOWN
        assert tags[0].first_arg is None

    def test_comment_order(self):
        """Tags come back in comment order."""
        tags = extract_tags(
            comment("@param b second", "@return x", "@param a first", "@throws E e")
        )
        assert [t.first_arg for t in tags] == ["b", None, "a", "E"]

    def test_single_line_comment(self):
        """Tags on the /** line are found."""
        block = CommentBlock(("/** @param a first */",), 3, 5)
        tags = extract_tags(block)
        assert len(tags) == 1
        assert tags[0].first_arg == "a"
        assert tags[0].rest == "first"

    def test_closing_marker_is_not_a_description(self):
        """*/ is stripped from the description."""
        block = CommentBlock(("/**", " * @param x */"), 1, 1)
        tags = extract_tags(block)
        assert tags[0].first_arg == "x"
        assert tags[0].rest == ""

    def test_lines_without_star(self):
        """The leading * is optional."""
        block = CommentBlock(("/**", "   @param a first", "*/"), 1, 1)
        assert extract_tags(block)[0].first_arg == "a"


class TestNotTags:
    """Text that contains '@' without being a block tag."""

    def test_inline_tags_are_ignored(self):
        """{@code} and {@link} are not block tags."""
        tags = extract_tags(comment("Uses {@code x} and {@link Foo}."))
        assert tags == []

    def test_email_address_is_ignored(self):
        """An @ inside a word is not a tag."""
        tags = extract_tags(comment("Written by pat@example.com"))
        assert tags == []

    def test_tag_in_middle_of_line_is_ignored(self):
        """Block tags must start the line."""
        tags = extract_tags(comment("See the @param tags below."))
        assert tags == []

    def test_empty_comment(self):
        """/** */ has no tags."""
        assert extract_tags(CommentBlock(("/** */",), 1, 1)) == []


class TestInheritDoc:
    """{@inheritDoc} is recognised anywhere."""

    def test_lone_inherit_doc(self):
        """{@inheritDoc} is an INHERIT_DOC tag."""
        tags = extract_tags(comment("{@inheritDoc}"))
        assert [t.kind for t in tags] == [TagKind.INHERIT_DOC]

    def test_inner_whitespace(self):
        """Whitespace inside the braces is allowed."""
        tags = extract_tags(comment("{ @inheritDoc }"))
        assert [t.kind for t in tags] == [TagKind.INHERIT_DOC]

    def test_inside_a_tag_description(self):
        """It is found inside a block tag's text."""
        tags = extract_tags(comment("@return {@inheritDoc}"))
        assert [t.kind for t in tags] == [TagKind.RETURN, TagKind.INHERIT_DOC]


class TestPositions:
    """Tags carry the source position of their '@'."""

    def test_position_on_later_line(self):
        """Later lines count columns from the line start."""
        # Line 12 is " * @param a first": '@' is the 4th character
        tags = extract_tags(comment("Adds.", "@param a first", start_line=10))
        assert (tags[0].line, tags[0].column) == (12, 4)

    def test_position_on_first_line_is_offset_by_start_column(self):
        """The first line is offset by the comment column."""
        block = CommentBlock(("/** @return x */",), 7, 5)
        tag = extract_tags(block)[0]
        assert (tag.line, tag.column) == (7, 9)

    def test_inherit_doc_position(self):
        """{@inheritDoc} points at its @."""
        block = CommentBlock(("/**", " * {@inheritDoc}", " */"), 1, 1)
        tag = extract_tags(block)[0]
        assert (tag.line, tag.column) == (2, 5)
