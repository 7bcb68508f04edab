#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the abbreviation parser."""

import pytest

from abbr2markup.ast.visitors import AbbreviationFormatter
from abbr2markup.constants import MAX_NESTING_DEPTH
from abbr2markup.exceptions import AbbreviationLexError, AbbreviationSyntaxError, LimitExceededError
from abbr2markup.parsers.abbreviation import AbbreviationParser, parse_abbreviation


def _tags(nodes):
    return [node.tag_name for node in nodes]


@pytest.mark.unit
class TestElements:
    """Tests for parsing single elements."""

    def test_modifiers_in_any_order(self) -> None:
        """Test that modifiers after the tag may come in any order."""
        first = parse_abbreviation("a*2{Go}[href=x].btn#main")[0]
        second = parse_abbreviation("a#main.btn[href=x]{Go}*2")[0]

        assert first == second
        assert first.tag_name == "a"
        assert first.id == "main"
        assert first.classes == ["btn"]
        assert first.attributes == {"href": "x"}
        assert first.text == "Go"
        assert first.multiplier == 2

    def test_implicit_tag(self) -> None:
        """Test that an element without a tag name keeps tag_name None."""
        node = parse_abbreviation(".item")[0]

        assert node.tag_name is None
        assert node.classes == ["item"]

    def test_bare_multiplier_is_element(self) -> None:
        """Test that '*3' alone is an implicit element repeated three times."""
        node = parse_abbreviation("*3")[0]

        assert node.tag_name is None
        assert node.multiplier == 3

    def test_class_attribute_folds_into_classes(self) -> None:
        """Test that a class attribute is appended after class literals."""
        node = parse_abbreviation('div.a[class="b c" title=t]')[0]

        assert node.classes == ["a", "b", "c"]
        assert node.attributes == {"title": "t"}

    def test_id_attribute_becomes_id(self) -> None:
        """Test that an id attribute sets the element id."""
        node = parse_abbreviation("div[id=main]")[0]

        assert node.id == "main"
        assert node.attributes == {}

    def test_id_given_twice(self) -> None:
        """Test that '#id' together with an id attribute is a syntax error."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div#a[id=b]")
        assert exc_info.value.position == 5

    def test_last_duplicate_attribute_wins(self) -> None:
        """Test that a repeated attribute name keeps its last value."""
        node = parse_abbreviation("a[x=1 y=2 x=3]")[0]

        assert node.attributes == {"x": "3", "y": "2"}

    def test_source_location(self) -> None:
        """Test that elements record their offset and length."""
        nodes = parse_abbreviation("ul>li.x*2")

        assert nodes[0].source_location.offset == 0
        assert nodes[0].source_location.length == 2
        assert nodes[0].children[0].source_location.offset == 3
        assert nodes[0].children[0].source_location.length == 6


@pytest.mark.unit
class TestOperators:
    """Tests for '>', '+' and '^'."""

    def test_child_operator(self) -> None:
        """Test that '>' nests each item under the previous one."""
        nodes = parse_abbreviation("div>ul>li")

        assert _tags(nodes) == ["div"]
        assert _tags(nodes[0].children) == ["ul"]
        assert _tags(nodes[0].children[0].children) == ["li"]

    def test_sibling_operator(self) -> None:
        """Test that '+' appends to the current level."""
        nodes = parse_abbreviation("div>p+span+em")

        assert _tags(nodes[0].children) == ["p", "span", "em"]

    def test_climb_one_level(self) -> None:
        """Test that 'div>p^span' makes span a sibling of div."""
        nodes = parse_abbreviation("div>p^span")

        assert _tags(nodes) == ["div", "span"]
        assert _tags(nodes[0].children) == ["p"]

    def test_climb_several_levels(self) -> None:
        """Test that each '^' closes one level."""
        nodes = parse_abbreviation("a>b>c>d^^e")

        assert _tags(nodes[0].children) == ["b", "e"]
        assert _tags(nodes[0].children[0].children) == ["c"]

    def test_climb_above_root(self) -> None:
        """Test that 'div^^' is a syntax error at the first '^'."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div^^")
        assert exc_info.value.position == 3

    def test_climb_past_root_after_nesting(self) -> None:
        """Test that the error points at the '^' that leaves the root."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div>p^^span")
        assert exc_info.value.position == 6

    def test_operator_at_start(self) -> None:
        """Test that an abbreviation cannot start with an operator."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation(">div")
        assert exc_info.value.position == 0

    def test_trailing_operator(self) -> None:
        """Test that an operator must be followed by an item."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div+")
        assert exc_info.value.position == 4
        assert exc_info.value.found == "end of input"

    def test_empty_abbreviation(self) -> None:
        """Test that empty input is a syntax error at offset 0."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("")
        assert exc_info.value.position == 0


@pytest.mark.unit
class TestGroups:
    """Tests for parenthesized groups."""

    def test_group_with_multiplier(self) -> None:
        """Test that a group keeps its members and multiplier."""
        node = parse_abbreviation("(dt+dd)*2")[0]

        assert node.is_group
        assert node.multiplier == 2
        assert _tags(node.children) == ["dt", "dd"]

    def test_sibling_after_group(self) -> None:
        """Test that '+' after a group continues at the group's level."""
        nodes = parse_abbreviation("ul>(li>a)+li")

        assert len(nodes[0].children) == 2
        assert nodes[0].children[0].is_group
        assert nodes[0].children[1].tag_name == "li"

    def test_child_after_group_extends_contents(self) -> None:
        """Test that '>' after a group adds an item to the group's contents."""
        node = parse_abbreviation("(div)>p")[0]

        assert node.is_group
        assert _tags(node.children) == ["div", "p"]

    def test_nested_groups(self) -> None:
        """Test groups inside groups."""
        node = parse_abbreviation("((a+b)*2+c)*3")[0]

        assert node.multiplier == 3
        assert node.children[0].is_group
        assert node.children[0].multiplier == 2
        assert node.children[1].tag_name == "c"

    def test_climb_inside_group_cannot_leave_group(self) -> None:
        """Test that '^' cannot climb out of the enclosing group."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div>(p^span)")
        assert exc_info.value.position == 6

    def test_unmatched_close(self) -> None:
        """Test that ')abc' is a syntax error at offset 0."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation(")abc")
        assert exc_info.value.position == 0

    def test_unmatched_close_after_element(self) -> None:
        """Test that a stray ')' after an element is reported at the ')'."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("div)")
        assert exc_info.value.position == 3

    def test_unclosed_group(self) -> None:
        """Test that a missing ')' is reported at the '('."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("ul>(li>a")
        assert exc_info.value.position == 3

    def test_empty_group(self) -> None:
        """Test that '()' is a syntax error at the ')'."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("()")
        assert exc_info.value.position == 1

    def test_group_rejects_class(self) -> None:
        """Test that a group accepts only a multiplier."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("(a).x")
        assert exc_info.value.position == 3

    def test_group_duplicate_multiplier(self) -> None:
        """Test that a group rejects a second multiplier."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("(a)*2*3")
        assert exc_info.value.position == 5


@pytest.mark.unit
class TestModifierValidation:
    """Tests for duplicate and misplaced modifiers."""

    @pytest.mark.parametrize(
        "text,position",
        [
            ("p{a}{b}", 4),
            ("li*2*3", 4),
            ("a[x][y]", 4),
        ],
    )
    def test_duplicate_modifier(self, text, position) -> None:
        """Test that a second modifier of the same kind is rejected."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation(text)
        assert exc_info.value.position == position
        assert "Duplicate" in exc_info.value.message

    def test_duplicate_id_caught_by_lexer(self) -> None:
        """Test that a second '#id' fails before parsing."""
        with pytest.raises(AbbreviationLexError):
            parse_abbreviation("p#a#b")

    def test_repeated_classes_allowed(self) -> None:
        """Test that class literals may repeat."""
        assert parse_abbreviation("p.a.b.a")[0].classes == ["a", "b", "a"]

    def test_tag_after_modifier(self) -> None:
        """Test that a tag name after a text block is a syntax error."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("{x}span")
        assert exc_info.value.position == 3


@pytest.mark.unit
class TestNumberingModifiers:
    """Tests for '$@' numbering modifiers."""

    def test_reverse(self) -> None:
        """Test that '$@-' counts down and is removed from the template."""
        node = parse_abbreviation("li.item$@-*3")[0]

        assert node.classes == ["item$"]
        assert node.numbering_reversed is True
        assert node.numbering_start == 1

    def test_start_and_step(self) -> None:
        """Test '$$@10:5'."""
        node = parse_abbreviation("li.x$$@10:5*2")[0]

        assert node.classes == ["x$$"]
        assert node.numbering_start == 10
        assert node.numbering_step == 5

    def test_modifier_in_text(self) -> None:
        """Test a numbering modifier inside a text block."""
        node = parse_abbreviation("li{Item $@3}*2")[0]

        assert node.text == "Item $"
        assert node.numbering_start == 3

    def test_same_modifier_twice_is_fine(self) -> None:
        """Test that repeating an identical modifier is accepted."""
        node = parse_abbreviation("li.a$@2[title=t$@2]*2")[0]

        assert node.attributes == {"title": "t$"}
        assert node.numbering_start == 2

    def test_conflicting_modifiers(self) -> None:
        """Test that two different modifiers on one element are rejected."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("ul>li.a$@2.b$@3*2")
        assert exc_info.value.position == 12

    def test_conflicting_modifier_in_attribute(self) -> None:
        """Test that a conflict inside an attribute value is reported there."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("li.a$@2[title=t$@-]*2")
        assert exc_info.value.position == 15

    def test_conflicting_modifier_in_text(self) -> None:
        """Test that a conflict in the text block is reported at the text."""
        with pytest.raises(AbbreviationSyntaxError) as exc_info:
            parse_abbreviation("li#x$@3{n $@4}*2")
        assert exc_info.value.position == 10

    def test_repeated_identical_modifier(self) -> None:
        """Test that the same modifier may appear in several templates."""
        (node,) = parse_abbreviation("li.a$@-[title=t$@-]*2")
        assert node.numbering_reversed is True
        assert node.classes == ["a$"]
        assert node.attributes == {"title": "t$"}


@pytest.mark.unit
class TestNestingDepth:
    """Tests for the nesting depth limit."""

    def test_chain_at_limit(self) -> None:
        """Test that a child chain exactly at the limit parses."""
        nodes = parse_abbreviation("div>" * (MAX_NESTING_DEPTH - 1) + "p")

        depth = 1
        node = nodes[0]
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == MAX_NESTING_DEPTH
        assert node.tag_name == "p"

    def test_chain_over_limit(self) -> None:
        """Test that the '>' opening one level too many is reported."""
        with pytest.raises(LimitExceededError) as exc_info:
            parse_abbreviation("div>" * MAX_NESTING_DEPTH + "p")

        assert exc_info.value.kind == "LimitExceeded"
        assert exc_info.value.position == 4 * MAX_NESTING_DEPTH - 1
        assert exc_info.value.limit == MAX_NESTING_DEPTH

    def test_nested_groups_over_limit(self) -> None:
        """Test that the '(' opening one level too many is reported."""
        depth = MAX_NESTING_DEPTH + 1
        with pytest.raises(LimitExceededError) as exc_info:
            parse_abbreviation("(" * depth + "a" + ")" * depth)

        assert exc_info.value.position == MAX_NESTING_DEPTH

    def test_nested_groups_at_limit(self) -> None:
        """Test that groups count one level each."""
        depth = MAX_NESTING_DEPTH - 1
        nodes = parse_abbreviation("(" * depth + "a" + ")" * depth)

        assert nodes[0].is_group

    def test_custom_limit(self) -> None:
        """Test a parser with a smaller depth limit."""
        parser = AbbreviationParser(max_depth=2)

        with pytest.raises(LimitExceededError) as exc_info:
            parser.parse("a>b>c")
        assert exc_info.value.position == 3

    def test_climb_frees_levels(self) -> None:
        """Test that '^' lowers the depth again."""
        nodes = AbbreviationParser(max_depth=2).parse("a>b^c>d^e>f")

        assert _tags(nodes) == ["a", "c", "e"]

    def test_child_of_group_counts_inside_group(self) -> None:
        """Test that '>' after a group nests inside the group's contents."""
        parser = AbbreviationParser(max_depth=2)

        assert _tags(parser.parse("(a)>b")[0].children) == ["a", "b"]
        with pytest.raises(LimitExceededError) as exc_info:
            parser.parse("(a)>b>c")
        assert exc_info.value.position == 5

    def test_group_in_deep_chain(self) -> None:
        """Test that a group at the deepest level is rejected at its '('."""
        with pytest.raises(LimitExceededError) as exc_info:
            AbbreviationParser(max_depth=2).parse("a>b>(c)")
        assert exc_info.value.position == 4


@pytest.mark.unit
class TestAbbreviationFormatter:
    """Tests for formatting parsed trees back to abbreviation text."""

    @pytest.mark.parametrize(
        "text",
        [
            "ul>li.a$*2",
            "div#main.a.b[title=x]{Hi}",
            "(dt+dd)*2",
            "ul>(li>a)*3",
            "table>tr*2>td*3",
            "li.item$@-*3",
            "li.x$$@10:5*4",
        ],
    )
    def test_canonical_text(self, text) -> None:
        """Test that canonical abbreviations format to themselves."""
        assert AbbreviationFormatter().format(parse_abbreviation(text)) == text

    def test_climb_is_normalized(self) -> None:
        """Test that '^' is written as a sibling at the outer level."""
        assert AbbreviationFormatter().format(parse_abbreviation("div>p^span")) == "(div>p)+span"

    def test_multiple_children_grouped(self) -> None:
        """Test that several children are wrapped in a group."""
        assert AbbreviationFormatter().format(parse_abbreviation("div>p+span")) == "div>(p+span)"

    def test_parser_is_reusable(self) -> None:
        """Test that one parser instance can parse several abbreviations."""
        parser = AbbreviationParser()

        assert _tags(parser.parse("a+b")) == ["a", "b"]
        assert _tags(parser.parse("c")) == ["c"]
