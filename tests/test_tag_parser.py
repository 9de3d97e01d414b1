"""Tests for the tag rule parser."""

from hypothesis import given
from hypothesis import strategies as st

from schema_validator.tags import ParseConfig, TagRule, Tokenizer, TokenType, parse_tag, split_dive


def pairs(rules):
    return [(r.name, list(r.params)) for r in rules]


class TestTokenizer:
    """Test token splitting."""

    def test_token_types(self):
        tokens = Tokenizer(ParseConfig()).tokenize("min=5|max")
        assert [t.type for t in tokens] == [
            TokenType.TEXT,
            TokenType.EQ,
            TokenType.TEXT,
            TokenType.SEP,
            TokenType.TEXT,
        ]

    def test_empty(self):
        assert Tokenizer(ParseConfig()).tokenize("") == []


class TestParseTag:
    """Test the grammar and its disambiguation rule."""

    def test_rules_with_params(self):
        assert pairs(parse_tag("required|min=5,max=100")) == [
            ("required", []),
            ("min", ["5"]),
            ("max", ["100"]),
        ]

    def test_multiple_params(self):
        assert pairs(parse_tag("between=10,20")) == [("between", ["10", "20"])]

    def test_pipe_separated_rules(self):
        assert pairs(parse_tag("required|email|max_length=50")) == [
            ("required", []),
            ("email", []),
            ("max_length", ["50"]),
        ]

    def test_comma_separates_rules_outside_params(self):
        assert pairs(parse_tag("required,email")) == [("required", []), ("email", [])]

    def test_whitespace_is_trimmed(self):
        assert pairs(parse_tag(" required | min = 5 , max = 9 ")) == [
            ("required", []),
            ("min", ["5"]),
            ("max", ["9"]),
        ]

    def test_empty_params_are_dropped(self):
        assert pairs(parse_tag("between=1,,2")) == [("between", ["1", "2"])]

    def test_empty_tag(self):
        assert parse_tag("") == []
        assert parse_tag("||") == []

    def test_name_like_param_without_known_rules_starts_a_rule(self):
        assert pairs(parse_tag("oneof=red,green")) == [("oneof", ["red"]), ("green", [])]

    def test_known_rules_keep_params_together(self):
        rules = parse_tag("oneof=red,green,blue|required", known_rules={"oneof", "required"})
        assert pairs(rules) == [("oneof", ["red", "green", "blue"]), ("required", [])]

    def test_pipe_inside_params_is_literal(self):
        rules = parse_tag("pattern=^(a|b)$", known_rules={"pattern"})
        assert pairs(rules) == [("pattern", ["^(a|b)$"])]

    def test_dive_is_always_known(self):
        rules = parse_tag("max_items=3|dive|oneof=a,b", known_rules={"max_items", "oneof"})
        assert pairs(rules) == [("max_items", ["3"]), ("dive", []), ("oneof", ["a", "b"])]

    def test_custom_separators(self):
        config = ParseConfig(rule_splitter=";", name_param_separator=":", params_separator=" ")
        assert pairs(parse_tag("required;between:1 9", config)) == [
            ("required", []),
            ("between", ["1", "9"]),
        ]

    def test_tag_rule_str(self):
        assert str(TagRule("between", ("1", "2"))) == "between=1,2"
        assert str(TagRule("required")) == "required"


class TestSplitDive:
    """Test splitting array rules from element rules."""

    def test_no_dive(self):
        rules = parse_tag("required|min_items=1")
        assert split_dive(rules) == (rules, None)

    def test_dive(self):
        before, after = split_dive(parse_tag("min_items=1|dive|required|email"))
        assert pairs(before) == [("min_items", ["1"])]
        assert pairs(after) == [("required", []), ("email", [])]

    def test_nested_dive(self):
        before, after = split_dive(parse_tag("dive|max_items=2|dive|alpha"))
        assert before == []
        inner_before, inner_after = split_dive(after)
        assert pairs(inner_before) == [("max_items", ["2"])]
        assert pairs(inner_after) == [("alpha", [])]


names = st.from_regex(r"[a-z][a-z_]{0,8}", fullmatch=True)
numbers = st.integers(min_value=0, max_value=10_000).map(str)


class TestParseTagProperties:
    """Property-based tests for tag parsing."""

    @given(st.lists(st.tuples(names, st.lists(numbers, max_size=3)), min_size=1, max_size=5))
    def test_joined_rules_parse_back(self, spec):
        """Rules with numeric params survive a join/parse cycle."""
        tag = "|".join(
            f"{name}={','.join(params)}" if params else name for name, params in spec
        )
        assert pairs(parse_tag(tag)) == [(name, params) for name, params in spec]
