"""Tests for building paths from parameter maps."""

from __future__ import annotations

from urllib.parse import quote

import pytest

from pathpat.builder import compile, tokens_to_function
from pathpat.errors import BuildError
from pathpat.parser import parse


class TestScalars:
    def test_named_param(self):
        assert compile("/user/:id")({"id": "123"}) == "/user/123"

    def test_number_is_stringified(self):
        assert compile("/user/:id")({"id": 123}) == "/user/123"

    def test_integral_float_drops_fraction(self):
        assert compile("/:n")({"n": 1.0}) == "/1"

    def test_float_keeps_fraction(self):
        assert compile("/:n")({"n": 1.5}) == "/1.5"

    def test_literal_only(self):
        assert compile("/about")() == "/about"

    def test_positional_param(self):
        assert compile("/(\\d+)")({0: "42"}) == "/42"

    def test_suffix_is_appended(self):
        assert compile("{/:id.json}")({"id": "7"}) == "/7.json"

    def test_escaped_literal(self):
        assert compile("/\\:id/:id")({"id": "x"}) == "/:id/x"


class TestOptional:
    def test_missing_optional_emits_nothing(self):
        assert compile("/user/:id?")({}) == "/user"

    def test_none_params(self):
        assert compile("/user/:id?")(None) == "/user"

    def test_present_optional(self):
        assert compile("/user/:id?")({"id": "5"}) == "/user/5"

    def test_optional_group(self):
        fn = compile("/file{.:ext}?")
        assert fn({}) == "/file"
        assert fn({"ext": "txt"}) == "/file.txt"

    def test_literal_group_required(self):
        assert compile("/a{/list}")({}) == "/a/list"

    def test_literal_group_optional_is_omitted(self):
        assert compile("/a{/list}?")({}) == "/a"


class TestRepeat:
    def test_list_value(self):
        assert compile("/:segments+")({"segments": ["a", "b", "c"]}) == "/a/b/c"

    def test_tuple_value(self):
        assert compile("/:segments*")({"segments": ("a", "b")}) == "/a/b"

    def test_scalar_on_repeat_key(self):
        assert compile("/:segments+")({"segments": "a"}) == "/a"

    def test_empty_list_optional(self):
        assert compile("/base/:segments*")({"segments": []}) == "/base"

    def test_empty_list_required(self):
        with pytest.raises(BuildError, match='expected "segments" to not be empty'):
            compile("/:segments+")({"segments": []})

    def test_list_on_non_repeat_key(self):
        with pytest.raises(BuildError, match='expected "id" to not repeat, but got a list'):
            compile("/:id")({"id": ["a", "b"]})

    def test_every_element_validated(self):
        with pytest.raises(BuildError, match='expected all "ids" to match "\\\\d\\+", but got "x"'):
            compile("/:ids(\\d+)+")({"ids": ["1", "x"]})


class TestMissing:
    def test_required_missing(self):
        with pytest.raises(BuildError, match='expected "id" to be a string'):
            compile("/user/:id")({})

    def test_required_repeat_missing(self):
        with pytest.raises(BuildError, match='expected "segments" to be a list'):
            compile("/:segments+")({})

    def test_wrong_type_is_missing(self):
        with pytest.raises(BuildError) as exc_info:
            compile("/:id")({"id": {"nested": 1}})
        assert exc_info.value.name == "id"


class TestValidation:
    def test_digits_rejected(self):
        with pytest.raises(BuildError, match='expected "id" to match') as exc_info:
            compile("/user/:id(\\d+)")({"id": "abc"})
        assert exc_info.value.value == "abc"
        assert "abc" in str(exc_info.value)

    def test_must_match_whole_segment(self):
        with pytest.raises(BuildError):
            compile("/user/:id(\\d+)")({"id": "12a"})

    def test_default_pattern_rejects_delimiter(self):
        with pytest.raises(BuildError):
            compile("/user/:id")({"id": "a/b"})

    def test_validate_disabled(self):
        assert compile("/user/:id(\\d+)", validate=False)({"id": "abc"}) == "/user/abc"

    def test_case_insensitive_by_default(self):
        assert compile("/:code([a-z]+)")({"code": "ABC"}) == "/ABC"

    def test_sensitive(self):
        with pytest.raises(BuildError):
            compile("/:code([a-z]+)", sensitive=True)({"code": "ABC"})


class TestEncode:
    def test_encode_applied_before_validation(self):
        fn = compile("/search/:q", encode=lambda v: quote(v, safe=""))
        assert fn({"q": "a b/c"}) == "/search/a%20b%2Fc"

    def test_encode_each_element(self):
        fn = compile("/:parts+", encode=str.upper)
        assert fn({"parts": ["a", "b"]}) == "/A/B"


class TestTokensToFunction:
    def test_reusable(self):
        fn = tokens_to_function(parse("/:a/:b"))
        assert fn({"a": "1", "b": "2"}) == "/1/2"
        assert fn({"a": "3", "b": "4"}) == "/3/4"

    def test_hand_built_tokens(self):
        from pathpat.tokens import Key

        fn = tokens_to_function(["/v1", Key(name="id", prefix="/", pattern="\\d+")])
        assert fn({"id": 9}) == "/v1/9"
