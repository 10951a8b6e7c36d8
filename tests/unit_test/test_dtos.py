import json

import pytest
from pydantic import ValidationError

from node_map.dtos import FilterToken, MatcherFilters
from node_map.utils.enumerators import FilterAttribute


class TestFilterToken:

    def test_plain_token(self):
        token = FilterToken.parse("ubuntu")
        assert token == FilterToken(negated=False, value="ubuntu")
        assert str(token) == "ubuntu"

    def test_negated_token(self):
        token = FilterToken.parse("!windows")
        assert token.negated is True
        assert token.value == "windows"
        assert str(token) == "!windows"

    def test_wildcard_token(self):
        assert FilterToken.parse(":all").is_wildcard is True
        assert FilterToken.parse("!:all").is_wildcard is False

    def test_non_string_token_is_never_negated(self):
        token = FilterToken.parse(42)
        assert token.negated is False
        assert token.value == 42

    def test_parse_is_idempotent(self):
        token = FilterToken.parse("!x")
        assert FilterToken.parse(token) is token

    def test_frozen(self):
        token = FilterToken.parse("x")
        with pytest.raises(ValidationError):
            token.value = "y"


class TestMatcherFilters:

    def test_empty(self):
        filters = MatcherFilters()
        assert filters.supplied() == ()
        assert filters.to_json() == "{}"
        assert str(filters) == "{}"

    def test_scalar_is_normalized_to_tuple(self):
        filters = MatcherFilters(platform="ubuntu")
        assert filters.platform == (FilterToken(value="ubuntu"),)
        assert filters == MatcherFilters(platform=["ubuntu"])

    def test_versions_are_strings(self):
        filters = MatcherFilters(platform_version=[">= 14.04", 16.04])
        assert filters.platform_version == (">= 14.04", "16.04")

    def test_empty_list_is_present(self):
        filters = MatcherFilters(platform_version=[])
        assert filters.platform_version == ()
        assert filters.has(FilterAttribute.PLATFORM_VERSION) is True

    def test_supplied_in_evaluation_order(self):
        filters = MatcherFilters(platform_version="7", os="linux", platform="centos")
        assert filters.supplied() == (
            FilterAttribute.OS,
            FilterAttribute.PLATFORM,
            FilterAttribute.PLATFORM_VERSION,
        )

    def test_unknown_filter_is_rejected(self):
        with pytest.raises(ValidationError):
            MatcherFilters(platfrom="ubuntu")

    def test_token_order_matters_for_equality(self):
        assert MatcherFilters(platform=["a", "b"]) != MatcherFilters(platform=["b", "a"])

    def test_str_and_json(self):
        filters = MatcherFilters(os="linux", platform=["ubuntu", "!debian"])
        assert str(filters) == "{os=[linux], platform=[ubuntu, !debian]}"
        assert json.loads(filters.to_json()) == {
            "os": [{"negated": False, "value": "linux"}],
            "platform": [
                {"negated": False, "value": "ubuntu"},
                {"negated": True, "value": "debian"},
            ],
        }
