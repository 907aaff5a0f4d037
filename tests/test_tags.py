"""Tests for the raw tag parser and TagPair ordering."""
import pytest

from tagstore.config import TagRules
from tagstore.exceptions import InvalidTag
from tagstore.tags import TagPair, TagParser, parse_tag


def test_parse_simple_tag():
    tag = parse_tag("host=web1")
    assert tag == TagPair("host", "web1")
    assert tag.key == "host"
    assert tag.value == "web1"
    assert str(tag) == "host=web1"


def test_parse_accepts_common_characters():
    assert parse_tag("dc=us-east").value == "us-east"
    assert parse_tag("path=/api/v1").value == "/api/v1"
    assert parse_tag("addr=10.0.0.1:8080").value == "10.0.0.1:8080"
    assert parse_tag("svc_name=api.gw").key == "svc_name"


@pytest.mark.parametrize("raw", [
    "hostweb1",
    "=web1",
    "host=",
    "",
    "ho st=web1",
    "host=web 1",
    "host=a=b",
    "host=wéb",
])
def test_parse_rejects_invalid_tags(raw):
    with pytest.raises(InvalidTag) as exc_info:
        parse_tag(raw)
    assert exc_info.value.raw_tag == raw


def test_invalid_tag_is_value_error():
    with pytest.raises(ValueError):
        parse_tag("no-delimiter")


def test_tag_pair_ordering():
    tags = [TagPair("b", "1"), TagPair("a", "2"), TagPair("a", "1")]
    assert sorted(tags) == [TagPair("a", "1"), TagPair("a", "2"), TagPair("b", "1")]
    assert TagPair("a", "1") < TagPair("a", "2") < TagPair("b", "0")


def test_tag_pair_hashable():
    assert len({TagPair("a", "1"), TagPair("a", "1"), TagPair("a", "2")}) == 2


def test_custom_rules():
    parser = TagParser(TagRules(value_pattern=r"[a-z]+"))
    assert parser("env=prod") == TagPair("env", "prod")
    with pytest.raises(InvalidTag):
        parser("env=PROD")
    with pytest.raises(InvalidTag):
        parser("env=prod-1")


def test_custom_rules_allow_delimiter_in_value():
    parser = TagParser(TagRules(value_pattern=r"[a-z=]+"))
    # Only the first delimiter splits
    assert parser("expr=a=b") == TagPair("expr", "a=b")
