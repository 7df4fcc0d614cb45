"""Tests for the key/value codec shared by selectors, labels, attrs and headers."""
import logging

from chaosflow.core.kv_codec import (
    ATTRS,
    HEADERS,
    METADATA,
    SELECTORS,
    KeyValueCodec,
    explode_pods,
    group_pods,
    split_entry,
)


class TestSplitEntry:
    def test_splits_on_first_separator(self):
        assert split_entry("url:http://example.com") == ("url", "http://example.com")

    def test_missing_separator_has_no_value(self):
        assert split_entry("broken") == ("broken", None)

    def test_trailing_separator_has_no_value(self):
        assert split_entry("key:") == ("key:", None)


class TestSelectorCodec:
    def test_encode_removes_whitespace(self):
        assert SELECTORS.encode(["app: web", " tier : db "]) == {"app": "web", "tier": "db"}

    def test_decode_joins_with_colon_space(self):
        assert SELECTORS.decode({"app": "web"}) == ["app: web"]

    def test_round_trip_restores_pairs(self):
        entries = ["app:web", "tier:db", "zone:eu-west-1"]
        decoded = SELECTORS.decode(SELECTORS.encode(entries))
        assert sorted(SELECTORS.split(d) for d in decoded) == sorted(SELECTORS.split(e) for e in entries)

    def test_empty_input(self):
        assert SELECTORS.encode(None) == {}
        assert SELECTORS.decode(None) == []

    def test_missing_separator_is_permissive(self, caplog):
        with caplog.at_level(logging.WARNING):
            encoded = SELECTORS.encode(["broken", "app:web"])
        assert encoded == {"broken": None, "app": "web"}
        assert "no 'key:value' separator" in caplog.text


class TestMetadataCodec:
    def test_decode_has_no_space(self):
        assert METADATA.decode({"team": "sre"}) == ["team:sre"]


class TestHeaderCodec:
    def test_keeps_inner_whitespace(self):
        assert HEADERS.encode(["User-Agent : Mozilla 5.0 "]) == {"User-Agent": "Mozilla 5.0"}

    def test_pairs_keep_duplicates_in_order(self):
        pairs = HEADERS.encode_pairs(["X-Id: 1", "X-Id: 2", "Accept: */*"])
        assert pairs == [["X-Id", "1"], ["X-Id", "2"], ["Accept", "*/*"]]

    def test_decode_pairs(self):
        assert HEADERS.decode_pairs([["X-Id", "1"], ["Solo"]]) == ["X-Id: 1", "Solo"]


class TestAttrCodec:
    def test_values_parsed_as_int(self):
        assert ATTRS.encode(["uid:1000", "perm: 72"]) == {"uid": 1000, "perm": 72}

    def test_non_integer_passes_through(self):
        assert ATTRS.encode(["mode:rw"]) == {"mode": "rw"}

    def test_decode_stringifies(self):
        assert ATTRS.decode({"uid": 1000}) == ["uid:1000"]


def test_custom_codec_value_parser():
    codec = KeyValueCodec(join_with="=", parse_value=str.upper)
    assert codec.encode(["a:b"]) == {"a": "B"}
    assert codec.decode({"a": "B"}) == ["a=B"]


class TestPods:
    def test_group_by_namespace(self):
        grouped = group_pods(["ns1:web-0", "ns1:web-1", "ns2: db-0"])
        assert grouped == {"ns1": ["web-0", "web-1"], "ns2": ["db-0"]}

    def test_explode(self):
        assert explode_pods({"ns1": ["web-0", "web-1"]}) == ["ns1: web-0", "ns1: web-1"]

    def test_explode_then_group_round_trip(self):
        grouped = {"ns1": ["web-0"], "ns2": ["db-0", "db-1"]}
        assert group_pods(explode_pods(grouped)) == grouped
