"""Tests for the reference extractor."""

import pytest

from dashvars.dependency.extractor import (
    extract_references,
    iter_references,
    iter_string_references,
)


class TestStringScanning:
    """Test scanning of a single string."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("$foo", ["foo"]),
            ("${foo}", ["foo"]),
            ("${foo:regex}", ["foo"]),
            ("${foo.label}", ["foo"]),
            ("${foo.label:csv}", ["foo"]),
            ("$_private_1", ["_private_1"]),
            ("no references here", []),
            ("", []),
        ],
    )
    def test_reference_forms(self, text, expected):
        """Test bare and delimited forms."""
        assert list(iter_string_references(text)) == expected

    def test_order_and_duplicates_preserved(self):
        """Test that raw scanning yields every occurrence in order."""
        text = "sum by($doe, $bar) (rate($foo{label='$bar'}))"

        assert list(iter_string_references(text)) == ["doe", "bar", "foo", "bar"]

    def test_name_stops_at_non_word_character(self):
        """Test greedy match ends at the first non-identifier character."""
        assert list(iter_string_references("$foo-bar $baz.qux")) == ["foo", "baz"]

    def test_adjacent_references(self):
        """Test references glued together."""
        assert list(iter_string_references("$a$b${c}")) == ["a", "b", "c"]

    def test_unterminated_delimited_form_ignored(self):
        """Test that '${foo' without closing brace is not a reference."""
        assert list(iter_string_references("${foo")) == []

    def test_lone_sigil_ignored(self):
        """Test dollar signs with no name."""
        assert list(iter_string_references("costs $ 5 or $$")) == []


class TestNumericFilter:
    """Test that numeric tokens never count as references."""

    @pytest.mark.parametrize("text", ["$1", "${42}", "$0", "${7:raw}", "$123456"])
    def test_numeric_tokens_discarded(self, text):
        """Test all-digit captures."""
        assert extract_references({"expr": text}) == set()

    def test_digit_leading_token_discarded_whole(self):
        """Test that '$1abc' is rejected instead of matching 'abc'."""
        assert extract_references("$1abc") == set()

    def test_back_reference_next_to_real_references(self):
        """Test label_replace back-reference mixed with real variables."""
        expr = (
            "group by(prometheus) (label_replace(kube_statefulset_labels"
            '{$filter_platform,stack=~"$PaaS",$filter_kube_sts,stack=~"$PaaS",'
            'namespace=~"$extlabels_prometheus_namespace"},"prometheus","$1",'
            '"label_app_kubernetes_io_instance","([^-]+)-?.*"))'
        )

        assert extract_references({"expr": expr, "label_name": "prometheus"}) == {
            "filter_platform",
            "PaaS",
            "filter_kube_sts",
            "extlabels_prometheus_namespace",
        }


class TestPayloadWalk:
    """Test traversal of nested payloads."""

    def test_nested_mappings_and_sequences(self):
        """Test strings at every depth are scanned."""
        payload = {
            "label_name": "$foo",
            "matchers": ["$foo{$bar='test'}", {"deep": [["${baz}"]]}],
        }

        assert extract_references(payload) == {"foo", "bar", "baz"}

    def test_traversal_order(self):
        """Test references are yielded depth-first in document order."""
        payload = {"a": "$one", "b": ["$two", {"c": "$three"}], "d": "$four"}

        assert list(iter_references(payload)) == ["one", "two", "three", "four"]

    def test_mapping_keys_not_scanned(self):
        """Test that only values are scanned."""
        assert extract_references({"$key": "value"}) == set()

    @pytest.mark.parametrize("payload", [None, 42, 3.14, True, object(), {"n": 1, "b": False}])
    def test_non_string_payloads_yield_nothing(self, payload):
        """Test that malformed or scalar payloads never raise."""
        assert extract_references(payload) == set()

    def test_tuple_payload(self):
        """Test tuples are walked like lists."""
        assert extract_references(("$a", ("$b",))) == {"a", "b"}

    def test_plain_string_payload(self):
        """Test a bare string payload."""
        assert extract_references("vector($foo)") == {"foo"}

    def test_duplicates_collapse(self):
        """Test repeated references collapse into one entry."""
        assert extract_references({"x": "$foo $foo", "y": ["${foo}"]}) == {"foo"}

    def test_deeply_nested_payload(self):
        """Test depth far beyond the recursion limit."""
        payload: object = "$leaf"
        for _ in range(5000):
            payload = {"inner": [payload]}

        assert extract_references(payload) == {"leaf"}
