import pytest

from mnotify.utils import (
    chunk,
    compact,
    is_valid_phone,
    normalize_phone,
    safe_json_parse,
    to_array,
)


class TestToArray:
    """Recipient shaping"""

    def test_single_value_becomes_one_element_list(self):
        """Should wrap a bare string"""
        assert to_array("233200000000") == ["233200000000"]

    def test_sequences_are_copied(self):
        """Should return a new list for lists and tuples"""
        original = ["a", "b"]
        result = to_array(original)
        assert result == original
        assert result is not original
        assert to_array(("a",)) == ["a"]


class TestCompact:
    def test_drops_none_but_keeps_falsy_values(self):
        assert compact({"a": None, "b": 0, "c": "", "d": False}) == {
            "b": 0,
            "c": "",
            "d": False,
        }


class TestSafeJsonParse:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('{"message": "Invalid sender ID"}', {"message": "Invalid sender ID"}),
            (b'[1, 2]', [1, 2]),
            ("", {}),
            (None, {}),
            ("<html>Bad Gateway</html>", {}),
        ],
    )
    def test_parse_or_fallback(self, text, expected):
        assert safe_json_parse(text, {}) == expected


class TestPhoneHelpers:
    def test_normalize_phone_swaps_trunk_prefix(self):
        assert normalize_phone("024 000-0000") == "233240000000"
        assert normalize_phone("+233 24 000 0000") == "233240000000"
        assert normalize_phone("0240000000", country_code="1") == "1240000000"

    def test_is_valid_phone(self):
        assert is_valid_phone("0240000000")
        assert not is_valid_phone("12345")
        assert not is_valid_phone("1" * 16)


class TestChunk:
    def test_splits_into_bounded_batches(self):
        assert chunk(range(5), 2) == [[0, 1], [2, 3], [4]]
        assert chunk([], 3) == []

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError, match="at least 1"):
            chunk([1], 0)
