"""Tests for the name normalizer."""

import pytest

from attr_shortcuts import UnsupportedMultiName, normalize_name
from attr_shortcuts.naming import _marker_pattern, is_hidden_name


class TestNormalizeName:
    """Test canonical-name derivation."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("secret", "secret"),
            ("_secret", "secret"),
            ("__dunder", "_dunder"),
            ("trailing_", "trailing_"),
        ],
    )
    def test_strips_one_marker(self, name, expected):
        """Exactly one leading marker is removed."""
        assert normalize_name(name, "reader") == expected

    def test_custom_marker(self):
        """Another marker can be used, and is matched literally."""
        assert normalize_name("$x", "reader", marker="$") == "x"
        assert normalize_name("_x", "reader", marker="$") == "_x"
        assert normalize_name("ax", "reader", marker=".") == "ax"

    @pytest.mark.parametrize("name", [["a", "b"], ("a",)])
    def test_multi_name_rejected(self, name):
        """A sequence of names raises UnsupportedMultiName naming the shortcut."""
        with pytest.raises(UnsupportedMultiName) as exc:
            normalize_name(name, "writer")

        assert exc.value.shortcut == "writer"
        assert "writer" in str(exc.value)


class TestIsHiddenName:
    """Test hidden-name detection."""

    def test_hidden(self):
        """Names starting with the marker are hidden."""
        assert is_hidden_name("_x")
        assert not is_hidden_name("x")
        assert is_hidden_name(".x", marker=".")

    def test_pattern_compiled_once_per_marker(self):
        """The marker pattern is built once and reused."""
        assert _marker_pattern("#") is _marker_pattern("#")
