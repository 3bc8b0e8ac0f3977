"""Tests for utility functions."""

from tagconf.utils import deep_merge


class TestDeepMerge:
    """Test deep_merge function."""

    def test_empty_dicts(self):
        assert deep_merge({}, {}) == {}

    def test_overlay_wins(self):
        """Test overlay takes precedence for scalar values."""
        assert deep_merge({"editor": "vim"}, {"editor": "nano"}) == {"editor": "nano"}

    def test_nested_merge(self):
        """Test nested settings sections are merged key by key."""
        base = {"overrides": {"active": ["ubuntu"], "note": "user"}}
        overlay = {"overrides": {"note": "local"}}
        assert deep_merge(base, overlay) == {"overrides": {"active": ["ubuntu"], "note": "local"}}

    def test_override_lists_replaced(self):
        """Test override tag lists are replaced, not concatenated."""
        base = {"overrides": {"active": ["ubuntu", "production"]}}
        overlay = {"overrides": {"active": ["staging"]}}
        assert deep_merge(base, overlay) == {"overrides": {"active": ["staging"]}}

    def test_scalar_replaces_mapping(self):
        assert deep_merge({"overrides": {"active": []}}, {"overrides": None}) == {"overrides": None}

    def test_original_not_modified(self):
        """Test that input dicts are left untouched."""
        base = {"overrides": {"active": ["a"]}}
        overlay = {"overrides": {"note": "x"}}
        result = deep_merge(base, overlay)

        assert result == {"overrides": {"active": ["a"], "note": "x"}}
        assert base == {"overrides": {"active": ["a"]}}
        assert overlay == {"overrides": {"note": "x"}}
