"""Tests for tresponse.core.coercion - loose and strict success coercion."""

from __future__ import annotations

import pytest

from tresponse.core.coercion import CoercionMode, coerce, loose_truth, strict_truth


class TestLooseTruth:
    """Tests for loose truthiness."""

    @pytest.mark.parametrize(
        "value", [None, False, 0, 0.0, -0.0, "", "0", [], (), {}, set(), frozenset()]
    )
    def test_falsy(self, value):
        """Empty values, zeros and the string "0" are falsy."""
        assert loose_truth(value) is False

    @pytest.mark.parametrize(
        "value", [True, 1, -1, 0.5, "1", "false", "0.0", " ", [None], {"k": 0}, object()]
    )
    def test_truthy(self, value):
        """Everything else is truthy, including the string "false"."""
        assert loose_truth(value) is True


class TestStrictTruth:
    """Tests for strict truthiness."""

    def test_only_true_literal(self):
        """The literal True is a success."""
        assert strict_truth(True) is True

    @pytest.mark.parametrize("value", [1, "true", [True], 1.0, object(), None])
    def test_everything_else_false(self, value):
        """Values merely equal to or resembling True are not."""
        assert strict_truth(value) is False


class TestCoerce:
    """Tests for coerce()."""

    def test_default_mode_is_loose(self):
        """Without a mode, loose rules apply."""
        assert coerce(1) is True
        assert coerce("0") is False

    def test_strict_mode(self):
        """STRICT accepts only True."""
        assert coerce(1, CoercionMode.STRICT) is False
        assert coerce(True, CoercionMode.STRICT) is True

    def test_mode_by_name(self):
        """Modes can be passed by their string value."""
        assert coerce(1, "strict") is False
        assert coerce(1, "loose") is True

    def test_unknown_mode(self):
        """An unknown mode name is rejected."""
        with pytest.raises(ValueError):
            coerce(1, "fuzzy")
