"""Tests for _types module."""
import pytest

from idleforge._types import as_float, compare


def test_compare_operators():
    assert compare(5, ">=", 3)
    assert compare(3, ">=", 3)
    assert not compare(2, ">=", 3)

    assert compare(3, "<=", 5)
    assert compare(3, "<=", 3)
    assert not compare(4, "<=", 3)

    assert compare(5, ">", 3)
    assert not compare(3, ">", 3)

    assert compare(3, "<", 5)
    assert not compare(3, "<", 3)

    assert compare(3, "==", 3)
    assert not compare(3, "==", 4)

    assert compare(3, "!=", 4)
    assert not compare(3, "!=", 3)


def test_compare_unknown_operator():
    with pytest.raises(ValueError, match="Unknown operator"):
        compare(1, "??", 2)


def test_as_float_numbers():
    assert as_float(3, 0.0) == 3.0
    assert as_float(2.5, 0.0) == 2.5


def test_as_float_rejects_non_numbers():
    assert as_float("12", 7.0) == 7.0
    assert as_float(None, 7.0) == 7.0
    assert as_float(True, 7.0) == 7.0
    assert as_float([1], 7.0) == 7.0


def test_as_float_rejects_non_finite():
    assert as_float(float("nan"), 1.0) == 1.0
    assert as_float(float("inf"), 1.0) == 1.0


def test_as_float_rejects_ints_too_large_for_float():
    assert as_float(10 ** 400, 3.0) == 3.0
    assert as_float(-(10 ** 400), 3.0) == 3.0
