"""Input-boundary coercion tests."""

from __future__ import annotations

import pytest

from seriesengine.inputs import number_at, text_at, to_number, to_text, value_at

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (3, 3.0),
        (2.5, 2.5),
        ("1,200", 1200.0),
        (" 7 ", 7.0),
        ("", None),
        ("abc", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        ("nan", None),
        ([1], None),
        (10**400, None),
        ("1" * 400, None),
    ],
)
def test_to_number(raw: object, expected: float | None) -> None:
    """Numbers are coerced to finite floats; everything else reads as None."""

    assert to_number(raw) == expected


def test_short_arrays_read_as_none_past_their_end() -> None:
    """Parallel arrays shorter than labels are padded with None."""

    assert value_at([1, 2], 5) is None
    assert value_at(None, 0) is None
    assert value_at([1], -1) is None
    assert number_at(["4"], 0) == 4.0
    assert number_at(["4"], 1) is None


def test_to_text_treats_blank_as_unset() -> None:
    """Blank strings and non-finite floats are not labels."""

    assert to_text("  ") is None
    assert to_text(None) is None
    assert to_text(float("nan")) is None
    assert to_text(3) == "3"
    assert text_at(["a", ""], 1) is None
