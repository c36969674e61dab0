import pytest

from input.keyboard_range import KeyboardRange


@pytest.mark.parametrize("name, first, last", [
    ("88", 21, 108),
    ("76", 28, 103),
    ("61", 36, 96),
    ("unknown", 21, 108),
])
def test_from_name(name, first, last):
    kr = KeyboardRange.from_name(name)
    assert (kr.first, kr.last) == (first, last)


def test_contains_is_inclusive():
    kr = KeyboardRange(36, 96)
    assert 36 in kr and 96 in kr
    assert 35 not in kr and 97 not in kr
    assert kr.contains(60)


def test_len():
    assert len(KeyboardRange()) == 88
    assert len(KeyboardRange.from_name("61")) == 61
