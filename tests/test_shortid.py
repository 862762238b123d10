"""Tests for short identifier generation and validation."""

import pytest

from common import shortid
from common.constants import SHORTID_ALPHABET, SHORTID_MAX_LENGTH, SHORTID_MIN_LENGTH


def test_generated_ids_are_valid():
    for _ in range(200):
        identifier = shortid.generate()
        assert shortid.is_valid(identifier)
        assert SHORTID_MIN_LENGTH <= len(identifier) <= SHORTID_MAX_LENGTH
        assert set(identifier) <= set(SHORTID_ALPHABET)


def test_generated_ids_fit_tag_primary_key():
    assert all(len(shortid.generate()) <= 15 for _ in range(200))


def test_generate_with_length():
    assert len(shortid.generate(10)) == 10


def test_generate_rejects_short_length():
    with pytest.raises(ValueError):
        shortid.generate(3)


def test_generated_ids_differ():
    assert len({shortid.generate() for _ in range(100)}) == 100


@pytest.mark.parametrize("identifier", ["S1xY-a_b", "abcdef", "rJ2l8zAbCd4"])
def test_valid_ids(identifier):
    assert shortid.is_valid(identifier)


@pytest.mark.parametrize("identifier", ["", "abc", "abc de", "abc$def", None, 1234567, "ñandúes"])
def test_invalid_ids(identifier):
    assert not shortid.is_valid(identifier)
