import pytest

from catalog_search.matching.similarity import edit_distance, round_half_up, similarity


@pytest.mark.parametrize("value", ["", "a", "Nasi Goreng", "soto ayam"])
def test_edit_distance_of_identical_strings_is_zero(value):
    assert edit_distance(value, value) == 0


def test_edit_distance_is_case_insensitive():
    assert edit_distance("NASI", "nasi") == 0


def test_edit_distance_counts_insertions_deletions_and_substitutions():
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("ngoreng", "goreng") == 1


@pytest.mark.parametrize(
    "first, second",
    [("kitten", "sitting"), ("nasi", "goreng"), ("", "uduk"), ("Flaw", "lawn")],
)
def test_edit_distance_is_symmetric(first, second):
    assert edit_distance(first, second) == edit_distance(second, first)


def test_similarity_of_two_empty_strings_is_full():
    assert similarity("", "") == 100


def test_similarity_is_full_for_case_insensitive_equality():
    assert similarity("Goreng", "gORENG") == 100


def test_similarity_uses_longer_length():
    # distance 3 over 7 characters
    assert similarity("kitten", "sitting") == 57
    assert similarity("ngoreng", "goreng") == 86


def test_similarity_against_empty_string_is_zero():
    assert similarity("nasi", "") == 0


def test_partial_overlap_is_between_bounds():
    score = similarity("nasy", "nasi")
    assert 0 < score < 100
    assert score == 75


def test_round_half_up_rounds_halves_upward():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0) == 0


def test_similarity_stays_in_range_when_lowercasing_lengthens_text():
    # "İ".lower() is two code points long
    assert similarity("İ", "a") == 0
    assert 0 <= similarity("İstanbul", "istanbul") <= 100
