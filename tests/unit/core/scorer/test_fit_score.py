import pytest

from core.scorer.fit_score import (
    clamp_rating,
    compute_fit_score,
    normalize_weights,
    round_half_up,
    weight_percentages,
)


def test_weighted_blend_rounds_half_up():
    # (80*7 + 40*3) / 10 = 68
    assert compute_fit_score(4, 2, 7, 3) == 68
    # (100*1 + 20*1) / 2 = 60
    assert compute_fit_score(5, 1, 1, 1) == 60
    # (60*2 + 20*1) / 3 = 46.67
    assert compute_fit_score(3, 1, 2, 1) == 47


def test_extremes():
    assert compute_fit_score(5, 5, 5, 5) == 100
    assert compute_fit_score(1, 1, 5, 5) == 20


@pytest.mark.parametrize("value, expected", [(68.5, 69), (0.5, 1), (2.5, 3), (2.49, 2), (3.0, 3)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("raw, expected", [
    (4, 4),
    (9, 5),
    (-2, 1),
    (0, 3),
    (None, 3),
    ("4", 4),
    ("excellent", 3),
    (2.5, 3),
    (float("nan"), 3),
])
def test_clamp_rating(raw, expected):
    assert clamp_rating(raw) == expected


def test_normalize_weights_defaults_bad_values():
    assert normalize_weights(7, 3) == (7, 3)
    assert normalize_weights(None, 0) == (5, 5)
    assert normalize_weights("x", -1) == (5, 5)


def test_weight_percentages():
    assert weight_percentages(7, 3) == (70, 30)
    assert weight_percentages(5, 5) == (50, 50)
    # Each share rounds on its own
    assert weight_percentages(1, 2) == (33, 67)
    assert weight_percentages(1, 7) == (13, 88)
