"""
Tests for the normalizer and display policy.
"""

import pytest

from insight_service.engines.display_policy import (
    CLOSE_CALL_LABEL,
    LOW_LIKELIHOOD_TEXT,
    apply_display_policy,
    clamp_likelihood,
    format_likelihood,
    normalize_scores,
    select_top_n,
)


def test_normalize_divides_by_batch_max():
    normalized = normalize_scores([("a", 0.2), ("b", 0.8), ("c", 0.4)])
    assert normalized == [("a", 0.25), ("b", 1.0), ("c", 0.5)]


def test_normalize_all_zero_batch_is_unchanged():
    assert normalize_scores([("a", 0.0), ("b", 0.0)]) == [("a", 0.0), ("b", 0.0)]
    assert normalize_scores([]) == []


def test_clamp_applies_floor_and_drops_zero():
    assert clamp_likelihood(0.01) == 0.05
    assert clamp_likelihood(0.5) == 0.5
    assert clamp_likelihood(0.0) is None
    assert clamp_likelihood(-0.2) is None


@pytest.mark.parametrize("likelihood, expected", [
    (1.0, "100%"),
    (0.819, "82%"),
    (0.125, "13%"),
    (0.1, "10%"),
    (0.0999, LOW_LIKELIHOOD_TEXT),
    (0.05, LOW_LIKELIHOOD_TEXT),
])
def test_format_likelihood(likelihood, expected):
    assert format_likelihood(likelihood) == expected


@pytest.mark.parametrize("likelihoods, expected", [
    ([], (0, None)),
    ([1.0], (5, None)),
    ([1.0, 0.5], (5, None)),
    ([1.0, 0.95, 0.3], (3, CLOSE_CALL_LABEL)),
    ([0.35, 0.2], (3, None)),
    ([0.35, 0.3], (3, CLOSE_CALL_LABEL)),
])
def test_select_top_n(likelihoods, expected):
    assert select_top_n(likelihoods) == expected


def test_policy_never_shows_zero_percent():
    selection = apply_display_policy([("a", 1.0), ("b", 0.0), ("c", 0.001)])
    keys = [e.key for e in selection.entries]
    assert keys == ["a", "c"]
    assert selection.entries[1].likelihood == 0.05
    assert selection.entries[1].display_text == LOW_LIKELIHOOD_TEXT


def test_policy_ties_keep_declaration_order():
    selection = apply_display_policy([("first", 0.5), ("second", 0.5), ("top", 1.0)])
    assert [e.key for e in selection.entries] == ["top", "first", "second"]


def test_policy_caps_at_five():
    scores = [(f"c{i}", 1.0 - i * 0.12) for i in range(7)]
    selection = apply_display_policy(scores)
    assert len(selection.entries) == 5
    assert selection.close_call_label is None
    assert [e.key for e in selection.entries] == ["c0", "c1", "c2", "c3", "c4"]


def test_policy_close_call_narrows_to_three():
    scores = [("a", 0.60), ("b", 0.59), ("c", 0.50), ("d", 0.40), ("e", 0.30)]
    selection = apply_display_policy(scores)
    assert selection.close_call_label == CLOSE_CALL_LABEL
    assert [e.key for e in selection.entries] == ["a", "b", "c"]


def test_policy_empty_batch():
    selection = apply_display_policy([])
    assert selection.entries == ()
    assert selection.close_call_label is None
