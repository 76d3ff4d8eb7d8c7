"""Tests for the low-light label correction."""

import pytest

from skin_tone_analyzer.tone.adjustment import adjust, label_number


@pytest.mark.parametrize("n", range(1, 11))
@pytest.mark.parametrize("luma", [80, 80.01, 128, 255])
def test_adjust_noop_in_good_light(n, luma):
    assert adjust(f"MST{n}", luma) == f"MST{n}"


def test_adjust_compounds_both_rules():
    # 5 -> 7 (rule 1), 7 < 8 so rule 2 still fires -> 10
    assert adjust("MST5", 40) == "MST10"


def test_adjust_only_first_rule_above_50():
    assert adjust("MST6", 70) == "MST8"


def test_adjust_leaves_deep_labels_alone():
    assert adjust("MST9", 30) == "MST9"


def test_adjust_rule_one_window_edges():
    assert adjust("MST3", 79) == "MST3"
    assert adjust("MST4", 79) == "MST6"
    assert adjust("MST7", 79) == "MST9"
    assert adjust("MST8", 79) == "MST8"


def test_adjust_rule_two_alone():
    assert adjust("MST2", 49) == "MST5"
    assert adjust("MST3", 49) == "MST6"
    assert adjust("MST8", 49) == "MST8"


def test_adjust_rule_two_sees_rule_one_output():
    # 7 -> 9 after rule 1, which is no longer < 8
    assert adjust("MST7", 49) == "MST9"
    # 4 -> 6 -> 9
    assert adjust("MST4", 10) == "MST9"
    assert adjust("MST6", 0) == "MST8"


def test_adjust_threshold_is_strict():
    assert adjust("MST5", 50) == "MST7"
    assert adjust("MST5", 49.99) == "MST10"


@pytest.mark.parametrize("label", ["MST0", "MST11", "mst5", "5", "MST", ""])
def test_label_number_rejects_non_mst_labels(label):
    with pytest.raises(ValueError):
        label_number(label)
