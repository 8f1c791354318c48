import math

import pytest
import pandas as pd

import gradecore
from gradecore import GPAScale
from gradecore.scales import (
    letter_grade_to_gpa,
    map_percentages_to_letter_grades,
    percentage_to_gpa,
    percentage_to_letter_grade,
)


# percentage_to_letter_grade -----------------------------------------------------------


@pytest.mark.parametrize(
    "percentage, letter",
    [
        (100, "A"),
        (93, "A"),
        (92.99, "A-"),
        (90, "A-"),
        (89.9, "B+"),
        (87, "B+"),
        (83, "B"),
        (80, "B-"),
        (77, "C+"),
        (73, "C"),
        (70, "C-"),
        (67, "D+"),
        (63, "D"),
        (60, "D-"),
        (59.99, "F"),
        (0, "F"),
    ],
)
def test_percentage_to_letter_grade_uses_inclusive_lower_bounds(percentage, letter):
    assert percentage_to_letter_grade(percentage) == letter


def test_percentage_to_letter_grade_clamps_out_of_range_values():
    assert percentage_to_letter_grade(150) == "A"
    assert percentage_to_letter_grade(-10) == "F"


def test_every_percentage_from_93_to_100_is_an_a_worth_4():
    for tenths in range(930, 1001):
        pct = tenths / 10
        assert percentage_to_letter_grade(pct) == "A"
        assert percentage_to_gpa(pct) == 4.0


# percentage_to_gpa --------------------------------------------------------------------


def test_percentage_to_gpa_boundary_belongs_to_upper_bucket():
    assert percentage_to_gpa(92.9) == 3.7
    assert percentage_to_gpa(93) == 4.0


def test_percentage_to_gpa_clamps_in_both_directions():
    assert percentage_to_gpa(-10) == 0.0
    assert percentage_to_gpa(150) == 4.0


def test_percentage_to_gpa_on_example():
    assert percentage_to_gpa(95) == 4.0
    assert percentage_to_gpa(91) == 3.7
    assert percentage_to_gpa(85) == 3.0
    assert percentage_to_gpa(61) == 0.7
    assert percentage_to_gpa(50) == 0.0


def test_percentage_to_gpa_on_custom_scale_is_proportional():
    # A- is 3.7 / 4.0 = 0.925 of the maximum; 5.0 * 0.925 = 4.625
    assert percentage_to_gpa(91, 5.0) == 4.63
    assert percentage_to_gpa(88, 5.0) == 4.13
    assert percentage_to_gpa(95, 10.0) == 10.0
    assert percentage_to_gpa(85, 100.0) == 75.0


def test_percentage_to_gpa_accepts_a_gpa_scale_instance():
    assert percentage_to_gpa(91, GPAScale(5.0)) == 4.63


def test_percentage_to_gpa_uses_configured_default_scale():
    # given
    gradecore.set_options(gradecore.GradingOptions(gpa_scale=5.0))

    # when
    gpa = percentage_to_gpa(91)

    # then
    assert gpa == 4.63
    assert gradecore.get_gpa_scale() == 5.0


# letter_grade_to_gpa ------------------------------------------------------------------


def test_letter_grade_to_gpa_table():
    assert letter_grade_to_gpa("A") == 4.0
    assert letter_grade_to_gpa("B+") == 3.3
    assert letter_grade_to_gpa("D-") == 0.7
    assert letter_grade_to_gpa("F") == 0.0


def test_letter_grade_to_gpa_unknown_letter_is_zero():
    assert letter_grade_to_gpa("Z") == 0.0
    assert letter_grade_to_gpa("A+") == 0.0
    assert letter_grade_to_gpa("") == 0.0


def test_letter_grade_to_gpa_scales():
    assert letter_grade_to_gpa("A-", 5.0) == 4.63
    assert letter_grade_to_gpa("C", 10.0) == 5.0


# GPAScale -----------------------------------------------------------------------------


@pytest.mark.parametrize("scale", [0, -4.0, math.inf, math.nan, "4.0", True])
def test_gpa_scale_rejects_invalid_scales(scale):
    with pytest.raises(ValueError):
        GPAScale(scale)


def test_scales_coexist_without_interference():
    # given
    four = GPAScale(4.0)
    five = GPAScale(5.0)

    # when/then
    assert four.percentage_to_gpa(91) == 3.7
    assert five.percentage_to_gpa(91) == 4.63
    assert four.percentage_to_gpa(91) == 3.7


def test_get_gpa_scale_defaults_to_four():
    assert gradecore.get_gpa_scale() == 4.0


# map_percentages_to_letter_grades -----------------------------------------------------


def test_map_percentages_to_letter_grades_on_example():
    # given
    percentages = pd.Series([84, 95, 55, None], index=["a", "b", "c", "d"])

    # when
    letters = map_percentages_to_letter_grades(percentages)

    # then
    assert letters["a"] == "B"
    assert letters["b"] == "A"
    assert letters["c"] == "F"
    assert pd.isna(letters["d"])
    assert list(letters.index) == ["a", "b", "c", "d"]
