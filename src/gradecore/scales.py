"""Mapping percentages to letter grades and GPA points."""

import collections
import math
from numbers import Real
from typing import Union

import pandas as pd

from . import config
from ._util import round2


# common scales ========================================================================

GRADE_THRESHOLDS = collections.OrderedDict(
    [
        ("A", 93),
        ("A-", 90),
        ("B+", 87),
        ("B", 83),
        ("B-", 80),
        ("C+", 77),
        ("C", 73),
        ("C-", 70),
        ("D+", 67),
        ("D", 63),
        ("D-", 60),
        ("F", 0),
    ]
)
"""The lowest percentage earning each letter grade, from highest to lowest."""

LETTER_GRADE_POINTS = {
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
}
"""GPA points of each letter grade on a 4.0 scale."""

LETTER_GRADES = tuple(GRADE_THRESHOLDS)

BASE_SCALE = 4.0

DEFAULT_GPA_SCALE = config.DEFAULT_GPA_SCALE


# helper functions =====================================================================


def _check_scale(scale):
    if (
        not isinstance(scale, Real)
        or isinstance(scale, bool)
        or not math.isfinite(scale)
        or scale <= 0
    ):
        raise ValueError(f"GPA scale must be a positive number, not {scale!r}.")


def _lookup_letter(percentage) -> str:
    for letter, threshold in GRADE_THRESHOLDS.items():
        if percentage >= threshold:
            return letter
    return "F"


# public classes =======================================================================


class GPAScale:
    """Converts percentages to letter grades and GPA points on a fixed scale.

    Letter grades are assigned with the 12-step plus/minus table in
    :data:`GRADE_THRESHOLDS`. Each letter is worth the points listed in
    :data:`LETTER_GRADE_POINTS`, scaled proportionally to the maximum GPA of this
    scale. For instance, an A- is worth 3.7 on a 4.0 scale, and 4.63 on a 5.0
    scale.

    Parameters
    ----------
    scale : float
        The GPA awarded for an A. Default: 4.0.

    Raises
    ------
    ValueError
        If the scale is not a positive, finite number.

    """

    def __init__(self, scale: float = BASE_SCALE):
        _check_scale(scale)
        self.scale = float(scale)

    def __repr__(self):
        return f"GPAScale(scale={self.scale!r})"

    def __eq__(self, other):
        if not isinstance(other, GPAScale):
            return NotImplemented
        return self.scale == other.scale

    def __hash__(self):
        return hash(self.scale)

    def percentage_to_letter_grade(self, percentage: float) -> str:
        """Find the letter grade earned by a percentage.

        Percentages above 100 (extra credit) earn an A; negative percentages
        earn an F.

        Example
        -------
        >>> GPAScale().percentage_to_letter_grade(91)
        'A-'

        """
        if percentage < 0:
            return "F"
        return _lookup_letter(min(percentage, 100))

    def letter_grade_to_gpa(self, letter_grade: str) -> float:
        """The GPA points of a letter grade on this scale.

        Unknown letter grades are worth 0.

        Example
        -------
        >>> GPAScale(5.0).letter_grade_to_gpa("B+")
        4.13

        """
        try:
            points = LETTER_GRADE_POINTS[letter_grade]
        except (KeyError, TypeError):
            return 0.0
        return round2(points * self.scale / BASE_SCALE)

    def percentage_to_gpa(self, percentage: float) -> float:
        """Convert a percentage to GPA points on this scale.

        The percentage is clamped to [0, 100] for the purposes of finding the
        letter grade, so extra credit is capped at the maximum GPA.

        Example
        -------
        >>> GPAScale(5.0).percentage_to_gpa(91)
        4.63

        """
        clamped = min(max(percentage, 0), 100)
        return round2(self.letter_grade_to_gpa(_lookup_letter(clamped)))


def resolve_scale(scale: Union[None, float, GPAScale] = None) -> GPAScale:
    """Turn a scale argument into a :class:`GPAScale`.

    ``None`` gives the configured default scale; a number gives a scale with
    that maximum.

    """
    if isinstance(scale, GPAScale):
        return scale
    if scale is None:
        scale = config.get_gpa_scale()
    return GPAScale(scale)


# public functions =====================================================================


def get_gpa_scale() -> float:
    """The maximum GPA of the configured default scale.

    See :class:`gradecore.config.GradingOptions` for how it is configured.

    """
    return config.get_gpa_scale()


def percentage_to_letter_grade(percentage: float) -> str:
    """Find the letter grade earned by a percentage.

    Parameters
    ----------
    percentage : float
        A percentage, usually between 0 and 100.

    Returns
    -------
    str
        One of ``A, A-, B+, B, B-, C+, C, C-, D+, D, D-, F``.

    """
    return _lookup_letter(min(percentage, 100)) if percentage >= 0 else "F"


def letter_grade_to_gpa(
    letter_grade: str, scale: Union[None, float, GPAScale] = None
) -> float:
    """The GPA points of a letter grade.

    Parameters
    ----------
    letter_grade : str
        The letter grade. Unknown letters are worth 0.
    scale : Union[None, float, GPAScale]
        The scale to use. Default: the configured default scale.

    Returns
    -------
    float

    """
    return resolve_scale(scale).letter_grade_to_gpa(letter_grade)


def percentage_to_gpa(
    percentage: float, scale: Union[None, float, GPAScale] = None
) -> float:
    """Convert a percentage to GPA points.

    Parameters
    ----------
    percentage : float
        A percentage. Values outside of [0, 100] are clamped.
    scale : Union[None, float, GPAScale]
        The scale to use. Default: the configured default scale.

    Returns
    -------
    float
        The GPA, rounded to two decimal places.

    """
    return resolve_scale(scale).percentage_to_gpa(percentage)


def map_percentages_to_letter_grades(percentages: pd.Series) -> pd.Series:
    """Map each percentage in a series to a letter grade.

    Parameters
    ----------
    percentages : pandas.Series
        A series containing percentages as numbers between 0 and 100. Missing
        values are allowed.

    Returns
    -------
    pandas.Series
        A series with the same index containing the letter grades. Missing
        percentages remain missing.

    """

    def _map(percentage):
        if pd.isna(percentage):
            return None
        return percentage_to_letter_grade(percentage)

    return percentages.apply(_map).astype(object)
