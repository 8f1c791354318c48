"""Computing GPAs from graded items, and overall GPAs from course GPAs."""

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Optional, Sequence, Union

from .._util import round2
from ..scales import GPAScale, resolve_scale
from ._items import GradedItem, GPAResult


# private helper functions =============================================================


def _coerce_items(items) -> Optional[list]:
    """Turn the input into a list of GradedItems, or None if it isn't a sequence."""
    if items is None or isinstance(items, (str, bytes, Mapping)):
        return None

    if not isinstance(items, Iterable):
        return None

    def _coerce(item):
        if isinstance(item, GradedItem):
            return item
        if isinstance(item, Mapping):
            return GradedItem.from_mapping(item)
        raise TypeError(
            f"Cannot compute a GPA from an item of type {type(item).__name__}."
        )

    return [_coerce(item) for item in items]


def _counts_toward_gpa(item: GradedItem) -> bool:
    return item.is_graded is not False and item.max_points > 0


# public functions =====================================================================


def calculate_gpa(
    items: Optional[Iterable[Union[GradedItem, Mapping]]],
    scale: Union[None, float, GPAScale] = None,
) -> Optional[GPAResult]:
    """Compute the weighted GPA of a collection of graded items.

    The percentage is the weighted sum of points earned divided by the weighted
    sum of points possible. It is then converted to a letter grade and GPA.

    Items which are not graded, or which have no points possible, are ignored.

    Parameters
    ----------
    items : Optional[Iterable[Union[GradedItem, Mapping]]]
        The graded items. Dictionaries are converted with
        :meth:`GradedItem.from_mapping`.
    scale : Union[None, float, GPAScale]
        The GPA scale. Default: the configured default scale.

    Returns
    -------
    Optional[GPAResult]
        The result, or ``None`` if no item counts toward the GPA (including
        when `items` is ``None`` or empty) or if the weighted points possible
        sum to zero.

    Example
    -------
    >>> result = calculate_gpa([
    ...     GradedItem(93, 100, weight=1),
    ...     GradedItem(85, 100, weight=2),
    ... ])
    >>> result.percentage, result.letter_grade, result.gpa, result.total_weight
    (87.67, 'B+', 3.3, 3.0)

    """
    coerced = _coerce_items(items)
    if not coerced:
        return None

    counted = [item for item in coerced if _counts_toward_gpa(item)]
    if not counted:
        return None

    weighted_points = 0.0
    weighted_max_points = 0.0
    total_weight = 0.0
    for item in counted:
        weight = item.effective_weight
        weighted_points += item.points * weight
        weighted_max_points += item.max_points * weight
        total_weight += weight

    # weights of zero, or weights cancelling out, leave nothing to divide by
    if weighted_max_points == 0:
        return None

    gpa_scale = resolve_scale(scale)
    percentage = round2(weighted_points / weighted_max_points * 100)

    return GPAResult(
        percentage=percentage,
        gpa=gpa_scale.percentage_to_gpa(percentage),
        letter_grade=gpa_scale.percentage_to_letter_grade(percentage),
        graded_count=len(counted),
        total_weight=round2(total_weight),
    )


def calculate_simple_gpa(
    items: Optional[Iterable[Union[GradedItem, Mapping]]],
    scale: Union[None, float, GPAScale] = None,
) -> Optional[float]:
    """Compute the GPA of graded items, counting every item equally.

    Any weights on the items are ignored. Otherwise the same as
    :func:`calculate_gpa`.

    Returns
    -------
    Optional[float]
        The GPA, or ``None`` if no item counts toward it.

    """
    coerced = _coerce_items(items)
    if coerced is None:
        return None

    unweighted = [dataclasses.replace(item, weight=1.0) for item in coerced]
    result = calculate_gpa(unweighted, scale=scale)
    return None if result is None else result.gpa


def calculate_overall_gpa(course_gpas: Sequence[Optional[float]]) -> Optional[float]:
    """Average the GPAs of several courses.

    Courses without a GPA (``None``) are left out. Every other course counts
    equally, regardless of credit hours or how many assignments it has.

    Parameters
    ----------
    course_gpas : Sequence[Optional[float]]
        The GPA of each course.

    Returns
    -------
    Optional[float]
        The mean GPA rounded to two decimals, or ``None`` if no course has a
        GPA.

    Example
    -------
    >>> calculate_overall_gpa([4.0, None, 3.0, None, 2.0])
    3.0

    """
    if course_gpas is None:
        return None

    present = [gpa for gpa in course_gpas if gpa is not None]
    if not present:
        return None

    return round2(sum(present) / len(present))
