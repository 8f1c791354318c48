"""Types for representing graded work and the GPA computed from it."""

import dataclasses
from collections.abc import Mapping
from typing import Optional


def _first_present(mapping, *keys, default=None):
    for key in keys:
        if key in mapping:
            return mapping[key]
    return default


@dataclasses.dataclass(frozen=True)
class GradedItem:
    """One scored unit of work.

    Attributes
    ----------
    points : float
        The points earned.
    max_points : float
        The points possible. Items with no points possible are ignored when
        computing a GPA.
    weight : Optional[float]
        How much the item counts relative to others. ``None`` is the same as
        1.0. Default: 1.0.
    is_graded : bool
        Whether the grade is final. Items which are not graded are ignored.
        Default: True.

    """

    points: float
    max_points: float
    weight: Optional[float] = 1.0
    is_graded: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "GradedItem":
        """Create an item from a dictionary.

        Both snake case (``max_points``, ``is_graded``) and camel case
        (``maxPoints``, ``isGraded``) keys are understood.

        """
        return cls(
            points=mapping["points"],
            max_points=_first_present(mapping, "max_points", "maxPoints"),
            weight=mapping.get("weight", 1.0),
            is_graded=_first_present(mapping, "is_graded", "isGraded", default=True),
        )

    @property
    def effective_weight(self) -> float:
        return 1.0 if self.weight is None else self.weight


@dataclasses.dataclass(frozen=True)
class GPAResult:
    """The outcome of a GPA calculation over one or more graded items.

    Attributes
    ----------
    percentage : float
        The (weighted) percentage earned, rounded to two decimals. May exceed
        100 with extra credit.
    gpa : float
        The GPA on the scale used for the calculation, rounded to two decimals.
    letter_grade : str
        The letter grade of the percentage.
    graded_count : int
        The number of items which counted toward the result. Always positive.
    total_weight : float
        The sum of the weights of the counted items, rounded to two decimals.

    """

    percentage: float
    gpa: float
    letter_grade: str
    graded_count: int
    total_weight: float

    def __post_init__(self):
        if self.graded_count < 1:
            raise ValueError("A GPA result must count at least one graded item.")
