"""The state of a student's work on an assignment, and how it is displayed."""

import dataclasses
import datetime
import enum
from typing import Optional, Union

from .._util import as_utc


class CellStatus(str, enum.Enum):
    """The status of one student's work on one assignment.

    graded
        A grade has been recorded.
    pending
        Nothing for the instructor to act on yet: either the work was
        submitted and is awaiting a grade, or it is not yet due.
    late
        Submitted but not graded, and the due date has passed.
    missing
        Not submitted, and the due date has passed.

    """

    GRADED = "graded"
    PENDING = "pending"
    LATE = "late"
    MISSING = "missing"

    def __str__(self):
        return self.value


@dataclasses.dataclass(frozen=True)
class NoSubmission:
    """The student has not submitted anything."""


@dataclasses.dataclass(frozen=True)
class Submitted:
    """The student submitted work which has not been graded.

    Attributes
    ----------
    at : datetime.datetime
        When the work was submitted.

    """

    at: datetime.datetime


@dataclasses.dataclass(frozen=True)
class Graded:
    """A grade has been recorded.

    Attributes
    ----------
    score : float
        The points awarded.
    at : Optional[datetime.datetime]
        When the work was submitted, if it was. Grades can be entered without
        a submission.

    """

    score: float
    at: Optional[datetime.datetime] = None


SubmissionState = Union[NoSubmission, Submitted, Graded]


def _is_past_due(due_date: Optional[datetime.datetime], now: datetime.datetime) -> bool:
    if due_date is None:
        return False
    return as_utc(now) > as_utc(due_date)


def classify_cell(
    state: SubmissionState,
    due_date: Optional[datetime.datetime],
    now: datetime.datetime,
) -> CellStatus:
    """Determine the status of a gradebook cell.

    Parameters
    ----------
    state : SubmissionState
        The student's submission state for the assignment.
    due_date : Optional[datetime.datetime]
        When the assignment is due, if it has a due date.
    now : datetime.datetime
        The current time. Naive datetimes are taken to be in UTC.

    Returns
    -------
    CellStatus

    Raises
    ------
    TypeError
        If `state` is not one of the submission states.

    """
    if isinstance(state, Graded):
        return CellStatus.GRADED

    if isinstance(state, Submitted):
        if _is_past_due(due_date, now):
            return CellStatus.LATE
        return CellStatus.PENDING

    if isinstance(state, NoSubmission):
        if _is_past_due(due_date, now):
            return CellStatus.MISSING
        return CellStatus.PENDING

    raise TypeError(f"Unknown submission state: {state!r}.")
