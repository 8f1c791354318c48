"""Types for a course gradebook, and building one from submission records."""

import dataclasses
import datetime
import logging
import time
from typing import Collection, Hashable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .. import config
from .._util import round2, utcnow
from ..exceptions import GradebookIntegrityError
from ..scales import GPAScale, resolve_scale
from ._aggregate import calculate_simple_gpa
from ._items import GradedItem
from ._submissions import (
    CellStatus,
    Graded,
    NoSubmission,
    SubmissionState,
    classify_cell,
)


logger = logging.getLogger(__name__)

#: the values accepted by :attr:`GradebookFilters.status`
STATUS_FILTER_VALUES = ("all",) + tuple(s.value for s in CellStatus)


# private helper functions =============================================================


def _as_date(value) -> Optional[datetime.date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value[:10])
        except ValueError:
            raise ValueError(f'Invalid date "{value}".') from None
    raise TypeError(f"Expected a date, got {type(value).__name__}.")


def _check_unique_assignment_ids(assignments: Sequence["GradebookAssignment"]):
    seen = set()
    for assignment in assignments:
        if assignment.id in seen:
            raise GradebookIntegrityError(
                f'Assignment "{assignment.id}" appears more than once.'
            )
        seen.add(assignment.id)


def _check_submissions_are_known(
    student: "StudentRecord", assignment_ids: Collection
):
    unknown = set(student.submissions) - set(assignment_ids)
    if unknown:
        raise GradebookIntegrityError(
            f'Student "{student.id}" has records for unknown assignments: '
            f"{sorted(map(str, unknown))}."
        )


# public classes =======================================================================


@dataclasses.dataclass(frozen=True)
class GradebookAssignment:
    """An assignment as it appears in a gradebook.

    Attributes
    ----------
    id : Hashable
        Identifies the assignment.
    title : str
        The assignment's title.
    max_points : int
        The points possible.
    due_date : Optional[datetime.datetime]
        When the assignment is due. Default: None.

    """

    id: Hashable
    title: str
    max_points: int
    due_date: Optional[datetime.datetime] = None


@dataclasses.dataclass(frozen=True)
class GradebookCell:
    """One student's grade on one assignment.

    `score` is present exactly when `status` is :attr:`CellStatus.GRADED`.

    """

    assignment_id: Hashable
    score: Optional[float]
    status: CellStatus

    def __post_init__(self):
        object.__setattr__(self, "status", CellStatus(self.status))
        graded = self.status is CellStatus.GRADED
        if graded != (self.score is not None):
            raise GradebookIntegrityError(
                f'Cell for assignment "{self.assignment_id}" has status '
                f'"{self.status}" but score {self.score!r}.'
            )


@dataclasses.dataclass(frozen=True)
class GradebookStudent:
    """A row of the gradebook: one student's cells and totals.

    Attributes
    ----------
    id : Hashable
    name : str
    email : str
    grades : Tuple[GradebookCell, ...]
        One cell per assignment, in the gradebook's assignment order.
    total_points : float
        Points earned over graded assignments.
    percentage : float
        Points earned as a percentage of the points possible on *every*
        assignment in the gradebook, graded or not.
    gpa : Optional[float]
        GPA over the graded assignments, or ``None`` if none are graded.

    """

    id: Hashable
    name: str
    email: str
    grades: Tuple[GradebookCell, ...]
    total_points: float
    percentage: float
    gpa: Optional[float]

    def __post_init__(self):
        object.__setattr__(self, "grades", tuple(self.grades))

    def cell(self, assignment_id) -> GradebookCell:
        """Retrieve the cell for an assignment.

        Raises
        ------
        KeyError
            If the student has no cell for the assignment.

        """
        for cell in self.grades:
            if cell.assignment_id == assignment_id:
                return cell
        raise KeyError(f"No cell for assignment {assignment_id!r}.")


@dataclasses.dataclass(frozen=True)
class GradebookMatrix:
    """A course's complete grading state: students by assignments.

    Every student's cells are guaranteed to follow the order of
    :attr:`assignments`; a :class:`GradebookIntegrityError` is raised otherwise.

    Attributes
    ----------
    students : Tuple[GradebookStudent, ...]
    assignments : Tuple[GradebookAssignment, ...]
    course_code : str
    course_title : str

    """

    students: Tuple[GradebookStudent, ...]
    assignments: Tuple[GradebookAssignment, ...]
    course_code: str
    course_title: str

    def __post_init__(self):
        object.__setattr__(self, "students", tuple(self.students))
        object.__setattr__(self, "assignments", tuple(self.assignments))

        expected = [a.id for a in self.assignments]
        for student in self.students:
            actual = [cell.assignment_id for cell in student.grades]
            if actual != expected:
                raise GradebookIntegrityError(
                    f'Cells of student "{student.id}" do not match the '
                    "gradebook's assignments."
                )

    @property
    def assignment_ids(self) -> list:
        return [a.id for a in self.assignments]

    @property
    def total_possible_points(self):
        """The sum of the points possible over all assignments."""
        return sum(a.max_points for a in self.assignments)

    @property
    def points_possible(self) -> pd.Series:
        """A series of points possible, indexed by assignment ID."""
        return pd.Series(
            [a.max_points for a in self.assignments],
            index=pd.Index(self.assignment_ids, dtype=object),
            dtype=float,
        )

    @property
    def points_earned(self) -> pd.DataFrame:
        """A table of scores: student IDs by assignment IDs.

        Cells which are not graded are NaN.

        """
        data = [
            [np.nan if cell.score is None else cell.score for cell in s.grades]
            for s in self.students
        ]
        return pd.DataFrame(
            data,
            index=pd.Index([s.id for s in self.students], dtype=object),
            columns=pd.Index(self.assignment_ids, dtype=object),
            dtype=float,
        )

    @property
    def statuses(self) -> pd.DataFrame:
        """A table of cell statuses (as strings): student IDs by assignment IDs."""
        data = [[cell.status.value for cell in s.grades] for s in self.students]
        return pd.DataFrame(
            data,
            index=pd.Index([s.id for s in self.students], dtype=object),
            columns=pd.Index(self.assignment_ids, dtype=object),
            dtype=object,
        )

    def to_frame(self) -> pd.DataFrame:
        """One row per student with their name, email and totals."""
        return pd.DataFrame(
            {
                "name": [s.name for s in self.students],
                "email": [s.email for s in self.students],
                "total points": [float(s.total_points) for s in self.students],
                "percentage": [float(s.percentage) for s in self.students],
                "gpa": [np.nan if s.gpa is None else s.gpa for s in self.students],
            },
            index=pd.Index([s.id for s in self.students], dtype=object),
        )


@dataclasses.dataclass(frozen=True)
class StudentRecord:
    """A student's submission records, as provided by the data store.

    Attributes
    ----------
    id : Hashable
    name : str
    email : str
    submissions : Mapping[Hashable, SubmissionState]
        Maps assignment IDs to the state of the student's work. Assignments
        which are absent are treated as :class:`NoSubmission`.

    """

    id: Hashable
    name: str
    email: str
    submissions: Mapping[Hashable, SubmissionState] = dataclasses.field(
        default_factory=dict
    )

    def state_for(self, assignment_id) -> SubmissionState:
        return self.submissions.get(assignment_id, NoSubmission())


@dataclasses.dataclass(frozen=True)
class GradebookFilters:
    """Narrows which students and assignments appear in a gradebook.

    Attributes
    ----------
    student_filter : Optional[str]
        Keep students whose name contains this text, ignoring case.
    assignment_id : Optional[Hashable]
        Keep only this assignment.
    date_from : Optional[datetime.date]
        Keep assignments due on or after this day.
    date_to : Optional[datetime.date]
        Keep assignments due on or before this day (the whole day counts).
    status : str
        ``"all"``, or a cell status; keeps students with at least one cell of
        that status. Default: ``"all"``.

    When a date range is given, assignments with no due date are dropped.
    Dates may also be given as ISO strings.

    Raises
    ------
    ValueError
        If the status is unknown, or `date_from` is after `date_to`.

    """

    student_filter: Optional[str] = None
    assignment_id: Optional[Hashable] = None
    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    status: Union[str, CellStatus] = "all"

    def __post_init__(self):
        status = self.status.value if isinstance(self.status, CellStatus) else self.status
        if status not in STATUS_FILTER_VALUES:
            raise ValueError(
                f'Unknown status "{self.status}". Must be one of {STATUS_FILTER_VALUES}.'
            )
        object.__setattr__(self, "status", status)

        object.__setattr__(self, "student_filter", self.student_filter or None)
        if self.assignment_id == "":
            object.__setattr__(self, "assignment_id", None)
        object.__setattr__(self, "date_from", _as_date(self.date_from))
        object.__setattr__(self, "date_to", _as_date(self.date_to))

        if (
            self.date_from is not None
            and self.date_to is not None
            and self.date_from > self.date_to
        ):
            raise ValueError("date_from must not be after date_to.")

    def keeps_assignment(self, assignment: GradebookAssignment) -> bool:
        if self.assignment_id is not None and assignment.id != self.assignment_id:
            return False

        if self.date_from is None and self.date_to is None:
            return True

        if assignment.due_date is None:
            return False

        due = assignment.due_date.date()
        if self.date_from is not None and due < self.date_from:
            return False
        if self.date_to is not None and due > self.date_to:
            return False
        return True

    def keeps_student_name(self, name: str) -> bool:
        if self.student_filter is None:
            return True
        return self.student_filter.lower() in (name or "").lower()

    def keeps_cells(self, cells: Sequence[GradebookCell]) -> bool:
        if self.status == "all":
            return True
        return any(cell.status.value == self.status for cell in cells)


# public functions =====================================================================


def build_student_row(
    student: StudentRecord,
    assignments: Sequence[GradebookAssignment],
    now: datetime.datetime,
    scale: Union[None, float, GPAScale] = None,
) -> GradebookStudent:
    """Compute one row of the gradebook.

    Parameters
    ----------
    student : StudentRecord
        The student's submission records.
    assignments : Sequence[GradebookAssignment]
        The assignments, in column order.
    now : datetime.datetime
        The time used to decide whether assignments are past due.
    scale : Union[None, float, GPAScale]
        The GPA scale. Default: the configured default scale.

    Returns
    -------
    GradebookStudent

    """
    cells = []
    graded_items = []
    total_points = 0

    for assignment in assignments:
        state = student.state_for(assignment.id)
        status = classify_cell(state, assignment.due_date, now)

        score = None
        if isinstance(state, Graded):
            score = state.score
            total_points += score
            graded_items.append(
                GradedItem(points=score, max_points=assignment.max_points, weight=1.0)
            )

        cells.append(GradebookCell(assignment.id, score, status))

    total_possible = sum(a.max_points for a in assignments)
    if total_possible > 0:
        percentage = round2(total_points / total_possible * 100)
    else:
        percentage = 0.0

    return GradebookStudent(
        id=student.id,
        name=student.name,
        email=student.email,
        grades=tuple(cells),
        total_points=total_points,
        percentage=percentage,
        gpa=calculate_simple_gpa(graded_items, scale=scale),
    )


def build_gradebook_matrix(
    assignments: Sequence[GradebookAssignment],
    students: Sequence[StudentRecord],
    course_code: str,
    course_title: str,
    now: Optional[datetime.datetime] = None,
    scale: Union[None, float, GPAScale] = None,
    filters: Optional[GradebookFilters] = None,
) -> GradebookMatrix:
    """Build a gradebook from assignments and students' submission records.

    Each (student, assignment) pair becomes a :class:`GradebookCell` whose status
    is determined by :func:`classify_cell`. Student totals are computed over
    the assignments which appear in the gradebook.

    Parameters
    ----------
    assignments : Sequence[GradebookAssignment]
        The course's assignments, in the order they should appear.
    students : Sequence[StudentRecord]
        The enrolled students and their submission records, in row order.
    course_code : str
    course_title : str
    now : Optional[datetime.datetime]
        The current time, used to decide whether assignments are past due.
        Default: the time at which this function is called.
    scale : Union[None, float, GPAScale]
        The GPA scale. Default: the configured default scale.
    filters : Optional[GradebookFilters]
        Restricts the students and assignments in the gradebook. Default: no
        filtering.

    Returns
    -------
    GradebookMatrix

    Raises
    ------
    GradebookIntegrityError
        If two assignments share an ID, or a student has a record for an
        assignment which is not in `assignments`.

    """
    started = time.perf_counter()

    if now is None:
        now = utcnow()
    if filters is None:
        filters = GradebookFilters()

    gpa_scale = resolve_scale(scale)

    _check_unique_assignment_ids(assignments)
    all_ids = [a.id for a in assignments]
    for student in students:
        _check_submissions_are_known(student, all_ids)

    kept_assignments = [a for a in assignments if filters.keeps_assignment(a)]

    rows = []
    for student in students:
        if not filters.keeps_student_name(student.name):
            continue

        row = build_student_row(student, kept_assignments, now, scale=gpa_scale)
        if filters.keeps_cells(row.grades):
            rows.append(row)

    matrix = GradebookMatrix(
        students=tuple(rows),
        assignments=tuple(kept_assignments),
        course_code=course_code,
        course_title=course_title,
    )

    elapsed = time.perf_counter() - started
    logger.debug(
        "Built gradebook for %s: %d students x %d assignments in %.2fms",
        course_code,
        len(rows),
        len(kept_assignments),
        elapsed * 1000,
    )

    threshold = config.get_options().slow_build_threshold
    if elapsed > threshold:
        logger.warning(
            "Building the gradebook for %s took %.2fs (threshold: %.2fs)",
            course_code,
            elapsed,
            threshold,
        )

    return matrix
