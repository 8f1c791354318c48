"""Class-level summaries of a gradebook."""

from typing import Mapping, Optional

import numpy as np
import pandas as pd

from .core import CellStatus, GradebookMatrix, calculate_overall_gpa
from .scales import LETTER_GRADES, map_percentages_to_letter_grades


def rank(scores) -> pd.Series:
    """The rank of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        A series containing overall scores.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` containing the integer rank of
        each student in the class. Ties are broken by order of appearance.

    """
    sorted_scores = scores.sort_values(ascending=False, kind="stable").to_frame()
    sorted_scores["rank"] = np.arange(1, len(sorted_scores) + 1)
    return sorted_scores["rank"].reindex(scores.index)


def percentile(scores) -> pd.Series:
    """The percentile of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        The scores used to compute the percentile.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` in which each entry is the
        student's percentile in the class, as a number between 0 and 1.

    """
    ranks = rank(scores)
    s = 1 - ((ranks - 1) / len(ranks))
    s.name = "percentile"
    return s


def letter_grade_distribution(matrix: GradebookMatrix) -> pd.Series:
    """How many students of a gradebook earn each letter grade.

    Each student's letter grade is found from their percentage of the points
    possible in the gradebook.

    Returns
    -------
    pd.Series
        The number of students earning each letter, indexed by letter from
        highest to lowest. Letters nobody earns are counted as 0.

    """
    letters = map_percentages_to_letter_grades(matrix.to_frame()["percentage"])
    counts = {letter: int((letters == letter).sum()) for letter in LETTER_GRADES}
    return pd.Series(counts, name="students", dtype=int).rename_axis("letter")


def status_counts(matrix: GradebookMatrix) -> pd.DataFrame:
    """A table counting the cells of each status, per assignment.

    Returns
    -------
    pd.DataFrame
        One row per assignment ID and one column per status.

    """
    statuses = [s.value for s in CellStatus]
    counts = {
        assignment_id: column.value_counts().reindex(statuses).fillna(0).astype(int)
        for assignment_id, column in matrix.statuses.items()
    }
    table = pd.DataFrame(counts, index=statuses, dtype=int).T
    table = table.reindex(pd.Index(matrix.assignment_ids, dtype=object))
    table.index.name = "Assignment"
    return table.fillna(0).astype(int)


def outcomes(matrix: GradebookMatrix):
    """Compute a table summarizing student outcomes.

    Parameters
    ----------
    matrix : GradebookMatrix
        The gradebook used to compute outcomes.

    Returns
    -------
    pd.DataFrame
        A table with one row per student, and columns for total points,
        percentage, letter grade, GPA, rank, and percentile. Sorted by
        percentage, from highest to lowest.

    """
    totals = matrix.to_frame()
    statistics = pd.DataFrame(
        {
            "total points": totals["total points"],
            "percentage": totals["percentage"],
            "letter": map_percentages_to_letter_grades(totals["percentage"]),
            "gpa": totals["gpa"],
            "rank": rank(totals["percentage"]),
            "percentile": percentile(totals["percentage"]),
        }
    )

    return statistics.sort_values(by="percentage", ascending=False, kind="stable")


def course_gpa_summary(
    course_gpas: Mapping[str, Optional[float]],
) -> dict:
    """Summarize a student's GPA across their courses.

    Parameters
    ----------
    course_gpas : Mapping[str, Optional[float]]
        Maps each course code to the student's GPA in that course, or ``None``
        if nothing in the course has been graded yet.

    Returns
    -------
    dict
        With keys ``"courses"`` (the per-course GPAs, as given),
        ``"graded_courses"`` (how many courses have a GPA) and
        ``"overall_gpa"`` (see :func:`gradecore.calculate_overall_gpa`).

    """
    values = list(course_gpas.values())
    return {
        "courses": dict(course_gpas),
        "graded_courses": sum(gpa is not None for gpa in values),
        "overall_gpa": calculate_overall_gpa(values),
    }
