import datetime
import logging

import numpy as np
import pandas as pd
import pytest

import gradecore
from gradecore import (
    CellStatus,
    GPAScale,
    GradebookAssignment,
    GradebookCell,
    GradebookFilters,
    GradebookIntegrityError,
    GradebookMatrix,
    GradebookStudent,
    Graded,
    StudentRecord,
    build_gradebook_matrix,
)


def build(assignments, students, now, **kwargs):
    return build_gradebook_matrix(
        assignments, students, "CS101", "Intro to Computing", now=now, **kwargs
    )


# cells ================================================================================


def test_cells_follow_assignment_order(assignments, students, now):
    # when
    matrix = build(assignments, students, now)

    # then
    for student in matrix.students:
        assert [c.assignment_id for c in student.grades] == [
            "hw1",
            "hw2",
            "lab1",
            "essay",
        ]


def test_cell_statuses(assignments, students, now):
    # when
    matrix = build(assignments, students, now)

    # then
    john, jane, barack = matrix.students
    assert [c.status for c in john.grades] == [
        CellStatus.GRADED,
        CellStatus.GRADED,
        CellStatus.PENDING,
        CellStatus.PENDING,
    ]
    assert [c.status for c in jane.grades] == [
        CellStatus.LATE,
        CellStatus.MISSING,
        CellStatus.PENDING,
        CellStatus.PENDING,
    ]
    assert [c.status for c in barack.grades] == [
        CellStatus.MISSING,
        CellStatus.MISSING,
        CellStatus.PENDING,
        CellStatus.PENDING,
    ]


def test_score_is_present_only_for_graded_cells(assignments, students, now):
    # when
    matrix = build(assignments, students, now)

    # then
    for student in matrix.students:
        for cell in student.grades:
            assert (cell.score is not None) == (cell.status is CellStatus.GRADED)

    assert matrix.students[0].cell("hw1").score == 90


# totals ===============================================================================


def test_totals_count_every_assignment_in_denominator(assignments, students, now):
    # when
    matrix = build(assignments, students, now)

    # then
    john = matrix.students[0]
    assert john.total_points == 175
    # 175 / 300, although only 200 points have been graded
    assert john.percentage == 58.33
    # the GPA only considers graded work: 175 / 200 = 87.5%, a B+
    assert john.gpa == 3.3


def test_student_without_grades_has_no_gpa(assignments, students, now):
    # when
    matrix = build(assignments, students, now)

    # then
    jane = matrix.students[1]
    assert jane.total_points == 0
    assert jane.percentage == 0.0
    assert jane.gpa is None


def test_no_assignments_gives_zero_percentage(now):
    # given
    students = [
        StudentRecord("s1", "Ada Lovelace", "ada@test.com"),
        StudentRecord("s2", "Alan Turing", "alan@test.com"),
    ]

    # when
    matrix = build([], students, now)

    # then
    assert matrix.assignments == ()
    assert len(matrix.students) == 2
    for student in matrix.students:
        assert student.grades == ()
        assert student.percentage == 0.0
        assert student.gpa is None


def test_gpa_uses_given_scale(assignments, students, now):
    # when
    matrix = build(assignments, students, now, scale=GPAScale(5.0))

    # then
    # B+ is 3.3 / 4.0 of the maximum
    assert matrix.students[0].gpa == 4.13


def test_no_students_gives_empty_matrix(assignments, now):
    # when
    matrix = build(assignments, [], now)

    # then
    assert matrix.students == ()
    assert len(matrix.assignments) == 4


# integrity ============================================================================


def test_inputs_are_not_mutated(assignments, students, now):
    # given
    before = [dict(s.submissions) for s in students]
    assignments_before = list(assignments)

    # when
    build(assignments, students, now)

    # then
    assert [dict(s.submissions) for s in students] == before
    assert assignments == assignments_before


def test_record_for_unknown_assignment_raises(assignments, now):
    # given
    students = [StudentRecord("s1", "A", "a@test.com", {"quiz9": Graded(5)})]

    # when/then
    with pytest.raises(GradebookIntegrityError):
        build(assignments, students, now)


def test_duplicate_assignment_ids_raise(now):
    # given
    assignments = [
        GradebookAssignment("hw1", "Homework 1", 10),
        GradebookAssignment("hw1", "Homework 1 again", 10),
    ]

    # when/then
    with pytest.raises(GradebookIntegrityError):
        build(assignments, [], now)


def test_matrix_rejects_misaligned_rows():
    # given
    assignments = [
        GradebookAssignment("hw1", "Homework 1", 10),
        GradebookAssignment("hw2", "Homework 2", 10),
    ]
    student = GradebookStudent(
        id="s1",
        name="A",
        email="a@test.com",
        grades=[
            GradebookCell("hw2", None, CellStatus.PENDING),
            GradebookCell("hw1", None, CellStatus.PENDING),
        ],
        total_points=0,
        percentage=0.0,
        gpa=None,
    )

    # when/then
    with pytest.raises(GradebookIntegrityError):
        GradebookMatrix([student], assignments, "CS101", "Intro")


def test_cell_requires_score_exactly_when_graded():
    with pytest.raises(GradebookIntegrityError):
        GradebookCell("hw1", None, CellStatus.GRADED)

    with pytest.raises(GradebookIntegrityError):
        GradebookCell("hw1", 10, CellStatus.PENDING)

    assert GradebookCell("hw1", 0, "graded").status is CellStatus.GRADED


def test_integrity_error_is_a_value_error():
    assert issubclass(GradebookIntegrityError, ValueError)


# now ==================================================================================


def test_now_defaults_to_current_time():
    # given
    long_ago = datetime.datetime(2000, 1, 1, tzinfo=datetime.timezone.utc)
    assignments = [GradebookAssignment("hw1", "Homework 1", 100, due_date=long_ago)]
    students = [StudentRecord("s1", "A", "a@test.com")]

    # when
    matrix = build_gradebook_matrix(assignments, students, "CS101", "Intro")

    # then
    assert matrix.students[0].grades[0].status is CellStatus.MISSING


def test_same_inputs_and_time_give_equal_matrices(assignments, students, now):
    assert build(assignments, students, now) == build(assignments, students, now)


# filters ==============================================================================


def test_student_filter_is_case_insensitive(assignments, students, now):
    # when
    matrix = build(
        assignments, students, now, filters=GradebookFilters(student_filter="SMITH")
    )

    # then
    assert [s.id for s in matrix.students] == ["s1"]


def test_assignment_filter_keeps_one_assignment(assignments, students, now):
    # when
    matrix = build(
        assignments, students, now, filters=GradebookFilters(assignment_id="hw2")
    )

    # then
    assert [a.id for a in matrix.assignments] == ["hw2"]
    john = matrix.students[0]
    assert john.total_points == 85
    assert john.percentage == 85.0


def test_date_range_filter_is_inclusive_and_drops_undated(assignments, students, now):
    # given
    due = assignments[0].due_date.date()

    # when
    matrix = build(
        assignments,
        students,
        now,
        filters=GradebookFilters(date_from=due, date_to=due),
    )

    # then
    assert [a.id for a in matrix.assignments] == ["hw1", "hw2"]


def test_date_range_filter_accepts_iso_strings(assignments, students, now):
    # when
    matrix = build(
        assignments,
        students,
        now,
        filters=GradebookFilters(date_from="2026-03-20"),
    )

    # then
    assert [a.id for a in matrix.assignments] == ["lab1"]


def test_status_filter_keeps_students_with_a_matching_cell(assignments, students, now):
    # when
    late = build(assignments, students, now, filters=GradebookFilters(status="late"))
    missing = build(
        assignments, students, now, filters=GradebookFilters(status=CellStatus.MISSING)
    )

    # then
    assert [s.id for s in late.students] == ["s2"]
    assert [s.id for s in missing.students] == ["s2", "s3"]


def test_invalid_filters_raise():
    with pytest.raises(ValueError):
        GradebookFilters(status="excused")

    with pytest.raises(ValueError):
        GradebookFilters(
            date_from=datetime.date(2026, 2, 1), date_to=datetime.date(2026, 1, 1)
        )

    with pytest.raises(ValueError):
        GradebookFilters(date_from="yesterday")


# logging ==============================================================================


def test_slow_builds_are_logged(assignments, students, now, caplog):
    # given
    gradecore.set_options(gradecore.GradingOptions(slow_build_threshold=-1))

    # when
    with caplog.at_level(logging.WARNING, logger="gradecore"):
        build(assignments, students, now)

    # then
    assert "CS101" in caplog.text


# pandas views =========================================================================


def test_points_earned_table(assignments, students, now):
    # when
    table = build(assignments, students, now).points_earned

    # then
    assert table.shape == (3, 4)
    assert table.loc["s1", "hw1"] == 90
    assert np.isnan(table.loc["s2", "hw1"])


def test_statuses_table(assignments, students, now):
    # when
    table = build(assignments, students, now).statuses

    # then
    assert table.loc["s2", "hw1"] == "late"
    assert table.loc["s3", "lab1"] == "pending"


def test_to_frame(assignments, students, now):
    # when
    frame = build(assignments, students, now).to_frame()

    # then
    assert list(frame.columns) == ["name", "email", "total points", "percentage", "gpa"]
    assert frame.loc["s1", "percentage"] == 58.33
    assert pd.isna(frame.loc["s2", "gpa"])


def test_points_possible(assignments, students, now):
    matrix = build(assignments, students, now)

    assert matrix.points_possible.sum() == 300
    assert matrix.total_possible_points == 300
