import datetime

import pytest

import gradecore
from gradecore import (
    GradebookAssignment,
    Graded,
    NoSubmission,
    StudentRecord,
    Submitted,
)


NOW = datetime.datetime(2026, 3, 15, 12, 0, tzinfo=datetime.timezone.utc)
PAST = NOW - datetime.timedelta(days=7)
FUTURE = NOW + datetime.timedelta(days=7)


@pytest.fixture(autouse=True)
def default_options():
    """Every test starts on the 4.0 scale, whatever the environment says."""
    gradecore.set_options(gradecore.GradingOptions())
    yield
    gradecore.set_options(None)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def assignments():
    return [
        GradebookAssignment("hw1", "Homework 1", 100, due_date=PAST),
        GradebookAssignment("hw2", "Homework 2", 100, due_date=PAST),
        GradebookAssignment("lab1", "Lab 1", 50, due_date=FUTURE),
        GradebookAssignment("essay", "Essay", 50, due_date=None),
    ]


@pytest.fixture
def students():
    return [
        StudentRecord(
            "s1",
            "John Smith",
            "john@test.com",
            {
                "hw1": Graded(90, at=PAST),
                "hw2": Graded(85),
                "lab1": Submitted(at=NOW),
            },
        ),
        StudentRecord(
            "s2",
            "Jane Doe",
            "jane@test.com",
            {
                "hw1": Submitted(at=PAST),
                "essay": NoSubmission(),
            },
        ),
        StudentRecord("s3", "Barack Obama", "barack@test.com"),
    ]
