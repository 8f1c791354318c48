from ._items import GradedItem, GPAResult
from ._aggregate import calculate_gpa, calculate_simple_gpa, calculate_overall_gpa
from ._submissions import (
    CellStatus,
    NoSubmission,
    Submitted,
    Graded,
    SubmissionState,
    classify_cell,
)
from ._gradebook import (
    GradebookAssignment,
    GradebookCell,
    GradebookStudent,
    GradebookMatrix,
    GradebookFilters,
    StudentRecord,
    build_student_row,
    build_gradebook_matrix,
)

__all__ = [
    "GradedItem",
    "GPAResult",
    "calculate_gpa",
    "calculate_simple_gpa",
    "calculate_overall_gpa",
    "CellStatus",
    "NoSubmission",
    "Submitted",
    "Graded",
    "SubmissionState",
    "classify_cell",
    "GradebookAssignment",
    "GradebookCell",
    "GradebookStudent",
    "GradebookMatrix",
    "GradebookFilters",
    "StudentRecord",
    "build_student_row",
    "build_gradebook_matrix",
]
