"""Grade computations for a learning-management system.

Converts percentages to letter grades and GPAs, aggregates graded work into
course and overall GPAs, builds gradebook matrices from submission records, and
exports them as CSV.

"""

import logging

from .config import GradingOptions, get_options, set_options
from .exceptions import GradebookIntegrityError
from .scales import (
    GRADE_THRESHOLDS,
    LETTER_GRADE_POINTS,
    LETTER_GRADES,
    GPAScale,
    get_gpa_scale,
    letter_grade_to_gpa,
    map_percentages_to_letter_grades,
    percentage_to_gpa,
    percentage_to_letter_grade,
)
from .core import (
    GradedItem,
    GPAResult,
    calculate_gpa,
    calculate_simple_gpa,
    calculate_overall_gpa,
    CellStatus,
    NoSubmission,
    Submitted,
    Graded,
    classify_cell,
    GradebookAssignment,
    GradebookCell,
    GradebookStudent,
    GradebookMatrix,
    GradebookFilters,
    StudentRecord,
    build_gradebook_matrix,
)

from . import io
from . import scales
from . import summarize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GradingOptions",
    "get_options",
    "set_options",
    "GradebookIntegrityError",
    "GRADE_THRESHOLDS",
    "LETTER_GRADE_POINTS",
    "LETTER_GRADES",
    "GPAScale",
    "get_gpa_scale",
    "letter_grade_to_gpa",
    "map_percentages_to_letter_grades",
    "percentage_to_gpa",
    "percentage_to_letter_grade",
    "GradedItem",
    "GPAResult",
    "calculate_gpa",
    "calculate_simple_gpa",
    "calculate_overall_gpa",
    "CellStatus",
    "NoSubmission",
    "Submitted",
    "Graded",
    "classify_cell",
    "GradebookAssignment",
    "GradebookCell",
    "GradebookStudent",
    "GradebookMatrix",
    "GradebookFilters",
    "StudentRecord",
    "build_gradebook_matrix",
    "io",
    "scales",
    "summarize",
]
