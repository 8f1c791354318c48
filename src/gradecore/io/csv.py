"""Export a gradebook as CSV.

The export is UTF-8 text beginning with a byte order mark, so that spreadsheet
programs detect the encoding. Fields are separated by commas and rows by
``\\n``. Fields containing commas, quotes or line breaks are quoted, with
embedded quotes doubled, as in RFC 4180.

Percentages are written like every other number, with as many decimals as
they carry after rounding: ``58.33%``, ``87.5%`` and ``0%``. They are not
padded or cut to one decimal place.

"""

import dataclasses
import datetime
import logging
import pathlib as _pathlib
import re
from typing import Optional, Union

from .._util import format_number, is_number
from ..core import CellStatus, GradebookMatrix


logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"

#: the number of columns which are not assignments: name, email, total, %, GPA
FIXED_COLUMN_COUNT = 5

#: rough average size of an exported cell, in bytes
ESTIMATED_BYTES_PER_CELL = 20

_NEEDS_QUOTING = re.compile(r'[,"\n\r]')
_UNSAFE_FILENAME_CHARACTERS = re.compile(r"[^A-Za-z0-9_-]+")


@dataclasses.dataclass(frozen=True)
class ExportValidation:
    """Whether a gradebook can be exported, and why not."""

    is_valid: bool
    error: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class ExportStats:
    """The size and shape of an export."""

    student_count: int
    assignment_count: int
    total_cells: int
    estimated_size: int


def escape_csv(value: Union[None, str, int, float]) -> str:
    """Render a value as a CSV field.

    ``None`` becomes ``"N/A"``. Numbers are written in decimal, with integral
    values lacking a trailing ``.0``. Strings which contain a comma, quote or
    line break are wrapped in quotes and their quotes are doubled; other
    strings (including the empty string) are unchanged.

    Example
    -------
    >>> print(escape_csv('Smith, "Johnny" John'))
    "Smith, ""Johnny"" John"

    """
    if value is None:
        return "N/A"

    if is_number(value):
        text = format_number(value)
    else:
        text = str(value)

    if _NEEDS_QUOTING.search(text):
        return '"' + text.replace('"', '""') + '"'

    return text


def _cell_field(cell) -> str:
    if cell.status is CellStatus.GRADED:
        return escape_csv(cell.score)
    return escape_csv(cell.status.value)


def generate_gradebook_csv(matrix: GradebookMatrix) -> str:
    """Generate the CSV export of a gradebook.

    The first row is a header:
    ``Student Name, Email, <title> (<max points>)..., Total Points, Percentage, GPA``.
    Each following row is a student. Graded assignments show the score; others
    show the cell's status. The total is written as ``earned/possible``, the
    percentage with a ``%`` suffix, and the GPA with two decimals (or ``N/A``).

    Parameters
    ----------
    matrix : GradebookMatrix
        The gradebook to export.

    Returns
    -------
    str
        The CSV text, starting with a byte order mark.

    """
    total_possible = matrix.total_possible_points

    header = [
        "Student Name",
        "Email",
        *(f"{a.title} ({format_number(a.max_points)})" for a in matrix.assignments),
        "Total Points",
        "Percentage",
        "GPA",
    ]
    rows = [",".join(escape_csv(field) for field in header)]

    for student in matrix.students:
        gpa = None if student.gpa is None else f"{student.gpa:.2f}"
        fields = [
            escape_csv(student.name),
            escape_csv(student.email),
            *(_cell_field(cell) for cell in student.grades),
            escape_csv(
                f"{format_number(student.total_points)}/{format_number(total_possible)}"
            ),
            escape_csv(f"{format_number(student.percentage)}%"),
            escape_csv(gpa),
        ]
        rows.append(",".join(fields))

    return UTF8_BOM + "\n".join(rows)


def generate_csv_filename(
    course_code: str, today: Optional[datetime.date] = None
) -> str:
    """The filename of a gradebook export.

    The filename has the form ``<course code>_grades_<YYYY-MM-DD>.csv``, where
    each run of characters in the course code other than letters, digits,
    ``_`` and ``-`` is replaced by a single underscore.

    Parameters
    ----------
    course_code : str
    today : Optional[datetime.date]
        The date to put in the filename. Default: today's date.

    """
    if today is None:
        today = datetime.date.today()
    safe_code = _UNSAFE_FILENAME_CHARACTERS.sub("_", course_code)
    return f"{safe_code}_grades_{today.strftime('%Y-%m-%d')}.csv"


def validate_export_data(matrix: GradebookMatrix) -> ExportValidation:
    """Check that a gradebook has something to export.

    A gradebook without students cannot be exported. A gradebook with students
    but no assignments can; the export contains only student information.

    """
    if not matrix.students:
        return ExportValidation(
            is_valid=False, error="No students to export. The gradebook is empty."
        )
    return ExportValidation(is_valid=True)


def get_export_stats(matrix: GradebookMatrix) -> ExportStats:
    """Compute the shape of an export, and roughly how large it will be.

    The estimated size is only meant for progress displays.

    """
    student_count = len(matrix.students)
    assignment_count = len(matrix.assignments)
    total_cells = student_count * (assignment_count + FIXED_COLUMN_COUNT)
    return ExportStats(
        student_count=student_count,
        assignment_count=assignment_count,
        total_cells=total_cells,
        estimated_size=total_cells * ESTIMATED_BYTES_PER_CELL,
    )


def write(
    path: Union[str, _pathlib.Path], matrix: GradebookMatrix
) -> _pathlib.Path:
    """Writes the CSV export of a gradebook to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path of the file to write. If this is a directory, the file is
        written inside of it with the name given by
        :func:`generate_csv_filename`.
    matrix : GradebookMatrix
        The gradebook to export.

    Returns
    -------
    pathlib.Path
        The path of the written file.

    Raises
    ------
    ValueError
        If the gradebook has no students.

    """
    validation = validate_export_data(matrix)
    if not validation.is_valid:
        raise ValueError(validation.error)

    path = _pathlib.Path(path)
    if path.is_dir():
        path = path / generate_csv_filename(matrix.course_code)

    text = generate_gradebook_csv(matrix)
    with path.open("w", encoding="utf-8", newline="") as fileobj:
        fileobj.write(text)

    stats = get_export_stats(matrix)
    logger.info(
        "Exported gradebook for %s to %s: %d students x %d assignments (%d cells)",
        matrix.course_code,
        path,
        stats.student_count,
        stats.assignment_count,
        stats.total_cells,
    )

    return path
