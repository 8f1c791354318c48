"""Exceptions raised by the grading core."""


class GradebookIntegrityError(ValueError):
    """Raised when gradebook inputs are structurally inconsistent.

    For instance, a grade recorded against an assignment which is not part of
    the gradebook, or a student row whose cells do not line up with the
    gradebook's assignments. This is distinct from a lack of data, which is
    represented by ``None`` throughout the package.

    """
