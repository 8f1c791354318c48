"""Process-wide configuration of the grading core."""

import dataclasses
import logging
import math
import os
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

DEFAULT_GPA_SCALE = 4.0


def _parse_gpa_scale(raw: Optional[str]) -> float:
    """Parse the ``GPA_SCALE`` setting, falling back to the default scale.

    Empty or missing values silently give the default. Values which are not
    positive, finite numbers are reported and replaced with the default.

    """
    if not raw:
        return DEFAULT_GPA_SCALE

    try:
        parsed = float(raw)
    except ValueError:
        parsed = math.nan

    if not math.isfinite(parsed) or parsed <= 0:
        logger.warning(
            'Invalid GPA_SCALE value "%s". Falling back to default %s',
            raw,
            DEFAULT_GPA_SCALE,
        )
        return DEFAULT_GPA_SCALE

    return parsed


@dataclasses.dataclass
class GradingOptions:
    """Configures the behavior of the grading core.

    Attributes
    ----------
    gpa_scale : float
        The maximum GPA of the default scale. Common values are 4.0, 5.0, 10.0
        and 100.0. Default: 4.0.
    slow_build_threshold : float
        Number of seconds after which building a gradebook matrix is reported
        as slow. Default: 2.0.

    """

    gpa_scale: float = DEFAULT_GPA_SCALE
    slow_build_threshold: float = 2.0

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "GradingOptions":
        """Read options from environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]]
            The environment to read. Default: :data:`os.environ`.

        Returns
        -------
        GradingOptions

        Notes
        -----
        Only ``GPA_SCALE`` is read. An invalid value is logged as a warning and
        the default scale of 4.0 is used instead.

        """
        if environ is None:
            environ = os.environ

        return cls(gpa_scale=_parse_gpa_scale(environ.get("GPA_SCALE")))


_options: Optional[GradingOptions] = None


def get_options() -> GradingOptions:
    """The process default options, read from the environment on first use."""
    global _options
    if _options is None:
        _options = GradingOptions.from_environment()
    return _options


def set_options(options: Optional[GradingOptions]):
    """Replace the process default options.

    Passing ``None`` discards the current options so that they are read from
    the environment again on next use.

    """
    global _options
    _options = options


def get_gpa_scale() -> float:
    """The maximum GPA of the default scale."""
    return get_options().gpa_scale
