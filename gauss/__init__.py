"""Gaussian elimination solver for augmented linear systems."""

from .matrix import AugmentedMatrix, MatrixIndexError
from .elimination import (
    DEFAULT_PIVOT_TOLERANCE,
    SolveResult,
    SolveStatus,
    gauss,
    gauss_backward,
    gauss_forward,
)
from .config import OutputMessages, SolverConfig
from .files import (
    InputFormatError,
    OutputFile,
    check_input,
    format_value,
    golden_outcome,
    parse_input,
    read_golden,
    read_input,
    write_in_file,
    written_outcome,
)

__all__ = [
    "AugmentedMatrix",
    "MatrixIndexError",
    "DEFAULT_PIVOT_TOLERANCE",
    "SolveResult",
    "SolveStatus",
    "gauss",
    "gauss_backward",
    "gauss_forward",
    "OutputMessages",
    "SolverConfig",
    "InputFormatError",
    "OutputFile",
    "check_input",
    "format_value",
    "golden_outcome",
    "parse_input",
    "read_golden",
    "read_input",
    "write_in_file",
    "written_outcome",
]
