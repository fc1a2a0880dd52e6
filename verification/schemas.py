"""
Golden File Validation for Verification Module.

A golden file holds one line.  It is either the expected solution, as
whitespace-separated numbers in unknown order, or one of the failure texts
the solver writes to its output file:

    -1 2            expected solution x0 = -1, x1 = 2
    no solution     expected inconsistent or singular system
    wrong input     expected malformed input (legacy spelling accepted)
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from gauss.files import (
    FAILURE_TEXTS,
    OUTCOME_NO_SOLUTION,
    OUTCOME_SOLVED,
    OUTCOME_WRONG_INPUT,
    InputFormatError,
    golden_outcome,
    parse_input,
)


# =============================================================================
# Validation Functions
# =============================================================================

@dataclass
class ValidationError:
    """Represents a golden or input validation error."""
    path: str
    message: str
    value: Any = None


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def expected_outcome(tokens: List[str]) -> Optional[str]:
    """
    Classify golden tokens.

    Args:
        tokens: Raw tokens from the golden file

    Returns:
        One of the OUTCOME_* names, or None if the tokens are not understood
    """
    return golden_outcome(tokens)


def validate_golden(tokens: List[str]) -> List[ValidationError]:
    """
    Validate golden tokens.

    Args:
        tokens: Raw tokens from the golden file

    Returns:
        List of validation errors (empty if valid)
    """
    errors: List[ValidationError] = []

    if not tokens:
        errors.append(ValidationError("golden", "Golden file is empty"))
        return errors

    if expected_outcome(tokens) is None:
        bad = [t for t in tokens if not _is_number(t)]
        errors.append(ValidationError(
            "golden",
            f"Golden values must be numbers or a failure text, got {bad[:3]}",
            tokens,
        ))

    return errors


def validate_input(text: str, outcome: Optional[str]) -> List[ValidationError]:
    """
    Validate input text against the outcome its golden file expects.

    Unparseable or malformed input is a legitimate case when the golden file
    expects the wrong-input text; otherwise the input must parse.

    Args:
        text: Raw input file contents
        outcome: Expected outcome from :func:`expected_outcome`

    Returns:
        List of validation errors (empty if valid)
    """
    errors: List[ValidationError] = []
    if outcome == OUTCOME_WRONG_INPUT:
        return errors
    try:
        parse_input(text)
    except InputFormatError as e:
        errors.append(ValidationError(
            "input",
            f"Input cannot be parsed but golden expects '{outcome}': {e}",
        ))
    return errors


__all__ = [
    "OUTCOME_SOLVED",
    "OUTCOME_NO_SOLUTION",
    "OUTCOME_WRONG_INPUT",
    "FAILURE_TEXTS",
    "ValidationError",
    "expected_outcome",
    "validate_golden",
    "validate_input",
]
