"""
Standalone Verification Module for the Gaussian Elimination Solver.

This module checks the solver against golden values stored next to each
input file. It is isolated from the solver package and imports it as a
dependency.

Key Components:
- schemas: golden file validation and expected outcomes
- loader: Discovers and loads test cases from test_values/
- runner: Executes the solver for each case
- comparator: Computes error statistics
- reporter: Generates Excel validation reports
- cli: Command-line interface

Usage:
    python run_verification.py [--case CASE] [--output PATH]
"""

from .schemas import ValidationError, expected_outcome, validate_golden, validate_input
from .loader import TestCase, TestLoader
from .runner import TestRunner, SolverResults
from .comparator import FieldComparison, CaseComparison, compare_results
from .reporter import VerificationReporter

__all__ = [
    "ValidationError",
    "expected_outcome",
    "validate_golden",
    "validate_input",
    "TestCase",
    "TestLoader",
    "TestRunner",
    "SolverResults",
    "FieldComparison",
    "CaseComparison",
    "compare_results",
    "VerificationReporter",
]
