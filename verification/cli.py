"""
Command-Line Interface for Verification Module.

Provides CLI commands for running verification tests and generating reports.

Usage:
    python run_verification.py [OPTIONS]

Options:
    --case CASE         Run only specified case(s)
    --output PATH       Output Excel report path
    --verbose           Print detailed progress
    --list              List available test cases
    --create-sample ID  Create sample input/golden files for case ID
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from gauss import OutputMessages

from .comparator import CaseComparison, compare_results
from .loader import TestLoader, create_sample_case
from .reporter import VerificationReporter, generate_markdown_summary
from .runner import TestRunner


def run_verification(
    test_dir: str = "test_values",
    cases: Optional[List[str]] = None,
    output_path: Optional[str] = "reports/verification_report.xlsx",
    verbose: bool = False,
    include_charts: bool = False,
    legacy_messages: bool = False,
) -> List[CaseComparison]:
    """
    Run the verification suite.

    Args:
        test_dir: Path to test_values directory
        cases: Optional list of case IDs to run (None = all)
        output_path: Path for Excel report (None = no report)
        verbose: Print progress messages
        include_charts: Add solver vs golden charts to the report
        legacy_messages: Render failures with the legacy output texts

    Returns:
        List of CaseComparison results
    """
    loader = TestLoader(test_dir)

    if cases:
        loaded = [loader.load_single(c) for c in cases]
        test_cases = [c for c in loaded if c is not None]
    else:
        test_cases = loader.discover()

    if not test_cases:
        print(f"No test cases found in {test_dir}/")
        return []

    if verbose:
        print(f"Found {len(test_cases)} test case(s)")

    valid_cases = [c for c in test_cases if c.is_valid]
    invalid_cases = [c for c in test_cases if not c.is_valid]

    if invalid_cases and verbose:
        print(f"\nSkipping {len(invalid_cases)} invalid case(s):")
        for case in invalid_cases:
            print(f"  - {case.case_id}: {case.errors[0].message if case.errors else 'Unknown error'}")

    if not valid_cases:
        print("No valid test cases to run")
        return []

    messages = OutputMessages.legacy() if legacy_messages else OutputMessages()
    runner = TestRunner(messages=messages, verbose=verbose)
    reporter = VerificationReporter(output_path, include_charts=include_charts)
    comparisons: List[CaseComparison] = []

    for case in valid_cases:
        solver_result = runner.run_case(case)
        comparison = compare_results(case, solver_result)
        comparisons.append(comparison)
        reporter.add_case_comparison(comparison, solver_result)

        if verbose:
            status = "PASS" if comparison.overall_pass else "FAIL"
            print(f"  {case.case_id}: {status} (max error: {comparison.overall_max_rel_error:.3e}%)")
            for note in comparison.notes:
                print(f"      {note}")

    if output_path:
        reporter.save(output_path)
        print(f"\nReport saved to: {output_path}")

    passed = sum(1 for c in comparisons if c.overall_pass)
    print(f"\nSummary: {passed}/{len(comparisons)} passed")

    return comparisons


def list_test_cases(test_dir: str = "test_values"):
    """List available test cases."""
    loader = TestLoader(test_dir)
    cases = loader.discover()

    if not cases:
        print(f"No test cases found in {test_dir}/")
        return

    print(f"\nAvailable test cases in {test_dir}/:")
    print("-" * 60)

    for case in cases:
        status = "✓" if case.is_valid else "✗"
        print(f"  {status} {case.case_id}")
        print(f"      Input: {case.input_path.name}")
        print(f"      Golden: {case.golden_path.name}")
        print(f"      Expects: {case.outcome or 'unknown'}")
        if not case.is_valid:
            for error in case.errors[:2]:
                print(f"      Error: {error.message}")
        print()


def create_sample(case_id: str, test_dir: str = "test_values"):
    """Create sample input and golden files for a case."""
    paths = create_sample_case(case_id, Path(test_dir))
    for path in paths:
        print(f"Created sample file: {path}")
    print("Edit these files with the system to verify and its expected solution.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Verification Suite - Compare solver results against golden values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_verification.py                       # Run all tests
  python run_verification.py --case simple_2x2     # Run specific case
  python run_verification.py --list                # List available tests
  python run_verification.py --create-sample c07   # Create sample case files
        """
    )

    parser.add_argument(
        "--case", "-c",
        action="append",
        help="Case ID(s) to run (can specify multiple times)"
    )
    parser.add_argument(
        "--output", "-o",
        default="reports/verification_report.xlsx",
        help="Output Excel report path (default: reports/verification_report.xlsx)"
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Do not write the Excel report"
    )
    parser.add_argument(
        "--test-dir", "-d",
        default="test_values",
        help="Directory containing test files (default: test_values)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed progress"
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List available test cases"
    )
    parser.add_argument(
        "--create-sample",
        metavar="CASE_ID",
        help="Create sample input/golden files for the specified case ID"
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Also output Markdown summary to console"
    )
    parser.add_argument(
        "--charts",
        action="store_true",
        help="Embed solver vs golden charts in the report (needs kaleido)"
    )
    parser.add_argument(
        "--legacy-messages",
        action="store_true",
        help="Render malformed input as the legacy 'wrong imput' text"
    )

    args = parser.parse_args(argv)

    if args.list:
        list_test_cases(args.test_dir)
        return 0

    if args.create_sample:
        create_sample(args.create_sample, args.test_dir)
        return 0

    comparisons = run_verification(
        test_dir=args.test_dir,
        cases=args.case,
        output_path=None if args.no_report else args.output,
        verbose=args.verbose,
        include_charts=args.charts,
        legacy_messages=args.legacy_messages,
    )

    if args.markdown and comparisons:
        print("\n" + generate_markdown_summary(comparisons))

    if not comparisons:
        return 1
    if all(c.overall_pass for c in comparisons):
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
