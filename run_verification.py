#!/usr/bin/env python
"""
Verification Suite Entry Point.

Run the Gaussian elimination solver against the golden values in test_values/.

Usage:
    python run_verification.py                       # Run all tests
    python run_verification.py --case simple_2x2     # Run specific case
    python run_verification.py --list                # List available tests
    python run_verification.py --create-sample c07   # Create sample case files

For more options:
    python run_verification.py --help
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from verification.cli import main

if __name__ == "__main__":
    sys.exit(main())
