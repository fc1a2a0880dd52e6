#!/usr/bin/env python
"""
Gaussian Elimination Solver Entry Point.

Usage:
    python run_solver.py                              # input.txt -> output.txt
    python run_solver.py -i system.txt -o result.txt  # Explicit files
    python run_solver.py --verify                     # Check against golden.txt

For more options:
    python run_solver.py --help
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gauss.cli import main

if __name__ == "__main__":
    sys.exit(main())
