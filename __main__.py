#!/usr/bin/env python3
"""
CalcPad - Four-Function Calculator
Entry Point Module
Runs the command line from a source checkout (``python path/to/calcpad``).
"""
import sys
import time
from pathlib import Path

# Top-level modules are importable only once the checkout is on the path
current_dir = Path(__file__).resolve().parent
if str(current_dir) not in sys.path:
    sys.path.insert(0, str(current_dir))

from cli import main  # noqa: E402

if __name__ == "__main__":
    start_time = time.time()
    exit_code = main()
    print(f"\nCalcPad ran for {time.time() - start_time:.2f} seconds")
    sys.exit(exit_code)
