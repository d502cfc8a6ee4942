"""Test package initialisation for CalcPad."""

from pathlib import Path
import sys

# The project uses top-level modules (``calculator_engine``, ``logger``...)
# so the repository root must be importable when pytest changes directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
