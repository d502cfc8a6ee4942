"""
CalcPad - Four-Function Calculator
Command Line Module
Handles dependency checking, argument parsing, logging setup and
application startup.
"""
import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Optional, List

VERSION = "1.0.0"


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="CalcPad - Four-Function Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  calcpad                             # Start the calculator
  calcpad --check-deps                # Check dependencies only
  calcpad --debug                     # Start with debug logging
  calcpad --log-dir ./logs            # Custom log directory
        """
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"CalcPad {VERSION}"
    )
    parser.add_argument(
        "--check-deps", "-c",
        action="store_true",
        help="Check dependencies and exit"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force start application even if dependencies are missing"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Custom directory for log files"
    )
    return parser.parse_args(argv)


def check_dependencies() -> bool:
    """Check if required dependencies are available."""
    # Package name mapping: display_name -> (import_name, description)
    required_packages = {
        'PySide6': ('PySide6', 'GUI framework'),
    }

    missing_required = []

    print(f"Python version: {sys.version}")
    print(f"Python executable: {sys.executable}\n")

    for display_name, (import_name, description) in required_packages.items():
        try:
            module = __import__(import_name)
            if import_name == 'PySide6':
                from PySide6 import QtCore, QtWidgets, QtGui  # noqa: F401
            print(f"OK {display_name}: {description} (version: {getattr(module, '__version__', 'unknown')})")
        except ImportError as e:
            missing_required.append(f"{display_name} ({description})")
            print(f"ERROR {display_name}: {description} - MISSING")
            print(f"   Import error: {e}")

    if missing_required:
        print("\nMissing required dependencies:")
        for package in missing_required:
            print(f"   - {package}")
        install_commands = [package.split()[0] for package in missing_required]
        print("\nTry installing with:")
        print(f"   {sys.executable} -m pip install " + " ".join(install_commands))
        return False

    return True


def setup_environment(log_dir: Optional[str] = None) -> Path:
    """Prepare Qt scaling and the log directory; returns the log directory."""
    os.environ.setdefault('QT_ENABLE_HIGHDPI_SCALING', '1')

    if log_dir:
        return Path(log_dir)

    default_log_dir = Path.home() / "CalcPad" / "logs"
    default_log_dir.mkdir(parents=True, exist_ok=True)
    return default_log_dir


def setup_logging(args: argparse.Namespace):
    """Configure the global logger from command line options."""
    from logger import LogLevel, setup_logger

    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = setup_logger(log_dir=log_dir)
    if args.debug:
        logger.set_log_level(LogLevel.DEBUG)
    else:
        logger.set_log_level(LogLevel.INFO)
    return logger


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CalcPad."""
    args = None
    try:
        args = parse_arguments(argv)

        print("\n" + "=" * 40)
        print(f"CalcPad {VERSION}")
        print("=" * 40 + "\n")

        setup_environment(args.log_dir)

        print("Checking dependencies...")
        deps_ok = check_dependencies()

        if args.check_deps:
            if deps_ok:
                print("\nAll dependencies are satisfied!")
                return 0
            print("\nSome dependencies are missing!")
            return 1

        if not args.force and not deps_ok:
            print("\nCannot start application due to missing dependencies.")
            print("Use --force to attempt startup anyway, or install missing packages.")
            return 1

        if not deps_ok:
            print("\nStarting with missing dependencies (--force specified)\n")

        if args.debug:
            print("Debug logging enabled\n")
        setup_logging(args)

        from main import main as run_main
        return run_main()

    except KeyboardInterrupt:
        print("\n\nApplication interrupted by user")
        return 130
    except Exception as e:
        print("\nCritical error starting CalcPad:")
        print(f"   {type(e).__name__}: {e}")
        if args is not None and args.debug:
            print("\nDebug traceback:")
            traceback.print_exc()
        else:
            print("\nRun with --debug for detailed error information")
        return 1

