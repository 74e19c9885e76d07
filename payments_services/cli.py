"""
Payments engine command line.

Reads transactions from a CSV file (or stdin), tallies them on a ledger and
writes the final state of every account as CSV to stdout.

Usage:
    payments transactions.csv > accounts.csv
    payments -v transactions.csv > accounts.csv        # log rejections to stderr
    cat transactions.csv | payments --config engine.yaml

The run continues past malformed rows and rejected transactions. The exit
status is non-zero only when the input file cannot be opened or the
configuration is invalid.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

import yaml

from payments_config.loader import load_engine_config
from payments_config.schema import EngineConfig
from payments_ingestion.adapters.csv_adapter import wrap_binary
from payments_kernel import __version__
from payments_kernel.logging_config import configure_logging, get_logger
from payments_services.engine_service import EngineService

logger = get_logger("services.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="payments",
        description="Tally a CSV of transactions into per-client account states.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input_path",
        nargs="?",
        type=Path,
        default=None,
        help="Path to the input CSV file. Reads stdin when omitted.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log rejected rows and transactions to stderr.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Engine configuration YAML (default: $PAYMENTS_CONFIG, else built-in defaults).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (overrides --verbose and the configuration).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _log_level(args: argparse.Namespace, config: EngineConfig) -> str:
    if args.log_level:
        return args.log_level
    return config.verbose_log_level if args.verbose else config.log_level


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = _parse_args(argv)

    try:
        config = load_engine_config(args.config)
        configure_logging(level=_log_level(args, config), stream=stderr)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"error: invalid configuration: {e}", file=stderr)
        return 1

    service = EngineService(config)
    if args.input_path is None:
        if stdin is None:
            stdin = wrap_binary(sys.stdin.buffer, config.source_options)
        report = service.run_stream(stdin)
    else:
        try:
            report = service.run_path(args.input_path)
        except OSError as e:
            logger.error("input_open_failed", extra={"path": str(args.input_path)})
            print(f"error: cannot read {args.input_path}: {e}", file=stderr)
            return 1

    service.write(report, stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
