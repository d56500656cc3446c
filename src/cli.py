"""Console entry point for the Azure Bastion RDP connector."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List

from config import ConnectorConfig, TOOL_VERSION
from log_utils import setup_logging
from session import BastionSession


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Find VMs reachable through Azure Bastion and open an RDP session "
            "with Entra ID / MFA authentication."
        )
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to PATH")
    parser.add_argument(
        "--skip-update",
        action="store_true",
        help="Do not check for a newer version of this script",
    )
    parser.add_argument("--version", action="version", version=TOOL_VERSION)
    return parser


def main(argv: List[str] | None = None, script_path: str | None = None) -> int:
    """CLI main for console_scripts entry point."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(args=argv)

    setup_logging(verbose=args.verbose, log_file=args.log_file)

    if script_path is None:
        script_path = os.path.abspath(sys.argv[0])
    config = ConnectorConfig.from_args(args, script_path=script_path)

    return BastionSession(config).run(argv)
