"""
Configuration management for the Azure Bastion RDP connector.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from models import RequiredExtension, VersionMarker

TOOL_VERSION = "1.4.0"

DEFAULT_SOURCE_URL = "https://raw.githubusercontent.com/yourusername/bastion-rdp-connect/main"
DEFAULT_VERSION_URL = f"{DEFAULT_SOURCE_URL}/VERSION"

VERSION_URL_ENV = "BASTION_CONNECT_VERSION_URL"
SOURCE_URL_ENV = "BASTION_CONNECT_SOURCE_URL"

# `az network bastion rdp --enable-mfa` needs bastion >= 1.3.0
DEFAULT_REQUIRED_EXTENSIONS = (
    RequiredExtension("bastion", VersionMarker(1, 3, 0)),
    RequiredExtension("resource-graph", VersionMarker(2, 1, 0)),
)


def _default_extensions() -> List[RequiredExtension]:
    return list(DEFAULT_REQUIRED_EXTENSIONS)


@dataclass
class ConnectorConfig:
    """Configuration for a Bastion connect session."""

    version_url: str = DEFAULT_VERSION_URL
    source_url: str = DEFAULT_SOURCE_URL
    script_path: Optional[str] = None
    current_version: str = TOOL_VERSION
    required_extensions: List[RequiredExtension] = field(
        default_factory=_default_extensions
    )
    cli_name: str = "az"
    http_timeout: int = 30
    start_grace_seconds: float = 5.0
    launch_pause_seconds: float = 3.0
    min_python: Tuple[int, int] = (3, 10)
    skip_update: bool = False
    verbose: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_args(cls, args, script_path: Optional[str] = None) -> "ConnectorConfig":
        """
        Create configuration from command-line arguments.

        Update endpoints can be overridden through the
        BASTION_CONNECT_VERSION_URL and BASTION_CONNECT_SOURCE_URL
        environment variables.

        Args:
            args: Parsed argparse arguments
            script_path: Path of the script file to keep up to date

        Returns:
            ConnectorConfig instance
        """
        return cls(
            version_url=os.environ.get(VERSION_URL_ENV, DEFAULT_VERSION_URL),
            source_url=os.environ.get(SOURCE_URL_ENV, DEFAULT_SOURCE_URL),
            script_path=script_path,
            skip_update=args.skip_update,
            verbose=args.verbose,
            log_file=args.log_file,
        )
