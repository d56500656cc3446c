"""
Azure Bastion RDP Connect.
"""

from clients import AzCliClient, AzCliError
from config import ConnectorConfig, TOOL_VERSION
from log_utils import setup_logging
from models import BastionTarget, Choice, ExtensionInfo, RequiredExtension, VersionMarker
from session import BastionSession
from updater import SelfUpdater

__version__ = TOOL_VERSION

__all__ = [
    "AzCliClient",
    "AzCliError",
    "ConnectorConfig",
    "setup_logging",
    "BastionTarget",
    "Choice",
    "ExtensionInfo",
    "RequiredExtension",
    "VersionMarker",
    "BastionSession",
    "SelfUpdater",
]
