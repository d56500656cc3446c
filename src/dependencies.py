"""
Checks that the az CLI and its required extensions are installed.
"""

import logging
from typing import Iterable

from clients import AzCliClient, AzCliError
from models import RequiredExtension

logger = logging.getLogger(__name__)


class DependencyChecker:
    """Ensures az and its extensions meet the minimum versions."""

    def __init__(self, api: AzCliClient, required: Iterable[RequiredExtension]):
        self.api = api
        self.required = list(required)

    def ensure_extension(self, requirement: RequiredExtension) -> bool:
        """
        Install or upgrade a single extension if needed.

        At most one mutating call is made; the installed version is then
        re-read to confirm it now satisfies the minimum.

        Args:
            requirement: Extension name and minimum version

        Returns:
            True if the extension is installed at or above the minimum
        """
        name = requirement.name
        try:
            info = self.api.get_extension(name)
        except AzCliError as e:
            logger.critical(f"Cannot list az extensions: {e}")
            return False

        if info is not None and info.version >= requirement.min_version:
            logger.debug(f"Extension '{name}' {info.version} is up to date")
            return True

        try:
            if info is None:
                logger.info(f"Installing az extension '{name}'...")
                self.api.add_extension(name)
            else:
                logger.info(
                    f"Updating az extension '{name}' from {info.version} "
                    f"(minimum {requirement.min_version})..."
                )
                self.api.update_extension(name)
        except AzCliError as e:
            logger.error(f"Could not install or update extension '{name}': {e}")

        try:
            info = self.api.get_extension(name)
        except AzCliError as e:
            logger.critical(f"Cannot list az extensions: {e}")
            return False

        if info is None or info.version < requirement.min_version:
            found = info.version if info else "not installed"
            logger.critical(
                f"az extension '{name}' {requirement.min_version} or later is required "
                f"(found: {found}). Update it manually with: "
                f"az extension update --name {name}"
            )
            return False

        logger.info(f"az extension '{name}' {info.version} is ready")
        return True

    def check(self) -> bool:
        """
        Verify the CLI is installed and every required extension is usable.

        Returns:
            True if the session may continue
        """
        if not self.api.executable():
            logger.critical(
                f"The Azure CLI ('{self.api.cli_name}') was not found on PATH. "
                "Install it from https://aka.ms/installazurecli and sign in with 'az login'."
            )
            return False

        for requirement in self.required:
            if not self.ensure_extension(requirement):
                return False
        return True
