"""
End-to-end Bastion connect workflow.

Each step either completes or ends the session; nothing is retried and no
state survives the run.
"""

import logging
from typing import List, Optional

from clients import AzCliClient, AzCliError
from config import ConnectorConfig
from connector import Connector
from dependencies import DependencyChecker
from discovery import discover_targets
from environment import check_environment
from power import PowerManager
from selector import prompt_for_target
from updater import SelfUpdater

logger = logging.getLogger(__name__)


class BastionSession:
    """Runs guard, update, dependency, discovery, selection and connect steps."""

    def __init__(self, config: ConnectorConfig, api: Optional[AzCliClient] = None):
        self.config = config
        self.api = api or AzCliClient(cli_name=config.cli_name)

    def _self_update(self, argv: List[str]) -> Optional[int]:
        if self.config.skip_update or not self.config.script_path:
            logger.debug("Self-update disabled")
            return None
        updater = SelfUpdater(
            version_url=self.config.version_url,
            source_url=self.config.source_url,
            script_path=self.config.script_path,
            current_version=self.config.current_version,
            timeout=self.config.http_timeout,
        )
        return updater.run(argv)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Execute the connect workflow.

        Args:
            argv: Command-line arguments, passed on if the tool relaunches

        Returns:
            Process exit code
        """
        logger.debug(f"Bastion RDP Connect {self.config.current_version}")

        if not check_environment(self.config.min_python):
            return 0

        exit_code = self._self_update(list(argv or []))
        if exit_code is not None:
            return exit_code

        checker = DependencyChecker(self.api, self.config.required_extensions)
        if not checker.check():
            return 0

        logger.info("Searching for VMs reachable through Azure Bastion...")
        try:
            targets = discover_targets(self.api)
        except AzCliError as e:
            logger.error(f"Resource Graph query failed (are you signed in with 'az login'?): {e}")
            return 0

        if not targets:
            logger.warning("No Bastion-reachable virtual machines were found.")
            return 0

        target = prompt_for_target(targets)
        if target is None:
            return 0

        started = PowerManager(self.api, self.config.start_grace_seconds).ensure_running(
            target.vm_id, target.vm_name
        )
        if started is None:
            return 0

        try:
            Connector(self.api, self.config.launch_pause_seconds).connect(target)
        except AzCliError as e:
            logger.error(f"Could not launch the Bastion connection: {e}")
        return 0
