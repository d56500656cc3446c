"""
Power state handling for the selected VM.
"""

import logging
import time
from typing import Optional

from rich.prompt import Confirm

from clients import AzCliClient, AzCliError

logger = logging.getLogger(__name__)

RUNNING_STATE = "VM running"


class PowerManager:
    """Offers to start a stopped VM before connecting."""

    def __init__(self, api: AzCliClient, grace_seconds: float = 5.0):
        """
        Args:
            api: az CLI client
            grace_seconds: Pause after a start so the guest can begin booting
        """
        self.api = api
        self.grace_seconds = grace_seconds

    def get_state(self, vm_id: str) -> str:
        try:
            return self.api.get_power_state(vm_id)
        except AzCliError as e:
            logger.warning(f"Could not read VM power state: {e}")
            return ""

    def ensure_running(self, vm_id: str, vm_name: str = "") -> Optional[bool]:
        """
        Make sure the VM is running, starting it if the operator agrees.

        The wait after a start is a fixed grace period, not a readiness
        check, so the connection may still race a slow boot.

        Args:
            vm_id: Full VM resource id
            vm_name: Display name for messages

        Returns:
            True if the VM was running or a start was issued, False if it
            was left stopped, None if the operator aborted the prompt
        """
        name = vm_name or vm_id.rsplit("/", 1)[-1]
        state = self.get_state(vm_id)
        if state == RUNNING_STATE:
            logger.debug(f"{name} is running")
            return True

        logger.info(f"{name} is not running (state: {state or 'unknown'})")
        try:
            start = Confirm.ask(f"Start {name} now?", default=True)
        except (KeyboardInterrupt, EOFError):
            logger.info("Cancelled.")
            return None
        if not start:
            logger.warning(
                f"{name} was not started; the Bastion connection is expected to fail."
            )
            return False

        logger.info(f"Starting {name}...")
        try:
            self.api.start_vm(vm_id)
        except AzCliError as e:
            logger.warning(f"Start of {name} failed: {e}")
            return False

        logger.info(f"Waiting {self.grace_seconds:.0f}s for {name} to boot...")
        time.sleep(self.grace_seconds)
        return True
