"""
Opens the RDP session through Azure Bastion.
"""

import logging
import shlex
import subprocess
import time

from clients import AzCliClient
from models import BastionTarget

logger = logging.getLogger(__name__)


class Connector:
    """Launches `az network bastion rdp` for a target."""

    def __init__(self, api: AzCliClient, launch_pause_seconds: float = 3.0):
        self.api = api
        self.launch_pause_seconds = launch_pause_seconds

    def connect(self, target: BastionTarget) -> subprocess.Popen:
        """
        Print the exact command, start it on the current console and return
        after a short pause. The process is not waited on; its handle is
        returned so the caller owns it.

        Raises:
            AzCliError: If the process cannot be started
        """
        cmd = self.api.bastion_rdp_command(target)
        logger.info(f"Connecting to {target.vm_name} via {target.bastion_name}:")
        logger.info(shlex.join(cmd))

        process = self.api.launch(cmd)
        logger.debug(f"Bastion RDP process started (pid {process.pid})")
        time.sleep(self.launch_pause_seconds)
        return process
