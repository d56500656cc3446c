"""
Thin wrapper around the Azure CLI (az) used for all Azure interactions.
"""

import json
import logging
import shutil
import subprocess
from typing import Any, Dict, List, Optional

from models import BastionTarget, ExtensionInfo, VersionMarker

logger = logging.getLogger(__name__)


class AzCliError(RuntimeError):
    """An az command failed or returned output that could not be decoded."""

    def __init__(self, args: List[str], returncode: int, stderr: str = ""):
        self.args_list = args
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        super().__init__(
            f"'{' '.join(args)}' failed ({returncode}): {self.stderr[:500]}"
        )


class AzCliClient:
    """Runs az CLI subcommands and decodes their JSON output."""

    def __init__(self, cli_name: str = "az"):
        """
        Initialize the az CLI client.

        Args:
            cli_name: Name of the CLI executable looked up on PATH
        """
        self.cli_name = cli_name

    def executable(self) -> Optional[str]:
        """Return the resolved path of the CLI, or None if it is not installed."""
        return shutil.which(self.cli_name)

    def _command(self, args: List[str]) -> List[str]:
        # az is a .cmd wrapper on Windows, so always use the resolved path
        return [self.executable() or self.cli_name, *args]

    def _run(self, args: List[str]) -> str:
        """
        Run an az subcommand and return its stdout.

        Raises:
            AzCliError: If the command exits non-zero or cannot be started
        """
        cmd = self._command(args)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise AzCliError(cmd, -1, str(e)) from e
        if result.returncode != 0:
            raise AzCliError(cmd, result.returncode, result.stderr)
        return result.stdout

    def _run_json(self, args: List[str]) -> Any:
        """Run an az subcommand with JSON output and decode it."""
        output = self._run([*args, "--output", "json"])
        if not output.strip():
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise AzCliError(self._command(args), 0, f"Invalid JSON output: {e}") from e

    def get_extension(self, name: str) -> Optional[ExtensionInfo]:
        """
        Look up an installed extension.

        Args:
            name: Extension name (e.g. 'bastion')

        Returns:
            ExtensionInfo if installed, None otherwise

        Raises:
            AzCliError: If the extension list cannot be read
        """
        extensions = self._run_json(["extension", "list"]) or []
        for item in extensions:
            if item.get("name") != name:
                continue
            try:
                version = VersionMarker.parse(str(item.get("version", "")))
            except ValueError:
                logger.warning(
                    f"Extension '{name}' reports unparseable version {item.get('version')!r}"
                )
                version = VersionMarker(0)
            return ExtensionInfo(name=name, version=version)
        return None

    def add_extension(self, name: str) -> None:
        """Install an extension."""
        self._run(["extension", "add", "--name", name, "--only-show-errors"])

    def update_extension(self, name: str) -> None:
        """Upgrade an installed extension to its latest version."""
        self._run(["extension", "update", "--name", name, "--only-show-errors"])

    def graph_query(
        self, query: str, first: int = 1000, skip_token: Optional[str] = None
    ) -> Dict:
        """
        Run a Resource Graph query across all accessible subscriptions.

        Args:
            query: KQL query text
            first: Page size (az caps this at 1000)
            skip_token: Continuation token from a previous page

        Returns:
            Response object with a 'data' array and optional 'skip_token'
        """
        args = ["graph", "query", "-q", query, "--first", str(first)]
        if skip_token:
            args.extend(["--skip-token", skip_token])
        return self._run_json(args) or {}

    def get_power_state(self, vm_id: str) -> str:
        """
        Get the power state of a VM (e.g. 'VM running', 'VM deallocated').

        Args:
            vm_id: Full VM resource id

        Returns:
            Power state display string, empty if unknown
        """
        state = self._run_json(
            ["vm", "show", "-d", "--ids", vm_id, "--query", "powerState"]
        )
        return state or ""

    def start_vm(self, vm_id: str) -> None:
        """Start a VM and wait for the start operation to be accepted."""
        self._run(["vm", "start", "--ids", vm_id])

    def bastion_rdp_command(self, target: BastionTarget) -> List[str]:
        """Build the Bastion RDP command line for a target, with MFA enabled."""
        return self._command(
            [
                "network",
                "bastion",
                "rdp",
                "--subscription",
                target.subscription_id,
                "--name",
                target.bastion_name,
                "--resource-group",
                target.resource_group,
                "--target-resource-id",
                target.vm_id,
                "--enable-mfa",
            ]
        )

    def launch(self, cmd: List[str]) -> subprocess.Popen:
        """
        Start a command attached to the current console without waiting.

        Raises:
            AzCliError: If the process cannot be started
        """
        try:
            return subprocess.Popen(cmd)
        except OSError as e:
            raise AzCliError(cmd, -1, str(e)) from e
