"""
Self-update of the connector.

An update covers every file listed in the published MANIFEST (the main.py
launcher plus the src/ modules it imports, including config.py which holds
TOOL_VERSION). All files are downloaded, checked to be non-empty valid
Python and staged next to their live copies before any of them is renamed
into place. A failed download or staging step never touches a live file.
"""

import logging
import os
import shutil
import subprocess
import sys
import tempfile
from typing import List, Optional, Tuple

import requests

from models import VersionMarker

logger = logging.getLogger(__name__)

MANIFEST_NAME = "MANIFEST"


class SelfUpdater:
    """Checks a remote version marker and hot-swaps the installed sources."""

    def __init__(
        self,
        version_url: str,
        source_url: str,
        script_path: str,
        current_version: str,
        timeout: int = 30,
    ):
        """
        Initialize the self-updater.

        Args:
            version_url: URL returning a bare version string
            source_url: Base URL the MANIFEST and source files are served from
            script_path: Local launcher script; its directory is the install root
            current_version: Version of the running code
            timeout: HTTP timeout in seconds
        """
        self.version_url = version_url
        self.source_url = source_url.rstrip("/")
        self.script_path = os.path.abspath(script_path)
        self.install_root = os.path.dirname(self.script_path)
        self.current_version = VersionMarker.parse(current_version)
        self.timeout = timeout

    def _url(self, relpath: str) -> str:
        return f"{self.source_url}/{relpath}"

    def _get(self, url: str) -> requests.Response:
        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp

    def fetch_remote_version(self) -> Optional[VersionMarker]:
        """
        Fetch and parse the remote version marker.

        Returns:
            Remote version, or None if it could not be fetched or parsed
        """
        try:
            return VersionMarker.parse(self._get(self.version_url).text)
        except requests.RequestException as e:
            logger.warning(f"Could not check for updates: {e}")
        except ValueError as e:
            logger.warning(f"Ignoring invalid remote version marker: {e}")
        return None

    def update_available(self, remote: Optional[VersionMarker]) -> bool:
        return remote is not None and remote > self.current_version

    def fetch_manifest(self) -> List[str]:
        """
        Fetch the list of files making up a release.

        Returns:
            Relative paths (forward slashes) under the install root

        Raises:
            requests.RequestException: If the manifest cannot be fetched
            ValueError: If an entry escapes the install root, is not a .py
                file, or the launcher itself is missing
        """
        entries = []
        for line in self._get(self._url(MANIFEST_NAME)).text.splitlines():
            entry = line.strip()
            if not entry or entry.startswith("#"):
                continue
            normalized = os.path.normpath(entry)
            if (
                os.path.isabs(entry)
                or normalized.startswith("..")
                or not entry.endswith(".py")
            ):
                raise ValueError(f"invalid manifest entry {entry!r}")
            entries.append(entry)

        launcher = os.path.basename(self.script_path)
        if launcher not in entries:
            raise ValueError(f"manifest does not list {launcher}")
        return entries

    def _download(self, relpath: str) -> bytes:
        body = self._get(self._url(relpath)).content
        if not body.strip():
            raise ValueError(f"downloaded {relpath} is empty")
        compile(body, relpath, "exec")
        return body

    def download_and_replace(self) -> bool:
        """
        Download the latest release and move it over the installed files.

        Returns:
            True if the installed files now hold the new version
        """
        staged: List[Tuple[str, str]] = []
        replaced = False
        try:
            for relpath in self.fetch_manifest():
                body = self._download(relpath)
                live_path = os.path.join(self.install_root, *relpath.split("/"))
                live_dir = os.path.dirname(live_path)
                os.makedirs(live_dir, exist_ok=True)

                fd, staging_path = tempfile.mkstemp(
                    prefix=".bastion-connect-", suffix=".py", dir=live_dir
                )
                staged.append((staging_path, live_path))
                with os.fdopen(fd, "wb") as fh:
                    fh.write(body)
                    fh.flush()
                    os.fsync(fh.fileno())
                if os.path.exists(live_path):
                    shutil.copymode(live_path, staging_path)

            for staging_path, live_path in staged:
                os.replace(staging_path, live_path)
            replaced = True
        except requests.RequestException as e:
            logger.warning(f"Update download failed, keeping current version: {e}")
        except (SyntaxError, ValueError) as e:
            logger.warning(f"Downloaded update rejected, keeping current version: {e}")
        except OSError as e:
            logger.warning(f"Could not install update, keeping current version: {e}")
        finally:
            for staging_path, _ in staged:
                if os.path.exists(staging_path):
                    os.remove(staging_path)
        return replaced

    def relaunch(self, argv: List[str]) -> int:
        """
        Run the updated script in a fresh interpreter and wait for it.

        Args:
            argv: Arguments to pass through to the new process

        Returns:
            Exit code of the relaunched process
        """
        cmd = [sys.executable, self.script_path, *argv]
        if "--skip-update" not in cmd:
            cmd.append("--skip-update")
        logger.debug(f"Relaunching: {' '.join(cmd)}")
        return subprocess.call(cmd)

    def run(self, argv: Optional[List[str]] = None) -> Optional[int]:
        """
        Perform the update check.

        Args:
            argv: Arguments to pass to the relaunched process

        Returns:
            Exit code of the relaunched process if an update was installed,
            None if the current process should carry on
        """
        if not self.script_path.endswith(".py"):
            logger.debug(f"Self-update skipped for non-script entry point {self.script_path}")
            return None

        remote = self.fetch_remote_version()
        if not self.update_available(remote):
            logger.debug(f"Running latest version {self.current_version}")
            return None

        logger.info(f"Updating from {self.current_version} to {remote}...")
        if not self.download_and_replace():
            return None

        logger.info(f"Updated to {remote}, restarting...")
        return self.relaunch(list(argv or []))
