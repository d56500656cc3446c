"""
Data models for the Azure Bastion RDP connector.
"""

import re
from dataclasses import dataclass
from typing import Dict

# Pre-release/build suffixes ("1.0.0b1", "2.1.0-beta.1", "1.2.3+build") are
# accepted and ignored for ordering.
_VERSION_RE = re.compile(
    r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+]?[A-Za-z][0-9A-Za-z.+-]*|\+[0-9A-Za-z.-]+)?$"
)


@dataclass(frozen=True)
class BastionTarget:
    """A virtual machine reachable through a Bastion host in the same VNet."""

    vm_name: str
    vm_id: str  # full ARM resource id of the VM
    bastion_name: str
    resource_group: str  # resource group of the Bastion host
    subscription_name: str
    subscription_id: str

    @classmethod
    def from_row(cls, row: Dict) -> "BastionTarget":
        """
        Build a target from a Resource Graph result row.

        Args:
            row: Row object from the query's ``data`` array

        Returns:
            BastionTarget instance

        Raises:
            KeyError: If a required column is missing
        """
        return cls(
            vm_name=row["vmName"],
            vm_id=row["vmId"],
            bastion_name=row["bastionName"],
            resource_group=row["resourceGroup"],
            subscription_name=row["subscriptionName"],
            subscription_id=row["subscriptionId"],
        )


@dataclass(frozen=True, order=True)
class VersionMarker:
    """Semantic version (major.minor.patch)."""

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> "VersionMarker":
        """
        Parse a version string such as ``1.4.2`` or ``v1.4``.

        Raises:
            ValueError: If the text is not a version
        """
        match = _VERSION_RE.match((text or "").strip())
        if not match:
            raise ValueError(f"Not a valid version: {text!r}")
        major, minor, patch = (int(part) if part else 0 for part in match.groups())
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class ExtensionInfo:
    """Installed state of an az CLI extension."""

    name: str
    version: VersionMarker


@dataclass(frozen=True)
class RequiredExtension:
    """An az CLI extension the tool needs, with its minimum version."""

    name: str
    min_version: VersionMarker


@dataclass(frozen=True)
class Choice:
    """One entry of the target selection menu."""

    label: str  # may carry a '&' hotkey marker, e.g. "&1 vm-a"
    target: BastionTarget

    @property
    def display(self) -> str:
        return self.label.replace("&", "", 1)
