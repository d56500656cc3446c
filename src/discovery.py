"""
Discovery of VMs that share a virtual network with a Bastion host.
"""

import logging
from typing import List, Optional

from clients import AzCliClient
from models import BastionTarget

logger = logging.getLogger(__name__)

# Subnet ids look like
# /subscriptions/<s>/resourceGroups/<rg>/providers/Microsoft.Network/virtualNetworks/<vnet>/subnets/<subnet>
# so index 8 of the split path is the VNet name.
BASTION_TARGETS_QUERY = """
Resources
| where type =~ 'microsoft.compute/virtualmachines'
| extend nicId = tolower(tostring(properties.networkProfile.networkInterfaces[0].id))
| project vmName = name, vmId = id, nicId, subscriptionId
| join kind=inner (
    Resources
    | where type =~ 'microsoft.network/networkinterfaces'
    | extend vnetName = tostring(split(tostring(properties.ipConfigurations[0].properties.subnet.id), '/')[8])
    | project nicId = tolower(id), vnetName
) on nicId
| join kind=inner (
    Resources
    | where type =~ 'microsoft.network/bastionhosts'
    | extend vnetName = tostring(split(tostring(properties.ipConfigurations[0].properties.subnet.id), '/')[8])
    | project bastionName = name, resourceGroup, vnetName
) on vnetName
| join kind=inner (
    ResourceContainers
    | where type =~ 'microsoft.resources/subscriptions'
    | project subscriptionName = name, subscriptionId
) on subscriptionId
| project vmName, vmId, bastionName, resourceGroup, subscriptionName, subscriptionId
| order by subscriptionName asc, vmName asc
"""

PAGE_SIZE = 1000


def discover_targets(api: AzCliClient, query: str = BASTION_TARGETS_QUERY) -> List[BastionTarget]:
    """
    Run the Bastion target query and collect every page of results.

    Args:
        api: az CLI client
        query: Resource Graph query returning BastionTarget-shaped rows

    Returns:
        Targets ordered by subscription name, then VM name

    Raises:
        AzCliError: If the query fails
    """
    targets: List[BastionTarget] = []
    skip_token: Optional[str] = None

    while True:
        page = api.graph_query(query, first=PAGE_SIZE, skip_token=skip_token)
        for row in page.get("data", []):
            try:
                targets.append(BastionTarget.from_row(row))
            except KeyError as e:
                logger.debug(f"Skipping incomplete row (missing {e}): {row}")

        skip_token = page.get("skip_token")
        if not skip_token:
            break

    logger.debug(f"Discovered {len(targets)} Bastion target(s)")
    return targets
