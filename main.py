#!/usr/bin/env python3
"""
Azure Bastion RDP Connect

- Lists VMs that share a virtual network with an Azure Bastion host,
  across every subscription the signed-in account can see
- Starts the chosen VM if it is stopped
- Opens an RDP session through Bastion with Entra ID / MFA

This script supports running directly from a source checkout that uses a
src/ layout: it adds the local `src/` directory to sys.path before
importing. It keeps itself up to date by replacing this file when a newer
version is published.
"""

import os
import sys

# Add src/ to path to import modules directly
REPO_ROOT = os.path.dirname(os.path.abspath(__file__))
SRC_PATH = os.path.join(REPO_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from cli import main


if __name__ == "__main__":
    sys.exit(main(script_path=os.path.abspath(__file__)))
