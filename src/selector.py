"""
Interactive selection of a Bastion target.
"""

import logging
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from models import BastionTarget, Choice

logger = logging.getLogger(__name__)

CANCEL_KEY = "q"


def group_by_subscription(targets: List[BastionTarget]) -> Dict[str, List[BastionTarget]]:
    """Group targets by subscription name, keeping first-appearance order."""
    groups: Dict[str, List[BastionTarget]] = {}
    for target in targets:
        groups.setdefault(target.subscription_name, []).append(target)
    return groups


def build_choices(targets: List[BastionTarget]) -> List[Choice]:
    """
    Build menu entries for the targets.

    A subscription with several VMs gets one indexed entry per VM
    ("&1 vm-a", "&2 vm-b"); a subscription with a single VM gets one entry
    labelled with the subscription name.
    """
    choices: List[Choice] = []
    for subscription, members in group_by_subscription(targets).items():
        if len(members) == 1:
            choices.append(Choice(label=subscription.strip(), target=members[0]))
            continue
        for index, target in enumerate(members, start=1):
            choices.append(Choice(label=f"&{index} {target.vm_name}", target=target))
    return choices


def render_menu(choices: List[Choice], console: Console) -> None:
    """Print the numbered menu, with a header above each multi-VM subscription."""
    current_group: Optional[str] = None
    for number, choice in enumerate(choices, start=1):
        subscription = choice.target.subscription_name
        indexed = choice.label.startswith("&")
        if indexed and subscription != current_group:
            console.print(f"[bold cyan]{escape(subscription)}[/bold cyan]")
        current_group = subscription if indexed else None

        indent = "    " if indexed else ""
        console.print(
            f"{indent}[bold]{number:>3}[/bold]  {escape(choice.display)}"
            f"  [dim]via {escape(choice.target.bastion_name)}[/dim]"
        )


def prompt_for_target(
    targets: List[BastionTarget], console: Optional[Console] = None
) -> Optional[BastionTarget]:
    """
    Ask the operator which VM to connect to.

    Args:
        targets: Discovered targets, ordered by subscription then VM name
        console: Console to render on (defaults to a new rich Console)

    Returns:
        The chosen target (its vm_id identifies the VM), or None if the
        operator cancelled. The row itself is returned because one VM can be
        listed once per Bastion host sharing its VNet name.
    """
    console = console or Console()
    choices = build_choices(targets)

    console.print()
    console.print("[bold]Select a VM to connect to via Bastion[/bold]")
    render_menu(choices, console)

    valid = [str(n) for n in range(1, len(choices) + 1)] + [CANCEL_KEY]
    try:
        answer = Prompt.ask(
            f"Choice (1-{len(choices)}, {CANCEL_KEY} to quit)",
            choices=valid,
            show_choices=False,
            console=console,
        )
    except (KeyboardInterrupt, EOFError):
        console.print()
        return None

    if answer == CANCEL_KEY:
        return None

    chosen = choices[int(answer) - 1].target
    logger.debug(f"Selected {chosen.vm_name} in {chosen.subscription_name}")
    return chosen
