"""Operator commands."""

from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from keycustom.errors import InteractiveOnly
from keycustom.loggings import LOGGING_THEME
from keycustom.registry import CustomRegistry, CustomizationRecord, get_registry, interactive_session, is_interactive


def promote_resource_command(
    feature: Optional[str] = None,
    name: Optional[str] = None,
    *,
    registry: Optional[CustomRegistry] = None,
    console: Optional[Console] = None,
) -> CustomizationRecord:
    """Ask the operator for a feature and keymap, then promote the keymap.

    Arguments already given are not asked for.

    Raises:
        InteractiveOnly: If no operator is present
    """
    registry = registry if registry is not None else get_registry()
    if not is_interactive(registry.interactive):
        raise InteractiveOnly(
            "promote_resource_command must be run by an operator",
            context={"feature": feature, "name": name},
        )

    console = console if console is not None else Console(theme=LOGGING_THEME)
    if feature is None:
        feature = Prompt.ask("Feature", console=console)
    if name is None:
        name = Prompt.ask("Keymap", console=console)

    with interactive_session():
        record = registry.promote_resource_for_feature(feature, name)

    features = ", ".join(sorted(record.required_features))
    console.print(f"[resource]{name}[/resource] is customizable; requires [feature]{features}[/feature]")
    return record
