"""
C2D Console — Secret Masking

Display copies are derived from the canonical values; nothing here mutates
an instance or a payload in place.
"""

from __future__ import annotations

from typing import Any, Iterable

from c2d_console.common.schemas import TopologyDefinition, TopologyInstance

MASK = "**********"


def masked_parameters(
    instance: TopologyInstance, topology: TopologyDefinition
) -> dict[str, str]:
    """Instance parameters with every SecretString value replaced by ``MASK``."""
    secrets = topology.secret_parameter_names
    return {
        name: (MASK if name in secrets else value)
        for name, value in instance.parameters.items()
    }


def display_instance(instance: TopologyInstance, topology: TopologyDefinition) -> str:
    """Indented JSON of ``instance`` safe to print."""
    shown = instance.model_copy(
        update={"parameters": masked_parameters(instance, topology)}
    )
    return shown.to_json()


def mask_payload(payload: Any, secret_names: Iterable[str]) -> Any:
    """
    Deep copy of a remote reply where every ``{"name": <secret>, "value": ...}``
    entry carries ``MASK`` instead of its value.
    """
    secrets = frozenset(secret_names)
    if not secrets:
        return payload
    return _mask(payload, secrets)


def _mask(node: Any, secrets: frozenset[str]) -> Any:
    if isinstance(node, dict):
        masked = {key: _mask(value, secrets) for key, value in node.items()}
        name = masked.get("name")
        if isinstance(name, str) and name in secrets and "value" in masked:
            masked["value"] = MASK
        return masked
    if isinstance(node, list):
        return [_mask(item, secrets) for item in node]
    return node
