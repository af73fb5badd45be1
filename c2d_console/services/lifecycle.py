"""
C2D Console — Graph Lifecycle Script

A fixed, linear sequence of direct methods: deploy the topology, run an
instance of it, then tear both down, pausing for the user in between.

Remote error replies (status >= 400) are printed and the script moves on.
A TransportError escapes ``run_steps`` and ends the run.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from c2d_console.common import terminal
from c2d_console.common.logger import get_logger
from c2d_console.common.masking import mask_payload
from c2d_console.common.schemas import TopologyDefinition, TopologyInstance
from c2d_console.edge.direct_methods import (
    MediaGraphClient,
    MethodResult,
    parse_instances,
    parse_topologies,
)

logger = get_logger(__name__)

WAIT_FOR_INPUT = "WaitForInput"
_RULE = "\n" + "-" * 74 + "\n"


@dataclass
class Step:
    name: str
    op: Callable[[], None]
    enabled: bool = True


class Console:
    """Colored output plus blocking Enter prompts."""

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
    ) -> None:
        self._read_line = read_line
        self._out = out or sys.stdout

    def print(self, message: str, color: Optional[str] = None) -> None:
        text = terminal.colorize(message, color) if color else message
        print(text, file=self._out)

    def wait(self, message: str = "Press <ENTER> to continue") -> None:
        self.print(message, terminal.YELLOW)
        self._read_line("")

    def report(self, result: MethodResult, secret_names: frozenset[str] = frozenset()) -> None:
        """Success → indented JSON reply; error → raw remote payload in red."""
        if result.is_error:
            logger.warning(
                "Direct method returned an error",
                extra={"context": {"method": result.method_name, "status": result.status}},
            )
            self.print(json.dumps(result.payload, indent=2, default=str), terminal.RED)
            return
        shown = {
            "status": result.status,
            "payload": mask_payload(result.payload, secret_names),
        }
        self.print(json.dumps(shown, indent=2, default=str))


def build_steps(
    client: MediaGraphClient,
    topology: TopologyDefinition,
    instance: TopologyInstance,
    console: Console,
    pause: bool = True,
) -> list[Step]:
    """The ordered script. ``pause=False`` disables every WaitForInput step."""
    secrets = topology.secret_parameter_names

    def remote(call: Callable[[], MethodResult]) -> Callable[[], None]:
        return lambda: console.report(call(), secrets)

    def listing(call: Callable[[], MethodResult], parse, label: str) -> Callable[[], None]:
        def op() -> None:
            result = call()
            console.report(result, secrets)
            if not result.is_error:
                names = [item.name for item in parse(result)]
                console.print(f"{label}: {', '.join(names) or '(none)'}")

        return op

    def wait(message: str = "Press <ENTER> to continue") -> Step:
        return Step(WAIT_FOR_INPUT, lambda: console.wait(message), enabled=pause)

    return [
        Step("GraphTopologyList", listing(client.list_topologies, parse_topologies, "Topologies")),
        wait(),
        Step("GraphTopologySet", remote(lambda: client.set_topology(topology))),
        Step("GraphInstanceSet", remote(lambda: client.set_instance(instance))),
        Step("GraphInstanceActivate", remote(lambda: client.activate_instance(instance.name))),
        Step("GraphInstanceList", listing(client.list_instances, parse_instances, "Instances")),
        wait("The topology will now be deactivated.\nPress <ENTER> to continue"),
        Step("GraphInstanceDeactivate", remote(lambda: client.deactivate_instance(instance.name))),
        Step("GraphInstanceDelete", remote(lambda: client.delete_instance(instance.name))),
        Step("GraphInstanceList", listing(client.list_instances, parse_instances, "Instances")),
        wait(),
        Step("GraphTopologyDelete", remote(lambda: client.delete_topology(topology.name))),
        wait(),
        Step("GraphTopologyList", listing(client.list_topologies, parse_topologies, "Topologies")),
        wait(),
    ]


def run_steps(steps: list[Step], console: Console) -> None:
    """Run each enabled step in order; exceptions propagate and end the run."""
    for step in steps:
        if not step.enabled:
            continue
        console.print(_RULE, terminal.CYAN)
        console.print(f"Executing operation {step.name}")
        logger.debug("Executing step", extra={"context": {"step": step.name}})
        step.op()
