"""
C2D Console — Interactive Parameter Resolution

Shows the graph instance about to be submitted (secrets masked), reports
which declared parameters were supplied, and offers to override the rest.
Blank input keeps the default the edge module applies server side.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TextIO

from c2d_console.common import terminal
from c2d_console.common.logger import get_logger
from c2d_console.common.masking import display_instance
from c2d_console.common.schemas import (
    ParameterDeclaration,
    TopologyDefinition,
    TopologyInstance,
)

logger = get_logger(__name__)

_RULE = "-" * 74


class ParameterStatus(str, Enum):
    SUPPLIED = "supplied"
    NOT_SUPPLIED = "not supplied"
    DEFAULTED = "defaulted"


@dataclass(frozen=True)
class ParameterReport:
    name: str
    status: ParameterStatus

    @property
    def message(self) -> str:
        if self.status is ParameterStatus.SUPPLIED:
            return f'"{self.name}" supplied.'
        if self.status is ParameterStatus.DEFAULTED:
            return f'"{self.name}" not supplied. Using default value.'
        return f'"{self.name}" not supplied.'

    @property
    def color(self) -> str:
        return {
            ParameterStatus.SUPPLIED: terminal.GREEN,
            ParameterStatus.NOT_SUPPLIED: terminal.RED,
            ParameterStatus.DEFAULTED: terminal.YELLOW,
        }[self.status]


def parameter_statuses(
    instance: TopologyInstance, topology: TopologyDefinition, post: bool = False
) -> list[ParameterReport]:
    """
    One report per declared parameter, in declaration order.

    Before resolution absent parameters are NOT_SUPPLIED; after it (``post``)
    they are DEFAULTED, since the edge module falls back to the declared
    default.
    """
    missing = ParameterStatus.DEFAULTED if post else ParameterStatus.NOT_SUPPLIED
    return [
        ParameterReport(
            name=declaration.name,
            status=(
                ParameterStatus.SUPPLIED
                if declaration.name in instance.parameters
                else missing
            ),
        )
        for declaration in topology.parameters
    ]


class ParameterPrompter:
    """Console collaborator; input and output are injectable for tests."""

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        read_secret: Optional[Callable[[], str]] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        self._read_line = read_line
        self._read_secret = read_secret or terminal.read_secret
        self._out = out or sys.stdout

    # ── Public API ─────────────────────────────────────────────────────────────

    def run(
        self, instance: TopologyInstance, topology: TopologyDefinition
    ) -> TopologyInstance:
        """Present, collect overrides if anything is missing, present again."""
        if not self.present(instance, topology):
            return instance
        resolved = self.resolve(instance, topology)
        self.present(resolved, topology, post=True)
        return resolved

    def present(
        self,
        instance: TopologyInstance,
        topology: TopologyDefinition,
        post: bool = False,
    ) -> bool:
        """Print the masked instance and parameter summary; True if any is missing."""
        self._print(display_instance(instance, topology))
        self._print(terminal.colorize("\nParameter summary for the Graph Instance", terminal.CYAN))
        self._print(terminal.colorize(_RULE, terminal.CYAN))

        reports = parameter_statuses(instance, topology, post)
        for report in reports:
            self._print("\t" + terminal.colorize(report.message, report.color))

        missing = any(r.status is not ParameterStatus.SUPPLIED for r in reports)
        if not post and missing:
            self._print("\nYou'll be offered to supply values for each remaining (red) parameter.")
        self._read_line("\nPress <ENTER> to continue... ")
        return missing

    def resolve(
        self, instance: TopologyInstance, topology: TopologyDefinition
    ) -> TopologyInstance:
        """Prompt for every declared parameter the instance does not carry yet."""
        resolved = instance
        for declaration in topology.parameters:
            if declaration.name in resolved.parameters:
                continue
            value = self.prompt_for(declaration)
            if value.strip():
                resolved = resolved.with_parameter(declaration.name, value)
                logger.debug(
                    "Parameter overridden",
                    extra={"context": {"parameter": declaration.name}},
                )
        return resolved

    def prompt_for(self, declaration: ParameterDeclaration) -> str:
        self._print(
            f'Input the desired value for parameter "{declaration.name}" '
            "and press <ENTER> (leave blank to use default)"
        )
        if declaration.is_secret:
            return self._read_secret()
        return self._read_line("")

    # ── Internal ───────────────────────────────────────────────────────────────

    def _print(self, text: str) -> None:
        print(text, file=self._out)
