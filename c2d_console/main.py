"""
C2D Console — Entry Point

Pick a media graph topology, build a graph instance for the configured
camera, then drive its lifecycle on the edge module through IoT Hub.

Usage:
  c2d-console                                   # interactive menu
  c2d-console --topology motion-detection       # skip the menu
  c2d-console --topology continuous-recording --no-pause
  c2d-console --list-topologies                 # print the catalog, no remote calls

Settings come from C2D_* environment variables or a .env file
(see c2d_console/config.py).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from c2d_console.common import terminal
from c2d_console.common.errors import C2DConsoleError
from c2d_console.common.logger import get_logger, set_level
from c2d_console.common.schemas import TopologyDefinition
from c2d_console.config import ConsoleSettings, get_settings
from c2d_console.edge.direct_methods import MediaGraphClient
from c2d_console.edge.iothub_client import IoTHubDirectMethodClient
from c2d_console.services.instance_builder import build_instance
from c2d_console.services.lifecycle import Console, build_steps, run_steps
from c2d_console.services.parameter_prompt import ParameterPrompter
from c2d_console.topologies.catalog import (
    TopologyKind,
    build_all,
    build_topology,
    kind_for_option,
)

logger = get_logger("c2d_console.main")


def choose_topology(
    read_line: Callable[[str], str] = input, console: Optional[Console] = None
) -> TopologyKind:
    """Menu of the catalog; re-prompts until a valid option number is entered."""
    console = console or Console(read_line)
    kinds = list(TopologyKind)
    console.print("\nThese are the available topologies...")
    for index, kind in enumerate(kinds, start=1):
        console.print(f"\t{index}: {kind.label}")

    answer = read_line(f"Pick your topology (1 to {len(kinds)}) and press <ENTER>: ")
    while True:
        try:
            return kind_for_option(int(answer.strip()))
        except ValueError:
            console.print("Not a valid option, try again...")
            answer = read_line("")


def run(
    settings: ConsoleSettings,
    topology: TopologyDefinition,
    client: MediaGraphClient,
    console: Console,
    prompter: ParameterPrompter,
    pause: bool = True,
) -> None:
    """Build the instance, resolve its parameters, then run the lifecycle script."""
    instance = build_instance(
        topology,
        settings.rtsp_url,
        settings.rtsp_user_name,
        settings.rtsp_password_value,
        name=settings.instance_name,
        description=settings.instance_description,
    )
    instance = prompter.run(instance, topology)
    steps = build_steps(client, topology, instance, console, pause=pause)
    run_steps(steps, console)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="c2d-console",
        description="Deploy and exercise a media graph on an IoT Edge module.",
    )
    parser.add_argument(
        "--topology",
        choices=[kind.value for kind in TopologyKind],
        help="Topology to deploy (skips the interactive menu)",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Do not wait for <ENTER> between lifecycle steps",
    )
    parser.add_argument("--env-file", help="Read settings from this file instead of .env")
    parser.add_argument(
        "--list-topologies",
        action="store_true",
        help="Print every catalog topology as JSON and exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    console = Console()

    if args.list_topologies:
        catalog = {kind.value: json.loads(t.to_json()) for kind, t in build_all().items()}
        console.print(json.dumps(catalog, indent=2))
        return 0

    try:
        settings = get_settings(args.env_file)
        set_level(settings.log_level.value)

        client = MediaGraphClient(IoTHubDirectMethodClient.from_settings(settings))
        kind = TopologyKind(args.topology) if args.topology else choose_topology(console=console)
        topology = build_topology(kind)
        logger.info("Topology selected", extra={"context": {"topology": topology.name}})

        run(settings, topology, client, console, ParameterPrompter(), pause=not args.no_pause)
    except (C2DConsoleError, ValidationError) as exc:
        logger.error("Console run aborted", exc_info=True)
        console.print(str(exc), terminal.RED)
        return 1
    except KeyboardInterrupt:
        console.print("\nInterrupted.", terminal.YELLOW)
        return 130
    except EOFError:
        logger.error("Console input closed")
        console.print("\nInput closed, stopping.", terminal.RED)
        return 1
    except Exception as exc:
        logger.error("Unexpected failure", exc_info=True)
        console.print(f"Unexpected error: {exc}", terminal.RED)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
