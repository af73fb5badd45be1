"""
C2D Console — Topology Catalog

The fixed set of media graph topologies the console can deploy. Each kind
maps to a pure builder; the menu order is the enum order.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from c2d_console.common.schemas import TopologyDefinition
from c2d_console.topologies import (
    continuous_recording,
    event_recording_assets,
    event_recording_files,
    http_extension,
    motion_detection,
)


class TopologyKind(str, Enum):
    CONTINUOUS_RECORDING = "continuous-recording"
    MOTION_DETECTION = "motion-detection"
    EVENT_RECORDING_FILES = "event-recording-files"
    HTTP_EXTENSION = "http-extension"
    EVENT_RECORDING_ASSETS = "event-recording-assets"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[TopologyKind, str] = {
    TopologyKind.CONTINUOUS_RECORDING: "Continuous Video Recording",
    TopologyKind.MOTION_DETECTION: "Motion Detection",
    TopologyKind.EVENT_RECORDING_FILES: "Event Based Video Recording to edge device",
    TopologyKind.HTTP_EXTENSION: "Inference using HTTP Extension",
    TopologyKind.EVENT_RECORDING_ASSETS: "Event Based Video Recording to Assets, triggered by an inference module",
}

_BUILDERS: dict[TopologyKind, Callable[[], TopologyDefinition]] = {
    TopologyKind.CONTINUOUS_RECORDING: continuous_recording.build,
    TopologyKind.MOTION_DETECTION: motion_detection.build,
    TopologyKind.EVENT_RECORDING_FILES: event_recording_files.build,
    TopologyKind.HTTP_EXTENSION: http_extension.build,
    TopologyKind.EVENT_RECORDING_ASSETS: event_recording_assets.build,
}


def build_topology(kind: TopologyKind | str) -> TopologyDefinition:
    """Build the topology definition for ``kind``."""
    return _BUILDERS[TopologyKind(kind)]()


def build_all() -> dict[TopologyKind, TopologyDefinition]:
    return {kind: build_topology(kind) for kind in TopologyKind}


def kind_for_option(option: int) -> TopologyKind:
    """1-based menu option → kind. Raises ValueError when out of range."""
    kinds = list(TopologyKind)
    if not 1 <= option <= len(kinds):
        raise ValueError(f"option must be between 1 and {len(kinds)}")
    return kinds[option - 1]
