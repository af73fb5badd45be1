"""
Tests — Topology Catalog

Tier 1: Every catalog entry is a fully resolved, acyclic media graph.
"""

from __future__ import annotations

import re

import pytest

from c2d_console.common.schemas import (
    IoTHubMessageSink,
    MotionDetectionProcessor,
    ParameterType,
    RtspSource,
)
from c2d_console.topologies.catalog import (
    TopologyKind,
    build_all,
    build_topology,
    kind_for_option,
)


@pytest.mark.parametrize("kind", list(TopologyKind))
class TestEveryTopology:
    def test_inputs_reference_earlier_nodes(self, kind: TopologyKind) -> None:
        topology = build_topology(kind)
        seen: set[str] = set()
        for node in topology.nodes:
            for ref in node.input_names:
                assert ref in seen, f"{topology.name}: {node.name} -> {ref}"
            seen.add(node.name)

    def test_sources_have_no_inputs(self, kind: TopologyKind) -> None:
        topology = build_topology(kind)
        assert all(not source.input_names for source in topology.sources)
        assert all(node.input_names for node in [*topology.processors, *topology.sinks])

    def test_declares_camera_parameters(self, kind: TopologyKind) -> None:
        topology = build_topology(kind)
        names = [p.name for p in topology.parameters]
        assert {"rtspUrl", "rtspUserName", "rtspPassword"} <= set(names)
        assert len(names) == len(set(names))
        assert topology.parameter("rtspPassword").type == ParameterType.SECRET_STRING

    def test_placeholders_are_declared(self, kind: TopologyKind) -> None:
        """Every ${name} token (other than System.*) refers to a declared parameter."""
        topology = build_topology(kind)
        tokens = set(re.findall(r"\$\{([^}]+)\}", topology.to_json()))
        declared = {p.name for p in topology.parameters}
        assert {t for t in tokens if not t.startswith("System.")} <= declared

    def test_builds_are_pure(self, kind: TopologyKind) -> None:
        assert build_topology(kind) == build_topology(kind)


class TestCatalog:
    def test_names_are_unique(self) -> None:
        names = [t.name for t in build_all().values()]
        assert len(names) == len(set(names)) == 5

    def test_accepts_string_kind(self) -> None:
        assert build_topology("motion-detection").name == "MotionDetection"

    def test_menu_options(self) -> None:
        assert kind_for_option(1) is TopologyKind.CONTINUOUS_RECORDING
        assert kind_for_option(5) is TopologyKind.EVENT_RECORDING_ASSETS
        with pytest.raises(ValueError):
            kind_for_option(0)
        with pytest.raises(ValueError):
            kind_for_option(6)

    def test_continuous_recording_segment_length(self) -> None:
        topology = build_topology(TopologyKind.CONTINUOUS_RECORDING)
        assert topology.name == "ContinuousRecording"
        assert topology.sinks[0].segment_length == "PT30S"
        assert topology.processors == []

    def test_motion_detection_shape(self) -> None:
        topology = build_topology(TopologyKind.MOTION_DETECTION)
        assert topology.name == "MotionDetection"
        assert [s.name for s in topology.sources] == ["rtspSource"]
        assert isinstance(topology.sources[0], RtspSource)

        (processor,) = topology.processors
        assert isinstance(processor, MotionDetectionProcessor)
        assert processor.name == "motionDetection"
        assert processor.sensitivity == "medium"
        assert processor.input_names == ["rtspSource"]

        (sink,) = topology.sinks
        assert isinstance(sink, IoTHubMessageSink)
        assert sink.input_names == ["motionDetection"]

    def test_event_recording_files_gate_window(self) -> None:
        topology = build_topology(TopologyKind.EVENT_RECORDING_FILES)
        gate = topology.node("signalGateProcessor")
        assert gate.input_names == ["motionDetection", "rtspSource"]
        assert gate.minimum_activation_time == "PT5S"
        assert gate.maximum_activation_time == "PT5S"
        assert gate.activation_evaluation_window == "PT1S"
        assert topology.sinks[0].input_names == ["signalGateProcessor"]

    def test_event_recording_assets_branches(self) -> None:
        topology = build_topology(TopologyKind.EVENT_RECORDING_ASSETS)
        assert [s.name for s in topology.sources] == ["rtspSource", "iotMessageSource"]
        assert topology.node("signalGateProcessor").input_names == ["iotMessageSource", "rtspSource"]
        assert topology.node("inferenceClient").input_names == ["rtspSource"]
        assert topology.node("hubSink").input_names == ["inferenceClient"]
        assert topology.node("assetSink").input_names == ["signalGateProcessor"]

    def test_http_extension_chain(self) -> None:
        topology = build_topology(TopologyKind.HTTP_EXTENSION)
        assert [n.name for n in topology.nodes] == [
            "rtspSource",
            "frameRateFilter",
            "httpExtension",
            "hubSink",
        ]
        extension = topology.node("httpExtension")
        assert extension.input_names == ["frameRateFilter"]
        assert extension.image.format.type.endswith("MediaGraphImageFormatBmp")
        assert "inferencingPassword" in topology.secret_parameter_names
