"""
Tests — Interactive Parameter Resolution

Tier 1: Status reporting and overrides, with scripted keyboard input.
"""

from __future__ import annotations

import io
from typing import Iterator

from c2d_console.common.masking import MASK
from c2d_console.services.instance_builder import build_instance
from c2d_console.services.parameter_prompt import (
    ParameterPrompter,
    ParameterStatus,
    parameter_statuses,
)
from c2d_console.topologies.catalog import TopologyKind, build_topology


def _scripted(lines: list[str]):
    feed: Iterator[str] = iter(lines)
    return lambda _prompt="": next(feed)


class TestParameterStatuses:
    def test_supplied_and_not_supplied(self) -> None:
        topology = build_topology(TopologyKind.EVENT_RECORDING_FILES)
        instance = build_instance(topology, "rtsp://cam", "u", "p")
        statuses = {r.name: r.status for r in parameter_statuses(instance, topology)}
        assert statuses == {
            "rtspUserName": ParameterStatus.SUPPLIED,
            "rtspPassword": ParameterStatus.SUPPLIED,
            "rtspUrl": ParameterStatus.SUPPLIED,
            "motionSensitivity": ParameterStatus.NOT_SUPPLIED,
            "fileSinkOutputName": ParameterStatus.NOT_SUPPLIED,
        }

    def test_post_reports_defaulted(self) -> None:
        topology = build_topology(TopologyKind.EVENT_RECORDING_FILES)
        instance = build_instance(topology, "rtsp://cam", "u", "p")
        reports = parameter_statuses(instance, topology, post=True)
        defaulted = [r for r in reports if r.status is ParameterStatus.DEFAULTED]
        assert [r.name for r in defaulted] == ["motionSensitivity", "fileSinkOutputName"]
        assert defaulted[0].message == '"motionSensitivity" not supplied. Using default value.'


class TestParameterPrompter:
    def test_override_and_blank(self) -> None:
        topology = build_topology(TopologyKind.EVENT_RECORDING_FILES)
        instance = build_instance(topology, "rtsp://cam", "u", "p")
        # Enter, motionSensitivity override, blank fileSinkOutputName, Enter
        prompter = ParameterPrompter(
            read_line=_scripted(["", "high", "   ", ""]),
            out=io.StringIO(),
        )
        resolved = prompter.run(instance, topology)
        assert resolved.parameters["motionSensitivity"] == "high"
        assert "fileSinkOutputName" not in resolved.parameters
        assert "motionSensitivity" not in instance.parameters

    def test_secret_override_uses_secret_reader_and_is_masked(self) -> None:
        topology = build_topology(TopologyKind.HTTP_EXTENSION)
        instance = build_instance(topology, "rtsp://cam", "u", "p")
        out = io.StringIO()
        # inferencingPassword is the only secret left to prompt for
        secret_calls: list[str] = []

        def read_secret() -> str:
            secret_calls.append("called")
            return "inference-pass"

        prompter = ParameterPrompter(
            read_line=lambda _prompt="": "",
            read_secret=read_secret,
            out=out,
        )
        resolved = prompter.run(instance, topology)
        assert secret_calls == ["called"]
        assert resolved.parameters["inferencingPassword"] == "inference-pass"
        printed = out.getvalue()
        assert "inference-pass" not in printed
        assert '"p"' not in printed
        assert MASK in printed

    def test_nothing_missing_skips_prompts(self) -> None:
        topology = build_topology(TopologyKind.MOTION_DETECTION)
        instance = build_instance(topology, None, None, None)
        out = io.StringIO()
        prompter = ParameterPrompter(read_line=_scripted([""]), out=out)
        resolved = prompter.run(instance, topology)
        assert resolved == instance
        assert "remaining (red) parameter" not in out.getvalue()

    def test_motion_detection_without_overrides(self) -> None:
        """End to end: no overrides → exactly the three camera parameters."""
        topology = build_topology(TopologyKind.MOTION_DETECTION)
        instance = build_instance(topology, "rtsp://cam", "user", "pass")
        prompter = ParameterPrompter(
            read_line=lambda _prompt="": "",
            read_secret=lambda: "",
            out=io.StringIO(),
        )
        resolved = prompter.run(instance, topology)
        assert set(resolved.parameters) == {"rtspUrl", "rtspUserName", "rtspPassword"}
        assert resolved.parameters["rtspPassword"] == "pass"
