"""
Tests — Console Entry Point

Tier 2: Menu validation, a full scripted run, and top-level error reporting.
"""

from __future__ import annotations

import io
import json
from typing import Iterator

import pytest

from c2d_console import main as entry
from c2d_console.common.errors import TransportError
from c2d_console.config import ConsoleSettings
from c2d_console.edge.direct_methods import MediaGraphClient, MethodRequest, MethodResult
from c2d_console.services.lifecycle import Console
from c2d_console.services.parameter_prompt import ParameterPrompter
from c2d_console.topologies.catalog import TopologyKind, build_topology


def _scripted(lines: list[str]):
    feed: Iterator[str] = iter(lines)
    return lambda _prompt="": next(feed)


class RecordingModule:
    def __init__(self) -> None:
        self.calls: list[MethodRequest] = []

    def invoke(self, request: MethodRequest) -> MethodResult:
        self.calls.append(request)
        return MethodResult(request.method_name, 200, {})


class TestChooseTopology:
    def test_valid_choice(self) -> None:
        console = Console(out=io.StringIO())
        assert entry.choose_topology(_scripted(["2"]), console) is TopologyKind.MOTION_DETECTION

    def test_reprompts_until_valid(self) -> None:
        out = io.StringIO()
        kind = entry.choose_topology(_scripted(["abc", "9", " 4 "]), Console(out=out))
        assert kind is TopologyKind.HTTP_EXTENSION
        assert out.getvalue().count("Not a valid option, try again...") == 2


class TestRun:
    def test_motion_detection_end_to_end(self) -> None:
        settings = ConsoleSettings(_env_file=None, rtsp_url="rtsp://cam", rtsp_user_name="u", rtsp_password="p")
        topology = build_topology(TopologyKind.MOTION_DETECTION)
        module = RecordingModule()
        out = io.StringIO()

        entry.run(
            settings,
            topology,
            MediaGraphClient(module),
            Console(read_line=lambda _p="": "", out=out),
            ParameterPrompter(read_line=lambda _p="": "", read_secret=lambda: "", out=out),
            pause=False,
        )

        instance_set = next(c for c in module.calls if c.method_name == "GraphInstanceSet")
        properties = instance_set.payload["properties"]
        assert properties["topologyName"] == "MotionDetection"
        assert {p["name"] for p in properties["parameters"]} == {"rtspUrl", "rtspUserName", "rtspPassword"}
        assert len(module.calls) == 10


class TestMain:
    def test_list_topologies(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert entry.main(["--list-topologies"]) == 0
        catalog = json.loads(capsys.readouterr().out)
        assert set(catalog) == {kind.value for kind in TopologyKind}
        assert catalog["motion-detection"]["name"] == "MotionDetection"

    def test_missing_configuration(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        env_file = tmp_path / "empty.env"
        env_file.write_text("")
        assert entry.main(["--env-file", str(env_file), "--topology", "motion-detection"]) == 1
        assert "C2D_IOTHUB_CONNECTION_STRING is not set" in capsys.readouterr().out

    def test_transport_error_reported_once(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        env_file = tmp_path / "console.env"
        env_file.write_text("")

        class BrokenClient:
            @classmethod
            def from_settings(cls, settings):
                return cls()

            def invoke(self, request):
                raise TransportError("connection reset", request.method_name)

        monkeypatch.setattr(entry, "IoTHubDirectMethodClient", BrokenClient)
        monkeypatch.setattr(entry, "ParameterPrompter", lambda: ParameterPrompter(read_line=lambda _p="": ""))

        code = entry.main(["--env-file", str(env_file), "--topology", "motion-detection", "--no-pause"])
        out = capsys.readouterr().out
        assert code == 1
        assert out.count("GraphTopologyList: connection reset") == 1
        assert "GraphTopologySet" not in out.replace("Executing operation GraphTopologyList", "")

    @pytest.fixture
    def offline_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> str:
        env_file = tmp_path / "console.env"
        env_file.write_text("")

        class IdleClient:
            @classmethod
            def from_settings(cls, settings):
                return cls()

            def invoke(self, request):
                return MethodResult(request.method_name, 200, {})

        monkeypatch.setattr(entry, "IoTHubDirectMethodClient", IdleClient)
        return str(env_file)

    def test_closed_stdin_at_menu(
        self, monkeypatch: pytest.MonkeyPatch, offline_env: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert entry.main(["--env-file", offline_env]) == 1
        out = capsys.readouterr().out
        assert "Input closed, stopping." in out
        assert "Traceback" not in out

    def test_unexpected_error_reported_once(
        self, monkeypatch: pytest.MonkeyPatch, offline_env: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def broken(kind):
            raise OSError("terminal unavailable")

        monkeypatch.setattr(entry, "build_topology", broken)
        assert entry.main(["--env-file", offline_env, "--topology", "motion-detection"]) == 1
        assert capsys.readouterr().out.count("Unexpected error: terminal unavailable") == 1
