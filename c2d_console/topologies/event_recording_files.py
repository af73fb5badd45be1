"""
Event-based Video Recording to local files

    rtspSource ──▶ motionDetection ──▶ signalGateProcessor ──▶ fileSink
         └───────────────────────────────────▲

Motion opens the signal gate; the gated clip lands under ``/var/media`` on
the edge device.
"""

from __future__ import annotations

from c2d_console.common.schemas import (
    FileSink,
    MotionDetectionProcessor,
    SignalGateProcessor,
    TopologyDefinition,
    node_inputs,
)
from c2d_console.topologies.common import placeholder, rtsp_parameters, rtsp_source, string_parameter

NAME = "EventsToFilesMotionDetection"


def build() -> TopologyDefinition:
    return TopologyDefinition(
        name=NAME,
        description="Event - based video recording to local files based on motion events",
        parameters=[
            *rtsp_parameters(),
            string_parameter("motionSensitivity", "motion detection sensitivity", "medium"),
            string_parameter("fileSinkOutputName", "file sink output name", "filesinkOutput"),
        ],
        sources=[rtsp_source()],
        processors=[
            MotionDetectionProcessor(
                name="motionDetection",
                inputs=node_inputs("rtspSource"),
                sensitivity=placeholder("motionSensitivity"),
            ),
            SignalGateProcessor(
                name="signalGateProcessor",
                inputs=node_inputs("motionDetection", "rtspSource"),
                activation_evaluation_window="PT1S",
                activation_signal_offset="PT0S",
                minimum_activation_time="PT5S",
                maximum_activation_time="PT5S",
            ),
        ],
        sinks=[
            FileSink(
                name="fileSink",
                inputs=node_inputs("signalGateProcessor"),
                base_directory_path="/var/media",
                file_name_pattern="sampleFilesFromEVR-${fileSinkOutputName}-${System.DateTime}",
                maximum_size_mib="512",
            )
        ],
    )
