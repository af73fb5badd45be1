"""
Motion Detection

    rtspSource ──▶ motionDetection ──▶ hubSink

Emits motion events to IoT Hub; nothing is recorded.
"""

from __future__ import annotations

from c2d_console.common.schemas import (
    IoTHubMessageSink,
    MotionDetectionProcessor,
    MotionSensitivity,
    TopologyDefinition,
    node_inputs,
)
from c2d_console.topologies.common import rtsp_parameters, rtsp_source

NAME = "MotionDetection"


def build() -> TopologyDefinition:
    return TopologyDefinition(
        name=NAME,
        description="Analyzing live video to detect motion and emit events",
        parameters=rtsp_parameters(),
        sources=[rtsp_source()],
        processors=[
            MotionDetectionProcessor(
                name="motionDetection",
                inputs=node_inputs("rtspSource"),
                sensitivity=MotionSensitivity.MEDIUM.value,
            )
        ],
        sinks=[
            IoTHubMessageSink(
                name="hubSink",
                inputs=node_inputs("motionDetection"),
                hub_output_name="inferenceOutput",
            )
        ],
    )
