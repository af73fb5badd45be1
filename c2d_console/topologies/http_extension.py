"""
Inferencing through an HTTP Extension

    rtspSource ──▶ frameRateFilter ──▶ httpExtension ──▶ hubSink

Frames are throttled, scaled, BMP encoded and posted to an external
inference server (e.g. yolov3); its results are published to IoT Hub.
"""

from __future__ import annotations

from c2d_console.common.schemas import (
    FrameRateFilterProcessor,
    HttpExtension,
    Image,
    ImageFormatBmp,
    ImageScale,
    IoTHubMessageSink,
    TopologyDefinition,
    UnsecuredEndpoint,
    node_inputs,
)
from c2d_console.topologies.common import (
    credentials,
    placeholder,
    rtsp_parameters,
    rtsp_source,
    secret_parameter,
    string_parameter,
)

NAME = "InferencingWithHttpExtension"


def build() -> TopologyDefinition:
    return TopologyDefinition(
        name=NAME,
        description="Analyzing live video using HTTP Extension to send images to an external inference engine",
        parameters=[
            *rtsp_parameters(),
            string_parameter("inferencingUrl", "inferencing Url", "http://yolov3/score"),
            string_parameter("inferencingUserName", "inferencing endpoint user name.", "dummyUserName"),
            secret_parameter("inferencingPassword", "inferencing endpoint password.", "dummyPassword"),
            string_parameter("imageScaleMode", "image scaling mode", "preserveAspectRatio"),
            string_parameter("frameWidth", "Width of the video frame to be received from LVA.", "416"),
            string_parameter("frameHeight", "Height of the video frame to be received from LVA.", "416"),
            string_parameter("frameRate", "Rate of the frames per second to be received from LVA.", "2"),
        ],
        sources=[rtsp_source()],
        processors=[
            FrameRateFilterProcessor(
                name="frameRateFilter",
                inputs=node_inputs("rtspSource"),
                maximum_fps=placeholder("frameRate"),
            ),
            HttpExtension(
                name="httpExtension",
                inputs=node_inputs("frameRateFilter"),
                endpoint=UnsecuredEndpoint(
                    url=placeholder("inferencingUrl"),
                    credentials=credentials("inferencingUserName", "inferencingPassword"),
                ),
                image=Image(
                    scale=ImageScale(
                        mode=placeholder("imageScaleMode"),
                        width=placeholder("frameWidth"),
                        height=placeholder("frameHeight"),
                    ),
                    format=ImageFormatBmp(),
                ),
            ),
        ],
        sinks=[
            IoTHubMessageSink(
                name="hubSink",
                inputs=node_inputs("httpExtension"),
                hub_output_name="inferenceOutput",
            )
        ],
    )
