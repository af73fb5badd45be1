"""
Event-based Video Recording to Media Services assets, triggered through IoT Hub

    rtspSource ──┬──▶ inferenceClient ──▶ hubSink
                 └──▶ signalGateProcessor ──▶ assetSink
    iotMessageSource ──▲

Frames go to an HTTP inference server whose detections leave through
``hubSink``. A downstream module (e.g. an object counter) routes a message
back into ``iotMessageSource``, which opens the gate and records an asset.
"""

from __future__ import annotations

from c2d_console.common.schemas import (
    AssetSink,
    HttpExtension,
    Image,
    ImageFormatBmp,
    ImageScale,
    IoTHubMessageSink,
    IoTHubMessageSource,
    SignalGateProcessor,
    TopologyDefinition,
    UnsecuredEndpoint,
    node_inputs,
)
from c2d_console.topologies.common import (
    LOCAL_MEDIA_CACHE_MAX_MIB,
    LOCAL_MEDIA_CACHE_PATH,
    credentials,
    placeholder,
    rtsp_parameters,
    rtsp_source,
    secret_parameter,
    string_parameter,
)

NAME = "EventsToAssetsWithHttpExtension"


def build() -> TopologyDefinition:
    return TopologyDefinition(
        name=NAME,
        description=(
            "Event-based recording to an Azure Media Services Asset, triggered "
            "by IoT Hub messages about objects detected through HTTP Extension"
        ),
        parameters=[
            *rtsp_parameters(),
            string_parameter("hubSourceInput", "input name for hub source", "recordingTrigger"),
            string_parameter("inferencingUrl", "inferencing Url", "http://yolov3/score"),
            string_parameter("inferencingUserName", "inferencing endpoint user name.", "dummyUserName"),
            secret_parameter("inferencingPassword", "inferencing endpoint password.", "dummyPassword"),
            string_parameter("imageScaleMode", "image scaling mode", "preserveAspectRatio"),
            string_parameter("frameWidth", "Width of the video frame to be received from LVA.", "416"),
            string_parameter("frameHeight", "Height of the video frame to be received from LVA.", "416"),
            string_parameter("hubSinkOutputName", "hub sink output name", "detectedObjects"),
        ],
        sources=[
            rtsp_source(),
            IoTHubMessageSource(
                name="iotMessageSource",
                hub_input_name=placeholder("hubSourceInput"),
            ),
        ],
        processors=[
            SignalGateProcessor(
                name="signalGateProcessor",
                inputs=node_inputs("iotMessageSource", "rtspSource"),
                activation_evaluation_window="PT1S",
                activation_signal_offset="-PT5S",
                minimum_activation_time="PT30S",
                maximum_activation_time="PT30S",
            ),
            HttpExtension(
                name="inferenceClient",
                inputs=node_inputs("rtspSource"),
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
                inputs=node_inputs("inferenceClient"),
                hub_output_name=placeholder("hubSinkOutputName"),
            ),
            AssetSink(
                name="assetSink",
                inputs=node_inputs("signalGateProcessor"),
                asset_name_pattern="sampleAssetFromEVR-LVAEdge-${System.DateTime}",
                segment_length="PT30S",
                local_media_cache_path=LOCAL_MEDIA_CACHE_PATH,
                local_media_cache_maximum_size_mib=LOCAL_MEDIA_CACHE_MAX_MIB,
            ),
        ],
    )
