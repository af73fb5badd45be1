"""
Continuous Video Recording

    rtspSource ──▶ assetSink

Records the camera into Media Services assets in 30 second segments.
Needs the media graph edge module and an RTSP camera (or the simulator).
"""

from __future__ import annotations

from c2d_console.common.schemas import AssetSink, TopologyDefinition, node_inputs
from c2d_console.topologies.common import (
    LOCAL_MEDIA_CACHE_MAX_MIB,
    LOCAL_MEDIA_CACHE_PATH,
    rtsp_parameters,
    rtsp_source,
)

NAME = "ContinuousRecording"
SEGMENT_LENGTH = "PT30S"


def build() -> TopologyDefinition:
    return TopologyDefinition(
        name=NAME,
        description="Continuous video recording to an Azure Media Services Asset",
        parameters=rtsp_parameters(),
        sources=[rtsp_source()],
        sinks=[
            AssetSink(
                name="assetSink",
                inputs=node_inputs("rtspSource"),
                asset_name_pattern="sampleAsset-${System.GraphTopologyName}-${System.GraphInstanceName}",
                segment_length=SEGMENT_LENGTH,
                local_media_cache_path=LOCAL_MEDIA_CACHE_PATH,
                local_media_cache_maximum_size_mib=LOCAL_MEDIA_CACHE_MAX_MIB,
            )
        ],
    )
