"""
C2D Console — Graph Instance Builder

Combines a topology with the camera coordinates into a graph instance.
When the camera is not fully configured the RTSP simulator shipped with the
edge deployment is used instead.
"""

from __future__ import annotations

from typing import Optional

from c2d_console.common.logger import get_logger
from c2d_console.common.schemas import TopologyDefinition, TopologyInstance
from c2d_console.topologies.common import RTSP_PASSWORD, RTSP_URL, RTSP_USER_NAME

logger = get_logger(__name__)

SIMULATOR_RTSP_URL = "rtsp://rtspsim:554/media/camera-300s.mkv"
SIMULATOR_USER_NAME = "testuser"
SIMULATOR_PASSWORD = "testpassword"

DEFAULT_INSTANCE_NAME = "Sample-Graph-1"
DEFAULT_INSTANCE_DESCRIPTION = "Sample graph description"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def build_instance(
    topology: TopologyDefinition,
    rtsp_url: Optional[str],
    rtsp_user_name: Optional[str],
    rtsp_password: Optional[str],
    name: str = DEFAULT_INSTANCE_NAME,
    description: str = DEFAULT_INSTANCE_DESCRIPTION,
) -> TopologyInstance:
    """
    Seed a graph instance of ``topology`` with ``rtspUrl``, ``rtspUserName``
    and ``rtspPassword``.

    If any of the three camera values is blank, all three are replaced by the
    simulator triple so the sample still runs end to end.
    """
    if _blank(rtsp_url) or _blank(rtsp_user_name) or _blank(rtsp_password):
        logger.warning(
            "Camera settings incomplete, using the RTSP simulator",
            extra={"context": {"rtsp_url": SIMULATOR_RTSP_URL}},
        )
        rtsp_url, rtsp_user_name, rtsp_password = (
            SIMULATOR_RTSP_URL,
            SIMULATOR_USER_NAME,
            SIMULATOR_PASSWORD,
        )

    return TopologyInstance(
        name=name,
        topology_name=topology.name,
        description=description,
        parameters={
            RTSP_URL: rtsp_url,
            RTSP_USER_NAME: rtsp_user_name,
            RTSP_PASSWORD: rtsp_password,
        },
    )
