"""
Pieces every catalog topology shares: the camera parameters and the RTSP
source wired to them.

``${name}`` tokens are resolved by the edge module from instance parameters,
never by this code.
"""

from __future__ import annotations

from c2d_console.common.schemas import (
    ParameterDeclaration,
    ParameterType,
    RtspSource,
    UnsecuredEndpoint,
    UsernamePasswordCredentials,
)

RTSP_URL = "rtspUrl"
RTSP_USER_NAME = "rtspUserName"
RTSP_PASSWORD = "rtspPassword"

LOCAL_MEDIA_CACHE_PATH = "/var/lib/azuremediaservices/tmp/"
LOCAL_MEDIA_CACHE_MAX_MIB = "2048"


def placeholder(name: str) -> str:
    return "${" + name + "}"


def string_parameter(
    name: str, description: str, default: str | None = None
) -> ParameterDeclaration:
    return ParameterDeclaration(
        name=name, type=ParameterType.STRING, description=description, default=default
    )


def secret_parameter(
    name: str, description: str, default: str | None = None
) -> ParameterDeclaration:
    return ParameterDeclaration(
        name=name,
        type=ParameterType.SECRET_STRING,
        description=description,
        default=default,
    )


def rtsp_parameters() -> list[ParameterDeclaration]:
    return [
        string_parameter(RTSP_USER_NAME, "rtsp source user name.", "dummyUserName"),
        secret_parameter(RTSP_PASSWORD, "rtsp source password.", "dummyPassword"),
        string_parameter(RTSP_URL, "rtsp Url"),
    ]


def credentials(user_parameter: str, password_parameter: str) -> UsernamePasswordCredentials:
    return UsernamePasswordCredentials(
        username=placeholder(user_parameter),
        password=placeholder(password_parameter),
    )


def rtsp_source(name: str = "rtspSource") -> RtspSource:
    return RtspSource(
        name=name,
        endpoint=UnsecuredEndpoint(
            url=placeholder(RTSP_URL),
            credentials=credentials(RTSP_USER_NAME, RTSP_PASSWORD),
        ),
    )
