"""
C2D Console — Pydantic Media Graph Schemas

Strict type-safe models for the media graph topology and instance documents
exchanged with the edge module. Field aliases follow the module's camelCase
JSON, node variants are discriminated by their ``@type`` URI.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

_NS = "#Microsoft.Media."


# ─── Enums ────────────────────────────────────────────────────────────────────

class ParameterType(str, Enum):
    STRING = "String"
    SECRET_STRING = "SecretString"
    INT = "Int"
    DOUBLE = "Double"
    BOOL = "Bool"


class MotionSensitivity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ─── Base ─────────────────────────────────────────────────────────────────────

class GraphModel(BaseModel):
    """camelCase on the wire, snake_case in Python, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


# ─── Value Objects ────────────────────────────────────────────────────────────

class ParameterDeclaration(GraphModel):
    name: str = Field(..., min_length=1)
    type: ParameterType
    description: Optional[str] = None
    default: Optional[str] = None

    @property
    def is_secret(self) -> bool:
        return self.type == ParameterType.SECRET_STRING


class NodeInput(GraphModel):
    node_name: str = Field(..., min_length=1)


def node_inputs(*names: str) -> list[NodeInput]:
    return [NodeInput(node_name=name) for name in names]


class UsernamePasswordCredentials(GraphModel):
    type: Literal["#Microsoft.Media.MediaGraphUsernamePasswordCredentials"] = Field(
        default=_NS + "MediaGraphUsernamePasswordCredentials", alias="@type"
    )
    username: str
    password: Optional[str] = None


class UnsecuredEndpoint(GraphModel):
    type: Literal["#Microsoft.Media.MediaGraphUnsecuredEndpoint"] = Field(
        default=_NS + "MediaGraphUnsecuredEndpoint", alias="@type"
    )
    url: str
    credentials: Optional[UsernamePasswordCredentials] = None


class ImageScale(GraphModel):
    mode: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None


class ImageFormatBmp(GraphModel):
    type: Literal["#Microsoft.Media.MediaGraphImageFormatBmp"] = Field(
        default=_NS + "MediaGraphImageFormatBmp", alias="@type"
    )


class ImageFormatJpeg(GraphModel):
    type: Literal["#Microsoft.Media.MediaGraphImageFormatJpeg"] = Field(
        default=_NS + "MediaGraphImageFormatJpeg", alias="@type"
    )
    quality: Optional[str] = None


def _type_tag(value: Any) -> Optional[str]:
    """``@type`` of a raw document or ``type`` of an already built model."""
    if isinstance(value, dict):
        return value.get("@type", value.get("type"))
    return getattr(value, "type", None)


ImageFormat = Annotated[
    Union[
        Annotated[ImageFormatBmp, Tag(_NS + "MediaGraphImageFormatBmp")],
        Annotated[ImageFormatJpeg, Tag(_NS + "MediaGraphImageFormatJpeg")],
    ],
    Discriminator(_type_tag),
]


class Image(GraphModel):
    scale: Optional[ImageScale] = None
    format: Optional[ImageFormat] = None


# ─── Graph Nodes ──────────────────────────────────────────────────────────────

class GraphNode(GraphModel):
    """A named processing unit. Upstream links are by node name only."""

    name: str = Field(..., min_length=1)

    @property
    def input_names(self) -> list[str]:
        return [item.node_name for item in getattr(self, "inputs", ())]


class ConnectedNode(GraphNode):
    """Processors and sinks: fed by at least one earlier node."""

    inputs: list[NodeInput] = Field(..., min_length=1)


# Sources

class RtspSource(GraphNode):
    type: Literal["#Microsoft.Media.MediaGraphRtspSource"] = Field(
        default=_NS + "MediaGraphRtspSource", alias="@type"
    )
    endpoint: UnsecuredEndpoint
    transport: Optional[str] = None


class IoTHubMessageSource(GraphNode):
    type: Literal["#Microsoft.Media.MediaGraphIoTHubMessageSource"] = Field(
        default=_NS + "MediaGraphIoTHubMessageSource", alias="@type"
    )
    hub_input_name: Optional[str] = None


# Processors

class MotionDetectionProcessor(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphMotionDetectionProcessor"] = Field(
        default=_NS + "MediaGraphMotionDetectionProcessor", alias="@type"
    )
    sensitivity: Optional[str] = None
    output_motion_region: Optional[bool] = None


class SignalGateProcessor(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphSignalGateProcessor"] = Field(
        default=_NS + "MediaGraphSignalGateProcessor", alias="@type"
    )
    activation_evaluation_window: Optional[str] = None
    activation_signal_offset: Optional[str] = None
    minimum_activation_time: Optional[str] = None
    maximum_activation_time: Optional[str] = None


class FrameRateFilterProcessor(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphFrameRateFilterProcessor"] = Field(
        default=_NS + "MediaGraphFrameRateFilterProcessor", alias="@type"
    )
    maximum_fps: Optional[str] = None


class HttpExtension(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphHttpExtension"] = Field(
        default=_NS + "MediaGraphHttpExtension", alias="@type"
    )
    endpoint: UnsecuredEndpoint
    image: Image


# Sinks

class AssetSink(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphAssetSink"] = Field(
        default=_NS + "MediaGraphAssetSink", alias="@type"
    )
    asset_name_pattern: str
    segment_length: Optional[str] = None
    local_media_cache_path: str
    local_media_cache_maximum_size_mib: str = Field(
        ..., alias="localMediaCacheMaximumSizeMiB"
    )


class FileSink(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphFileSink"] = Field(
        default=_NS + "MediaGraphFileSink", alias="@type"
    )
    base_directory_path: str
    file_name_pattern: str
    maximum_size_mib: str = Field(..., alias="maximumSizeMiB")


class IoTHubMessageSink(ConnectedNode):
    type: Literal["#Microsoft.Media.MediaGraphIoTHubMessageSink"] = Field(
        default=_NS + "MediaGraphIoTHubMessageSink", alias="@type"
    )
    hub_output_name: str


Source = Annotated[
    Union[
        Annotated[RtspSource, Tag(_NS + "MediaGraphRtspSource")],
        Annotated[IoTHubMessageSource, Tag(_NS + "MediaGraphIoTHubMessageSource")],
    ],
    Discriminator(_type_tag),
]
Processor = Annotated[
    Union[
        Annotated[MotionDetectionProcessor, Tag(_NS + "MediaGraphMotionDetectionProcessor")],
        Annotated[SignalGateProcessor, Tag(_NS + "MediaGraphSignalGateProcessor")],
        Annotated[FrameRateFilterProcessor, Tag(_NS + "MediaGraphFrameRateFilterProcessor")],
        Annotated[HttpExtension, Tag(_NS + "MediaGraphHttpExtension")],
    ],
    Discriminator(_type_tag),
]
Sink = Annotated[
    Union[
        Annotated[AssetSink, Tag(_NS + "MediaGraphAssetSink")],
        Annotated[FileSink, Tag(_NS + "MediaGraphFileSink")],
        Annotated[IoTHubMessageSink, Tag(_NS + "MediaGraphIoTHubMessageSink")],
    ],
    Discriminator(_type_tag),
]


# ─── Domain Models ────────────────────────────────────────────────────────────

class TopologyDefinition(GraphModel):
    """
    A named, reusable media graph: parameter declarations plus ordered
    sources, processors and sinks.

    Construction fails unless parameter and node names are unique and every
    node input names a node declared earlier (sources, then processors, then
    sinks, each in list order). That ordering keeps the graph acyclic.
    """

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: list[ParameterDeclaration] = Field(default_factory=list)
    sources: list[Source] = Field(default_factory=list)
    processors: list[Processor] = Field(default_factory=list)
    sinks: list[Sink] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_graph(self) -> TopologyDefinition:
        declared: set[str] = set()
        for parameter in self.parameters:
            if parameter.name in declared:
                raise ValueError(f"duplicate parameter '{parameter.name}'")
            declared.add(parameter.name)

        defined: set[str] = set()
        for node in self.nodes:
            for ref in node.input_names:
                if ref not in defined:
                    raise ValueError(
                        f"node '{node.name}' references '{ref}', "
                        "which is not defined before it"
                    )
            if node.name in defined:
                raise ValueError(f"duplicate node '{node.name}'")
            defined.add(node.name)
        return self

    @property
    def nodes(self) -> list[GraphNode]:
        return [*self.sources, *self.processors, *self.sinks]

    def node(self, name: str) -> Optional[GraphNode]:
        return next((n for n in self.nodes if n.name == name), None)

    def parameter(self, name: str) -> Optional[ParameterDeclaration]:
        return next((p for p in self.parameters if p.name == name), None)

    @property
    def secret_parameter_names(self) -> frozenset[str]:
        return frozenset(p.name for p in self.parameters if p.is_secret)


class TopologyInstance(GraphModel):
    """A concrete, parameterized deployment of a topology."""

    name: str = Field(..., min_length=1)
    topology_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: dict[str, str] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def _parameters_from_list(cls, value: Any) -> Any:
        # Wire form is [{"name": ..., "value": ...}]
        if isinstance(value, list):
            parameters = {}
            for item in value:
                if not isinstance(item, dict) or "name" not in item:
                    raise ValueError(f"parameter entry without a name: {item!r}")
                parameters[item["name"]] = item.get("value", "")
            return parameters
        return value

    @field_serializer("parameters")
    def _parameters_to_list(self, parameters: dict[str, str]) -> list[dict[str, str]]:
        return [{"name": name, "value": value} for name, value in parameters.items()]

    def with_parameter(self, name: str, value: str) -> TopologyInstance:
        return self.model_copy(update={"parameters": {**self.parameters, name: value}})
