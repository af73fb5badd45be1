"""
C2D Console — Media Graph Direct Methods

Requests understood by the media graph edge module, their results, and a
thin client exposing one call per lifecycle operation. The transport that
delivers a request is pluggable (see ``iothub_client``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from c2d_console.common.logger import get_logger
from c2d_console.common.schemas import GraphModel, TopologyDefinition, TopologyInstance

logger = get_logger(__name__)

API_VERSION = "2.0"

ModelT = TypeVar("ModelT", TopologyDefinition, TopologyInstance)


@dataclass(frozen=True)
class MethodRequest:
    method_name: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MethodResult:
    """Reply of a direct method. ``status`` >= 400 is an application error."""

    method_name: str
    status: int
    payload: Any = None

    @property
    def is_error(self) -> bool:
        return self.status >= 400


class DirectMethodInvoker(Protocol):
    def invoke(self, request: MethodRequest) -> MethodResult: ...


# ─── Payload envelope ─────────────────────────────────────────────────────────

def envelope(model: GraphModel) -> dict[str, Any]:
    """Flat model → ``{"name": ..., "properties": {...}}`` as the module expects."""
    body = model.model_dump(mode="json", by_alias=True, exclude_none=True)
    name = body.pop("name")
    return {"name": name, "properties": body}


def unwrap(item: dict[str, Any]) -> dict[str, Any]:
    properties = item.get("properties") or {}
    return {"name": item.get("name"), **properties}


def _request(method_name: str, **payload: Any) -> MethodRequest:
    return MethodRequest(method_name, {"@apiVersion": API_VERSION, **payload})


def topology_list_request() -> MethodRequest:
    return _request("GraphTopologyList")


def topology_set_request(topology: TopologyDefinition) -> MethodRequest:
    return _request("GraphTopologySet", **envelope(topology))


def topology_delete_request(name: str) -> MethodRequest:
    return _request("GraphTopologyDelete", name=name)


def instance_list_request() -> MethodRequest:
    return _request("GraphInstanceList")


def instance_set_request(instance: TopologyInstance) -> MethodRequest:
    return _request("GraphInstanceSet", **envelope(instance))


def instance_activate_request(name: str) -> MethodRequest:
    return _request("GraphInstanceActivate", name=name)


def instance_deactivate_request(name: str) -> MethodRequest:
    return _request("GraphInstanceDeactivate", name=name)


def instance_delete_request(name: str) -> MethodRequest:
    return _request("GraphInstanceDelete", name=name)


# ─── Result parsing ───────────────────────────────────────────────────────────

def _items(result: MethodResult) -> list[dict[str, Any]]:
    if result.is_error or not isinstance(result.payload, dict):
        return []
    return list(result.payload.get("value") or [])


def _parse(model: type[ModelT], result: MethodResult) -> list[ModelT]:
    parsed: list[ModelT] = []
    for item in _items(result):
        try:
            parsed.append(model.model_validate(unwrap(item)))
        except ValidationError as exc:
            # Graphs deployed by other tools may use node types not modeled here.
            context = {
                "method": result.method_name,
                "name": item.get("name"),
                "errors": exc.error_count(),
            }
            logger.warning("Skipping unreadable list entry", extra={"context": context})
    return parsed


def parse_topologies(result: MethodResult) -> list[TopologyDefinition]:
    return _parse(TopologyDefinition, result)


def parse_instances(result: MethodResult) -> list[TopologyInstance]:
    return _parse(TopologyInstance, result)


# ─── Client ───────────────────────────────────────────────────────────────────

class MediaGraphClient:
    """One method per remote lifecycle operation; each is a single request."""

    def __init__(self, invoker: DirectMethodInvoker) -> None:
        self._invoker = invoker

    def list_topologies(self) -> MethodResult:
        return self._invoker.invoke(topology_list_request())

    def set_topology(self, topology: TopologyDefinition) -> MethodResult:
        return self._invoker.invoke(topology_set_request(topology))

    def delete_topology(self, name: str) -> MethodResult:
        return self._invoker.invoke(topology_delete_request(name))

    def list_instances(self) -> MethodResult:
        return self._invoker.invoke(instance_list_request())

    def set_instance(self, instance: TopologyInstance) -> MethodResult:
        return self._invoker.invoke(instance_set_request(instance))

    def activate_instance(self, name: str) -> MethodResult:
        return self._invoker.invoke(instance_activate_request(name))

    def deactivate_instance(self, name: str) -> MethodResult:
        return self._invoker.invoke(instance_deactivate_request(name))

    def delete_instance(self, name: str) -> MethodResult:
        return self._invoker.invoke(instance_delete_request(name))

    def topologies(self) -> list[TopologyDefinition]:
        return parse_topologies(self.list_topologies())

    def instances(self) -> list[TopologyInstance]:
        return parse_instances(self.list_instances())
