"""
C2D Console — IoT Hub Direct Method Client

Delivers media graph requests to the edge module through the IoT Hub
service REST API (``POST /twins/{device}/modules/{module}/methods``).

IoT Hub answers HTTP 200 with ``{"status": ..., "payload": ...}`` whenever
the module ran the method, even if the module reports an error status.
Anything else (no connectivity, HTTP error, unreadable body) is a
TransportError.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, quote_plus

import requests

from c2d_console.common.errors import ConfigurationError, TransportError
from c2d_console.common.logger import get_logger
from c2d_console.config import ConsoleSettings
from c2d_console.edge.direct_methods import MethodRequest, MethodResult

logger = get_logger(__name__)

_TOKEN_TTL_S = 3600


@dataclass(frozen=True)
class ConnectionString:
    host_name: str
    key_name: str
    key: str

    @classmethod
    def parse(cls, value: str) -> ConnectionString:
        """Parse ``HostName=...;SharedAccessKeyName=...;SharedAccessKey=...``."""
        parts: dict[str, str] = {}
        for segment in value.split(";"):
            if not segment.strip():
                continue
            key, sep, val = segment.partition("=")
            if not sep:
                raise ConfigurationError(f"Malformed connection string segment: {key!r}")
            parts[key.strip()] = val

        missing = [k for k in ("HostName", "SharedAccessKeyName", "SharedAccessKey") if not parts.get(k)]
        if missing:
            raise ConfigurationError(
                f"Connection string is missing {', '.join(missing)}"
            )
        return cls(
            host_name=parts["HostName"],
            key_name=parts["SharedAccessKeyName"],
            key=parts["SharedAccessKey"],
        )


def generate_sas_token(
    resource_uri: str,
    key: str,
    key_name: str,
    ttl_s: int = _TOKEN_TTL_S,
    now: Optional[float] = None,
) -> str:
    """Shared access signature for ``resource_uri`` signed with HMAC-SHA256."""
    expiry = int((time.time() if now is None else now) + ttl_s)
    encoded_uri = quote_plus(resource_uri)
    to_sign = f"{encoded_uri}\n{expiry}".encode("utf-8")
    try:
        secret = base64.b64decode(key, validate=True)
    except ValueError as exc:
        raise ConfigurationError("SharedAccessKey is not valid base64") from exc
    signature = base64.b64encode(hmac.new(secret, to_sign, hashlib.sha256).digest())
    return (
        f"SharedAccessSignature sr={encoded_uri}"
        f"&sig={quote_plus(signature.decode('utf-8'))}"
        f"&se={expiry}&skn={key_name}"
    )


class IoTHubDirectMethodClient:
    """
    Invoke direct methods on one device module.

    Parameters
    ----------
    connection_string : str
        IoT Hub service connection string (``service`` or ``iothubowner`` policy).
    device_id, module_id : str
        Target edge device and the media graph module on it.
    response_timeout_s : int
        How long IoT Hub waits for the module to answer.
    connect_timeout_s : int
        How long IoT Hub waits for the device to connect; 0 means it must be online.
    http_timeout_s : float
        Client-side socket timeout; must exceed the hub-side timeouts.
    """

    def __init__(
        self,
        connection_string: str,
        device_id: str,
        module_id: str,
        api_version: str = "2021-04-12",
        response_timeout_s: int = 30,
        connect_timeout_s: int = 0,
        http_timeout_s: float = 60.0,
    ) -> None:
        self._connection = ConnectionString.parse(connection_string)
        self.device_id = device_id
        self.module_id = module_id
        self._api_version = api_version
        self._response_timeout_s = response_timeout_s
        self._connect_timeout_s = connect_timeout_s
        self._http_timeout_s = http_timeout_s

    @classmethod
    def from_settings(cls, settings: ConsoleSettings) -> IoTHubDirectMethodClient:
        if settings.iothub_connection_string is None:
            raise ConfigurationError("C2D_IOTHUB_CONNECTION_STRING is not set")
        if not settings.device_id:
            raise ConfigurationError("C2D_DEVICE_ID is not set")
        if not settings.module_id:
            raise ConfigurationError("C2D_MODULE_ID is not set")
        return cls(
            connection_string=settings.iothub_connection_string.get_secret_value(),
            device_id=settings.device_id,
            module_id=settings.module_id,
            api_version=settings.iothub_api_version,
            response_timeout_s=settings.method_response_timeout_s,
            connect_timeout_s=settings.method_connect_timeout_s,
            http_timeout_s=settings.http_timeout_s,
        )

    # ── Public API ─────────────────────────────────────────────────────────────

    @property
    def endpoint(self) -> str:
        return (
            f"https://{self._connection.host_name}"
            f"/twins/{quote(self.device_id, safe='')}"
            f"/modules/{quote(self.module_id, safe='')}/methods"
        )

    def invoke(self, request: MethodRequest) -> MethodResult:
        body = {
            "methodName": request.method_name,
            "responseTimeoutInSeconds": self._response_timeout_s,
            "connectTimeoutInSeconds": self._connect_timeout_s,
            "payload": request.payload,
        }
        context = {
            "method": request.method_name,
            "device_id": self.device_id,
            "module_id": self.module_id,
        }
        logger.info("Invoking direct method", extra={"context": context})

        try:
            response = requests.post(
                self.endpoint,
                params={"api-version": self._api_version},
                json=body,
                headers={"Authorization": self._token()},
                timeout=self._http_timeout_s,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Direct method request failed: {exc}", request.method_name) from exc

        if response.status_code != 200:
            raise TransportError(
                f"IoT Hub returned HTTP {response.status_code}: {response.text}",
                request.method_name,
            )

        try:
            reply = response.json()
            status = int(reply["status"])
        except (ValueError, KeyError, TypeError) as exc:
            raise TransportError(f"Unreadable direct method reply: {exc}", request.method_name) from exc

        logger.info(
            "Direct method completed",
            extra={"context": {**context, "status": status}},
        )
        return MethodResult(request.method_name, status, reply.get("payload"))

    # ── Internal ───────────────────────────────────────────────────────────────

    def _token(self) -> str:
        return generate_sas_token(
            self._connection.host_name,
            self._connection.key,
            self._connection.key_name,
        )
