"""
C2D Console — Error Taxonomy

Application-level remote errors (status >= 400 in a direct-method reply)
are reported, not raised. Only configuration and channel faults are
exceptions.
"""

from __future__ import annotations


class C2DConsoleError(Exception):
    """Base class for every error raised by the console."""


class ConfigurationError(C2DConsoleError):
    """Settings are missing or malformed (connection string, device id...)."""


class TransportError(C2DConsoleError):
    """The direct-method channel failed: connectivity, HTTP or decoding fault."""

    def __init__(self, message: str, method_name: str | None = None) -> None:
        super().__init__(message)
        self.method_name = method_name

    def __str__(self) -> str:
        base = super().__str__()
        if self.method_name:
            return f"{self.method_name}: {base}"
        return base
