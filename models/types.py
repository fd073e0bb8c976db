"""Type definitions for Hue Lights.

This module provides TypedDict definitions for structured data types used across
the application, improving type safety and IDE autocompletion.
"""

from typing import TypedDict


class DiscoveredBridge(TypedDict):
    """Bridge information from N-UPnP discovery."""
    id: str
    internalipaddress: str
    name: str | None


class Light(TypedDict):
    """A light as reported by the bridge (v1 API)."""
    id: int
    name: str
    on: bool
    hue: int | None
