"""
Screen document model
Schema, codec and version gate for server-driven screens
"""

from .models import Component, ComponentType, Screen, CONTAINER_TYPES
from .codec import ScreenDecoder, decode_screen, encode_screen, validate_component
from .version import GateState, VersionGate, MIN_SUPPORTED_VERSION, MAX_SUPPORTED_VERSION

__all__ = [
    "Component",
    "ComponentType",
    "Screen",
    "CONTAINER_TYPES",
    "ScreenDecoder",
    "decode_screen",
    "encode_screen",
    "validate_component",
    "GateState",
    "VersionGate",
    "MIN_SUPPORTED_VERSION",
    "MAX_SUPPORTED_VERSION",
]
